"""
Window MUD client.

pygame front end for a session:
- Key presses go through the key translator into the line editor
- Game output scrolls in a pane above the input line
- The active advisory is drawn as a clickable banner
- The status tray runs along the bottom edge
"""

import asyncio
import re
from collections import deque
from typing import Deque, List, Optional, Tuple

import pygame

from .commands import LocalCommands
from .config import ClientConfig
from .core.event_bus import Event, EventType
from .errors import CapabilityUnavailable
from .input.keymap import KeyTranslator
from .logging_config import get_logger
from .session import Session
from .ui.colors import BANNER_COLORS, TAG_COLORS, Colors
from .ui.display import OUTPUT

logger = get_logger(__name__)

# Display constants
WINDOW_WIDTH = 960
WINDOW_HEIGHT = 640
FPS = 30
FONT_SIZE = 22
PADDING = 6

# Cursor movement and colour codes have no meaning in the pane
_CONTROL_SEQUENCE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def printable(text: str) -> str:
    """Strip what pygame cannot render from one line of text."""
    text = _CONTROL_SEQUENCE.sub("", text)
    text = text.replace("\t", "    ")
    return "".join(char for char in text if char.isprintable())


class OutputPane:
    """Display sink that keeps a scrollback of tagged lines."""

    def __init__(self, max_lines: int = 1000):
        self.lines: Deque[Tuple[str, str]] = deque(maxlen=max_lines)
        # Game output arrives in arbitrary chunks; the unfinished line waits here
        self.partial = ""
        self.scroll = 0

    def show(self, text: str, tag: str) -> None:
        if tag != OUTPUT:
            self._flush_partial()
            for line in text.split("\n"):
                self.lines.append((line, tag))
            return

        text = self.partial + text.replace("\r", "")
        *complete, self.partial = text.split("\n")
        for line in complete:
            self.lines.append((line, OUTPUT))

    def _flush_partial(self) -> None:
        if self.partial:
            self.lines.append((self.partial, OUTPUT))
            self.partial = ""

    def all_lines(self) -> List[Tuple[str, str]]:
        lines = list(self.lines)
        if self.partial:
            lines.append((self.partial, OUTPUT))
        return lines

    def visible(self, count: int) -> List[Tuple[str, str]]:
        """The ``count`` lines on screen at the current scroll offset, oldest first."""
        lines = self.all_lines()
        end = len(lines) - self.scroll
        return lines[max(0, end - count):end]

    def scroll_by(self, delta: int) -> None:
        """Scroll back (positive) or forward (negative), clamped to the scrollback."""
        limit = max(0, len(self.all_lines()) - 1)
        self.scroll = max(0, min(self.scroll + delta, limit))


class WindowClient:
    """Drives a Session from a pygame window."""

    def __init__(self, config: ClientConfig):
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("MUD Client")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, FONT_SIZE)
        self.line_height = self.font.get_linesize()

        self.output = OutputPane(config.interface.scrollback)
        self.session = Session(config, display=self.output)
        self.local = LocalCommands(self.session, on_quit=self.stop)
        self.keys = KeyTranslator(
            self.session.input,
            self.session.event_bus,
            config.key_bindings,
            submit_handler=self.local.submit_input,
        )
        self.running = True

        # Hit areas from the last frame
        self.banner_rect: Optional[pygame.Rect] = None
        self.button_rects: List[pygame.Rect] = []

        self.session.event_bus.subscribe(EventType.SCROLL_REQUESTED, self._on_scroll)
        self.session.input.focus()

    def stop(self) -> None:
        self.running = False

    @property
    def page_size(self) -> int:
        return max(1, self._output_area().height // self.line_height)

    def _on_scroll(self, event: Event) -> None:
        step = self.page_size - 1 or 1
        self.output.scroll_by(step if event.data["direction"] == "up" else -step)

    # -- events ------------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.stop()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(event.pos)
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.session.notifications.dismiss()
        else:
            self.keys.handle_event(event)

    def _handle_click(self, pos: Tuple[int, int]) -> None:
        for index, rect in enumerate(self.button_rects):
            if rect.collidepoint(pos):
                self.session.notifications.press_button(index)
                return
        if self.banner_rect is not None and self.banner_rect.collidepoint(pos):
            self.session.notifications.click()

    # -- rendering ---------------------------------------------------------

    def _row_height(self) -> int:
        return self.line_height + PADDING * 2

    def _output_area(self) -> pygame.Rect:
        width, height = self.screen.get_size()
        top = self._row_height() if self.session.notifications.active is not None else 0
        bottom = height - self._row_height() * 2
        return pygame.Rect(0, top, width, max(0, bottom - top))

    def _text(self, text: str, color, x: int, y: int) -> int:
        surface = self.font.render(printable(text), True, color)
        self.screen.blit(surface, (x, y))
        return surface.get_width()

    def draw(self) -> None:
        self.screen.fill(Colors.PANEL_BG)
        self._draw_output()
        self._draw_input()
        self._draw_tray()
        self._draw_banner()

    def _draw_output(self) -> None:
        area = self._output_area()
        y = area.top + PADDING
        for line, tag in self.output.visible(self.page_size):
            self._text(line, TAG_COLORS.get(tag, Colors.TEXT_WHITE), PADDING, y)
            y += self.line_height

        if self.output.scroll:
            marker = f"-- {self.output.scroll} more --"
            width = self.font.size(marker)[0]
            self._text(marker, Colors.TEXT_GRAY, area.right - width - PADDING, area.bottom - self.line_height)

    def _draw_input(self) -> None:
        width, height = self.screen.get_size()
        row = pygame.Rect(0, height - self._row_height() * 2, width, self._row_height())
        pygame.draw.rect(self.screen, Colors.SLOT_BG, row)
        pygame.draw.rect(self.screen, Colors.PANEL_BORDER, row, 1)

        controller = self.session.input
        if controller.is_masked:
            shown = "*" * len(controller.text)
            cursor = len(shown)
        else:
            # Multi-line blocks show their last line only
            text = controller.text
            start = text.rfind("\n", 0, controller.buffer.cursor) + 1
            end = text.find("\n", start)
            shown = text[start:] if end < 0 else text[start:end]
            cursor = controller.buffer.cursor - start

        x = PADDING
        y = row.top + PADDING
        self._text(shown, Colors.TEXT_WHITE, x, y)
        cursor_x = x + self.font.size(printable(shown[:cursor]))[0]
        pygame.draw.line(self.screen, Colors.TEXT_YELLOW, (cursor_x, y), (cursor_x, y + self.line_height - 2))

    def _draw_tray(self) -> None:
        width, height = self.screen.get_size()
        row = pygame.Rect(0, height - self._row_height(), width, self._row_height())
        pygame.draw.rect(self.screen, Colors.STONE_DARK, row)

        x = PADDING
        for icon in self.session.tray.icons():
            x += self._text(icon.text, Colors.TEXT_GRAY, x, row.top + PADDING) + PADDING * 4

    def _draw_banner(self) -> None:
        self.banner_rect = None
        self.button_rects = []
        item = self.session.notifications.active
        if item is None:
            return

        width = self.screen.get_width()
        rect = pygame.Rect(0, 0, width, self._row_height())
        pygame.draw.rect(self.screen, BANNER_COLORS.get(item.tag, Colors.BANNER_INFO), rect)
        pygame.draw.rect(self.screen, Colors.PANEL_BORDER, rect, 1)
        self._text(item.text, Colors.TEXT_WHITE, PADDING, PADDING)
        self.banner_rect = rect

        x = width - PADDING
        for label, _ in reversed(item.buttons):
            label_width = self.font.size(label)[0]
            x -= label_width + PADDING * 2
            button = pygame.Rect(x, 2, label_width + PADDING * 2, rect.height - 4)
            pygame.draw.rect(self.screen, Colors.STONE_DARK, button)
            pygame.draw.rect(self.screen, Colors.TEXT_GRAY, button, 1)
            self._text(label, Colors.TEXT_ORANGE, x + PADDING, PADDING)
            self.button_rects.insert(0, button)
            x -= PADDING

    # -- main loop ---------------------------------------------------------

    async def run(self, connect: bool = True) -> None:
        """Main window loop."""
        if connect:
            try:
                self.session.connect()
            except CapabilityUnavailable as e:
                logger.error(str(e))

        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)

                self.draw()
                pygame.display.flip()
                self.clock.tick(FPS)

                # Yield to the transport tasks
                await asyncio.sleep(0)
        finally:
            await self.session.shutdown()
            pygame.quit()

"""Line editing: buffer, recall history, completion and key handling."""

from .completion import CompletionProvider, CompletionRequest
from .history import HistoryList
from .input_controller import InputController
from .line_buffer import EchoMode, LineBuffer

__all__ = [
    "CompletionProvider",
    "CompletionRequest",
    "EchoMode",
    "HistoryList",
    "InputController",
    "LineBuffer",
]

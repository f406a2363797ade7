"""Headless UI models: display boundary, notifications and status tray."""

from .display import ConsoleDisplay, DisplaySink, NOTICE, OUTPUT, USER_INPUT
from .notification_queue import NotificationItem, NotificationQueue
from .status_tray import StatusTray, TrayIcon

__all__ = [
    "ConsoleDisplay",
    "DisplaySink",
    "NOTICE",
    "OUTPUT",
    "USER_INPUT",
    "NotificationItem",
    "NotificationQueue",
    "StatusTray",
    "TrayIcon",
]

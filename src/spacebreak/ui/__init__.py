"""Window, frame display and dialogs."""

from .dialogs import Dialog, DialogKind, alert_dialog, confirm_dialog, get_message

__all__ = [
    "Dialog",
    "DialogKind",
    "alert_dialog",
    "confirm_dialog",
    "get_message",
]

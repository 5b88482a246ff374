"""Modal prompts shown when a game ends.

A dialog is plain data; the window draws it and turns clicks or key
presses into CONFIRM / CANCEL events, the session decides what an answer
means for the current game state.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict


class DialogKind(Enum):
    CONFIRM = auto()  # OK / Cancel
    ALERT = auto()    # OK only


MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "lose": "Sorry, you lost. Try again?",
        "win": "You won! Score: {score}. Play again?",
        "thanks": "Thanks for playing!",
        "ok": "OK",
        "cancel": "Cancel",
    },
    "de": {
        "lose": "Leider verloren. Erneut versuchen?",
        "win": "Gewonnen! Punktestand: {score}. Nochmal spielen?",
        "thanks": "Danke fürs Spielen!",
        "ok": "OK",
        "cancel": "Abbrechen",
    },
}


def get_message(key: str, language: str = "en", **values: object) -> str:
    """Look up a localized message, falling back to English."""
    table = MESSAGES.get(language, MESSAGES["en"])
    template = table.get(key, MESSAGES["en"][key])
    return template.format(**values)


@dataclass(frozen=True)
class Dialog:
    """A blocking prompt waiting for the player's answer."""

    kind: DialogKind
    message: str
    confirm_label: str = "OK"
    cancel_label: str = "Cancel"

    @property
    def has_cancel(self) -> bool:
        return self.kind == DialogKind.CONFIRM


def confirm_dialog(key: str, language: str = "en", **values: object) -> Dialog:
    return Dialog(
        kind=DialogKind.CONFIRM,
        message=get_message(key, language, **values),
        confirm_label=get_message("ok", language),
        cancel_label=get_message("cancel", language),
    )


def alert_dialog(key: str, language: str = "en", **values: object) -> Dialog:
    return Dialog(
        kind=DialogKind.ALERT,
        message=get_message(key, language, **values),
        confirm_label=get_message("ok", language),
    )

import pytest

from spacebreak.ui.dialogs import DialogKind, alert_dialog, confirm_dialog, get_message


def test_messages_in_both_languages():
    assert get_message("lose") == "Sorry, you lost. Try again?"
    assert get_message("win", score=13) == "You won! Score: 13. Play again?"
    assert get_message("thanks", "de") == "Danke fürs Spielen!"
    assert get_message("cancel", "de") == "Abbrechen"


def test_unknown_language_falls_back_to_english():
    assert get_message("thanks", "xx") == "Thanks for playing!"


def test_unknown_key_raises():
    with pytest.raises(KeyError):
        get_message("nope")


def test_confirm_dialog_offers_cancel():
    dialog = confirm_dialog("win", "de", score=7)

    assert dialog.kind == DialogKind.CONFIRM
    assert dialog.has_cancel
    assert "7" in dialog.message
    assert dialog.cancel_label == "Abbrechen"


def test_alert_dialog_only_offers_ok():
    dialog = alert_dialog("thanks")

    assert dialog.kind == DialogKind.ALERT
    assert not dialog.has_cancel
    assert dialog.confirm_label == "OK"

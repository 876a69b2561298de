import pytest

from palm_assistant.utils.validators import (MAX_MESSAGE_LENGTH, DataSanitizer,
                                             RequestValidator)


@pytest.mark.parametrize("value,valid", [
    ("2025-06-01", True),
    ("2025-02-30", False),
    ("2025-6-1", False),
    (20250601, False),
    (None, False),
])
def test_validate_date(value, valid):
    assert RequestValidator.validate_date(value) is valid


@pytest.mark.parametrize("value,valid", [
    ("07:00", True),
    ("24:00", True),
    ("24:01", False),
    ("7:00", False),
    ("12:60", False),
])
def test_validate_time(value, valid):
    assert RequestValidator.validate_time(value) is valid


def test_valid_chat_request():
    data = {"message": "Plan my week", "today": "2025-06-01",
            "history": [{"role": "user", "content": "hi"}]}
    assert RequestValidator.validate_chat_request(data) == []


def test_invalid_chat_request():
    errors = RequestValidator.validate_chat_request({
        "message": "  ",
        "today": "tomorrow",
        "history": [{"role": "system", "content": "x"}, "oops", {"role": "user"}],
    })
    assert errors == [
        "Missing required field: message",
        "Invalid date format: tomorrow. Expected: YYYY-MM-DD",
        "History entry 0 has invalid role: system",
        "History entry 1 must be an object",
        "History entry 2 missing 'content'",
    ]


@pytest.mark.parametrize("suggestions", [
    "Gym",
    ["oops"],
    [{"title": "Gym"}],
    [{"title": 3, "date": "2025-06-01"}],
])
def test_history_suggestions_must_be_objects(suggestions):
    errors = RequestValidator.validate_chat_request({
        "message": "gym",
        "history": [{"role": "assistant", "content": "hi", "suggestions": suggestions}],
    })
    assert errors == ["History entry 0 has invalid suggestions"]


def test_history_suggestions_optional():
    history = [{"role": "assistant", "content": "hi", "suggestions": None},
               {"role": "assistant", "content": "hi",
                "suggestions": [{"title": "Gym", "date": "2025-06-01"}]}]
    assert RequestValidator.validate_chat_request({"message": "gym", "history": history}) == []


def test_chat_message_too_long():
    errors = RequestValidator.validate_chat_request({"message": "x" * (MAX_MESSAGE_LENGTH + 1)})
    assert len(errors) == 1


def test_free_slot_request():
    assert RequestValidator.validate_free_slot_request(
        {"date": "2025-06-01", "start": "08:00", "end": "18:00", "min_duration": "30"}) == []
    assert RequestValidator.validate_free_slot_request(
        {"date": "2025-06-01", "start": "18:00", "end": "08:00"}) == ["'start' must be before 'end'"]
    assert len(RequestValidator.validate_free_slot_request(
        {"start": "8am", "min_duration": "-5"})) == 3


def test_sanitize_text():
    assert DataSanitizer.sanitize_text("  hello   <b>world</b>\n") == "hello bworld/b"

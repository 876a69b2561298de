import json

from palm_assistant.ai_agent.suggestion_parser import (clean_response_text, first_sentences,
                                                       parse_suggestions)


def test_minimal_schedule_block():
    parsed = parse_suggestions('[SCHEDULES][{"title":"Gym","date":"2025-06-01"}][/SCHEDULES]')
    assert len(parsed.suggestions) == 1
    gym = parsed.suggestions[0]
    assert (gym.title, gym.date, gym.category_name) == ("Gym", "2025-06-01", "Default")
    assert gym.start_time is None and gym.rationale == ""
    assert parsed.display_text == ""


def test_full_schedule_block_with_code_fence():
    payload = [{
        "title": "Morning run",
        "date": "2025-06-02",
        "start_time": "7:00",
        "end_time": "07:45:00",
        "location": "Park near home",
        "category_name": "Health",
        "description": "Easy 5k",
        "reason": "Your mornings are free.",
    }]
    raw = f"How about a run?\n[SCHEDULES]\n```json\n{json.dumps(payload)}\n```\n[/SCHEDULES]"
    parsed = parse_suggestions(raw)
    run = parsed.suggestions[0]
    assert (run.start_time, run.end_time) == ("07:00", "07:45")
    assert run.location == "Park near home"
    assert run.to_dict()["reason"] == "Your mornings are free."
    assert parsed.display_text == "How about a run?"


def test_untagged_array_is_used_and_cut_from_text():
    raw = 'Sure! Here it is: [{"title": "Read", "date": "2025-06-03"}] Enjoy.'
    parsed = parse_suggestions(raw)
    assert [s.title for s in parsed.suggestions] == ["Read"]
    assert parsed.display_text == "Sure! Here it is: Enjoy."


def test_malformed_json_gives_no_suggestions():
    parsed = parse_suggestions('Plan below.\n[SCHEDULES][{"title": "Gym", }][/SCHEDULES]')
    assert parsed.suggestions == []
    assert parsed.display_text == "Plan below."


def test_bad_elements_dropped_siblings_kept():
    items = [
        {"title": "A", "date": "2025-06-01"},
        {"title": "", "date": "2025-06-01"},
        {"title": "B"},
        {"title": "C", "date": "2025-02-30"},
        {"title": "D", "date": "June 1"},
        "not an object",
    ]
    parsed = parse_suggestions(f"[SCHEDULES]{json.dumps(items)}[/SCHEDULES]")
    assert [s.title for s in parsed.suggestions] == ["A"]


def test_category_fallbacks():
    items = [
        {"title": "A", "date": "2025-06-01", "category": "Study"},
        {"title": "B", "date": "2025-06-01"},
    ]
    parsed = parse_suggestions(f"[SCHEDULES]{json.dumps(items)}[/SCHEDULES]",
                               default_category="Misc")
    assert [s.category_name for s in parsed.suggestions] == ["Study", "Misc"]


def test_invalid_times_become_none():
    items = [{"title": "A", "date": "2025-06-01", "start_time": "noon", "end_time": "25:00"}]
    suggestion = parse_suggestions(f"[SCHEDULES]{json.dumps(items)}[/SCHEDULES]").suggestions[0]
    assert suggestion.start_time is None and suggestion.end_time is None


def test_long_text_shortened_only_with_suggestions():
    prose = "First sentence here. Second one follows! Third goes on and on " + "x" * 200
    block = '[SCHEDULES][{"title":"Gym","date":"2025-06-01"}][/SCHEDULES]'
    assert parse_suggestions(prose + block).display_text == "First sentence here. Second one follows!"
    assert parse_suggestions(prose).display_text == prose


def test_empty_and_none_input():
    assert parse_suggestions("") == ([], "")
    assert parse_suggestions(None) == ([], "")


def test_clean_response_text():
    raw = "## Plan\n**Bold** and `code` with [link](http://example.com)\n- item one\n1. item two"
    assert clean_response_text(raw) == "Plan\nBold and code with link\nitem one\nitem two"


def test_clean_response_text_drops_fenced_code():
    assert clean_response_text("Before\n```\nprint(1)\n```\nAfter") == "Before\n\nAfter"


def test_first_sentences_adds_period():
    assert first_sentences("One. Two? Three", 5) == "One. Two? Three."
    assert first_sentences("One. Two. Three.", 2) == "One. Two."

import pytest

from octane_nexus.modules.generation.parsing import (
    extract_json, extract_json_object, extract_json_array, split_lines, require_text, require_text_list
)


def test_extract_json_ignores_prose_around_payload():
    text = 'Here you go:\n```json\n{"hook": "Hi", "meat": ["a", "b"]}\n```\nEnjoy!'
    assert extract_json(text) == {"hook": "Hi", "meat": ["a", "b"]}


def test_extract_json_prefers_whichever_bracket_comes_first():
    assert extract_json('[{"title": "x"}]') == [{"title": "x"}]
    assert extract_json('{"items": [1, 2]}') == {"items": [1, 2]}


def test_extract_json_without_payload_raises():
    with pytest.raises(ValueError):
        extract_json("no structured data here")


def test_extract_json_object_rejects_arrays():
    with pytest.raises(ValueError):
        extract_json_object("[1, 2, 3]")


def test_extract_json_array_unwraps_single_list():
    assert extract_json_array('{"creators": [{"name": "A"}]}') == [{"name": "A"}]


def test_extract_json_array_rejects_ambiguous_objects():
    with pytest.raises(ValueError):
        extract_json_array('{"a": [1], "b": [2]}')


def test_split_lines_strips_markers_quotes_and_labels():
    text = 'Option 1:\n1. "First idea"\n* Second idea\n\n• Third idea\n2) Fourth idea'
    assert split_lines(text) == ["First idea", "Second idea", "Third idea", "Fourth idea"]


def test_split_lines_min_length_drops_short_lines():
    assert split_lines("ok\nThis one is long enough", min_length=11) == ["This one is long enough"]


def test_require_text_trims_and_rejects_blank():
    assert require_text({"cta": "  Follow  "}, "cta") == "Follow"
    with pytest.raises(ValueError):
        require_text({"cta": "   "}, "cta")
    with pytest.raises(ValueError):
        require_text("not an object", "cta")


def test_require_text_list_keeps_first_count_items():
    assert require_text_list({"meat": ["a", " ", "b", "c"]}, "meat", 2) == ["a", "b"]
    with pytest.raises(ValueError):
        require_text_list({"meat": ["a"]}, "meat", 2)
    with pytest.raises(ValueError):
        require_text_list({"meat": "a, b"}, "meat", 2)

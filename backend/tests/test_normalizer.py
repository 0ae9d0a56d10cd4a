import pytest

from handbook.containers.normalizer import (
    content_is_minimal,
    detect_container_type,
    flatten_text,
    normalize_content,
    searchable_text,
    split_grid_row,
)
from handbook.containers.schema import CANONICAL_FIELDS, CONTAINER_TYPES

CANONICAL_SAMPLES = {
    "text": {"text": "Hello", "note": "Bring a towel"},
    "list": {"items": ["a", "b"]},
    "procedure": {"steps": [{"icon": "1", "title": "Arrive", "description": "Sign in", "price": "$5"}]},
    "grid": {"headers": ["A", "B"], "rows": [["1", "2"], ["3", "4"]]},
    "tabs": {"tabs": [{"title": "One", "content": "First"}, {"title": "Two", "content": "Second"}]},
    "warning": {"title": "Careful", "message": "Wet floor"},
    "success": {"title": "Done", "message": "All set"},
    "danger": {
        "title": "Emergency",
        "message": "Clear the pool",
        "warning": "Do not run",
        "contacts": [{"icon": "📞", "title": "Call 911"}],
    },
    "quiz": {
        "title": "Safety",
        "questions": [{"question": "Depth?", "options": ["1m", "2m"], "correct": 1}],
    },
}


@pytest.mark.parametrize("container_type", CONTAINER_TYPES)
@pytest.mark.parametrize("raw", [None, {}, "", "   "])
def test_empty_input_gets_canonical_fields_of_declared_type(container_type, raw):
    content, detected = normalize_content(raw, container_type)

    assert detected == container_type
    assert set(content) == set(CANONICAL_FIELDS[container_type])


@pytest.mark.parametrize("container_type", CONTAINER_TYPES)
def test_canonical_content_is_a_fixed_point(container_type):
    sample = CANONICAL_SAMPLES[container_type]

    once = normalize_content(sample, container_type)
    twice = normalize_content(*once)

    assert once == (sample, container_type)
    assert twice == once


def test_normalize_does_not_mutate_input():
    raw = {"steps": [{"title": "Call", "details": {"text": "Ring"}}]}
    normalize_content(raw, "procedure")
    assert raw == {"steps": [{"title": "Call", "details": {"text": "Ring"}}]}


@pytest.mark.parametrize("row", ["a, b, c", ["a, b, c"], ["a", "b", "c"]])
def test_grid_row_forms_split_identically(row):
    assert split_grid_row(row) == ["a", "b", "c"]


@pytest.mark.parametrize("rows", [["a, b, c"], [["a, b, c"]], [["a", "b", "c"]]])
def test_grid_rows_normalize_identically(rows):
    content, container_type = normalize_content({"headers": "X, Y, Z", "rows": rows})

    assert container_type == "grid"
    assert content == {"headers": ["X", "Y", "Z"], "rows": [["a", "b", "c"]]}


def test_legacy_table_becomes_grid():
    content, container_type = normalize_content({"table": {"headers": ["A"], "rows": ["1"]}}, "text")

    assert container_type == "grid"
    assert content == {"headers": ["A"], "rows": [["1"]]}


def test_tab_contents_are_flattened():
    content, container_type = normalize_content({
        "tabs": [
            {"title": "1", "content": {"text": "hello"}},
            {"title": "2", "content": {"message": "x"}},
            {"title": "3", "content": {}},
        ]
    })

    assert container_type == "tabs"
    assert [tab["content"] for tab in content["tabs"]] == ["hello", "x", ""]


@pytest.mark.parametrize("declared", ["text", "list", "grid", "quiz", None])
def test_tabs_win_over_declared_type(declared):
    raw = {"tabs": [{"title": "A", "content": "a"}], "items": ["ignored"]}

    assert normalize_content(raw, declared)[1] == "tabs"
    assert detect_container_type(raw) == "tabs"


def test_steps_descriptions_are_flattened():
    content, container_type = normalize_content(
        {"steps": [{"title": "Call", "details": {"text": "Ring 555"}}]}
    )

    assert container_type == "procedure"
    assert content["steps"] == [{"icon": "", "title": "Call", "description": "Ring 555"}]


def test_list_items_are_flattened():
    content, container_type = normalize_content({"items": [{"text": "a"}, "b"]})

    assert container_type == "list"
    assert content == {"items": ["a", "b"]}


def test_info_tag_becomes_warning_with_message_from_text():
    content, container_type = normalize_content({"type": "info", "title": "Heads up", "text": "Pool closed"})

    assert container_type == "warning"
    assert content == {"title": "Heads up", "message": "Pool closed"}


def test_quiz_legacy_answers_and_correct_answer():
    content, container_type = normalize_content(
        {"questions": [{"question": "Q", "answers": ["x", "y"], "correctAnswer": 1}]}
    )

    assert container_type == "quiz"
    assert content == {"title": "", "questions": [{"question": "Q", "options": ["x", "y"], "correct": 1}]}


def test_quiz_question_defaults():
    content, _ = normalize_content({"questions": [{"question": "Q"}]}, "quiz")
    assert content["questions"][0] == {"question": "Q", "options": ["", ""], "correct": 0}


def test_complex_content_flattens_to_text():
    content, container_type = normalize_content(
        {"intro": {"text": "Hello"}, "more": [{"content": "World"}]}, "text"
    )

    assert container_type == "text"
    assert content == {"text": "Hello\nWorld"}


def test_content_missing_every_field_of_its_type_falls_back_to_text():
    content, container_type = normalize_content({"text": "keep me"}, "procedure")

    assert container_type == "text"
    assert content == {"text": "keep me"}


def test_raw_strings():
    assert normalize_content("hello") == ({"text": "hello"}, "text")
    assert normalize_content('{"items": ["a"]}') == ({"items": ["a"]}, "list")
    assert normalize_content("{not json") == ({"text": "{not json"}, "text")


def test_lists_and_scalars():
    assert normalize_content(["a", "b"]) == ({"text": "a\nb"}, "text")
    assert normalize_content(42) == ({"text": "42"}, "text")


def test_unknown_declared_type_is_ignored():
    assert normalize_content({"text": "x"}, "carousel") == ({"text": "x"}, "text")


def test_cross_cutting_fields_survive_any_type():
    content, _ = normalize_content({
        "items": ["a"],
        "alerts": [{"type": "bogus", "title": "A"}],
        "notes": ["n"],
        "tips": [{"title": "T", "content": "C"}],
    })

    assert content == {
        "items": ["a"],
        "alerts": [{"type": "warning", "title": "A", "message": ""}],
        "notes": ["n"],
        "tips": [{"title": "T", "content": "C"}],
    }


def test_self_referencing_content_degrades_to_text():
    raw = {}
    raw["self"] = raw

    assert normalize_content(raw) == ({"text": ""}, "text")


def test_flatten_text():
    assert flatten_text({"text": "hello"}) == "hello"
    assert flatten_text({"message": "x"}) == "x"
    assert flatten_text({}) == ""
    assert flatten_text(None) == ""
    assert flatten_text({"content": {"text": "deep"}}) == "deep"
    assert flatten_text(["a", {"title": "b"}]) == "a\nb"
    assert flatten_text({"x": "1", "y": ""}) == "1"


def test_detect_container_type():
    assert detect_container_type({"steps": []}) == "procedure"
    assert detect_container_type({"items": []}) == "list"
    assert detect_container_type({"headers": ["A"], "rows": []}) == "grid"
    assert detect_container_type({"headers": ["A"]}) is None
    assert detect_container_type({"type": "danger"}) == "danger"
    assert detect_container_type({"questions": []}) == "quiz"
    assert detect_container_type({"title": "a", "message": "b"}) == "warning"
    assert detect_container_type({"foo": 1}) is None
    assert detect_container_type(None) is None


def test_detect_never_mutates():
    raw = {"headers": "A, B", "rows": "1, 2"}
    detect_container_type(raw)
    assert raw == {"headers": "A, B", "rows": "1, 2"}


def test_content_is_minimal():
    assert content_is_minimal(None)
    assert content_is_minimal({})
    assert content_is_minimal({"text": ""})
    assert not content_is_minimal({"text": "", "items": ["a"]})
    assert not content_is_minimal({"text": "x"})
    assert not content_is_minimal({"headers": ["A"], "rows": []})


def test_searchable_text():
    assert searchable_text("text", {"text": "Lane rules"}) == "Lane rules"
    assert searchable_text("list", {"items": ["a", "b"]}) == "a, b"
    assert searchable_text("tabs", {"tabs": [{"content": "c1"}, {"content": "c2"}]}) == "c1, c2"
    assert searchable_text("grid", {"headers": ["A"], "rows": []}) == ""


@pytest.mark.parametrize("rows", [{"x": "x, y"}, [{"x": "x, y"}], [[{"text": "x, y"}]]])
def test_flattened_grid_cells_split_on_first_pass(rows):
    once = normalize_content({"headers": ["A", "B"], "rows": rows}, "grid")

    assert once[0]["rows"] == [["x", "y"]]
    assert normalize_content(*once) == once


def test_split_grid_row_flattens_before_splitting():
    assert split_grid_row({"text": "a, b"}) == ["a", "b"]
    assert split_grid_row([None]) == [""]
    assert split_grid_row(["a, b", "c"]) == ["a, b", "c"]

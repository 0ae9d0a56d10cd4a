import pytest

from handbook.containers.editor import ContentDraft, rows_to_text


class FakeContentStore:
    def __init__(self):
        self.calls = []

    def create(self, data):
        self.calls.append(("create", data))
        return {"id": "item-1", **data}

    def update(self, item_id, data):
        self.calls.append(("update", item_id, data))
        return {"id": item_id, **data}

    def delete(self, item_id):
        self.calls.append(("delete", item_id))


def test_load_repairs_legacy_content():
    draft = ContentDraft.load({
        "id": "x",
        "title": "Lessons",
        "container_type": "text",
        "content": {"steps": [{"title": "Book", "details": {"text": "Online"}}]},
    })

    assert draft.item_id == "x"
    assert draft.item == {"title": "Lessons"}
    assert draft.container_type == "procedure"
    assert draft.content == {"steps": [{"icon": "", "title": "Book", "description": "Online"}]}


def test_load_does_not_share_content_with_item():
    item = {"container_type": "list", "content": {"items": ["a"]}}
    draft = ContentDraft.load(item)
    draft.set_value("items.0", "changed")

    assert item["content"] == {"items": ["a"]}


def test_form_fields_for_procedure():
    draft = ContentDraft("procedure", {"steps": [{"icon": "1", "title": "T", "description": "D"}]})

    names = [f.name for f in draft.form_fields()]
    assert names == ["steps.0.icon", "steps.0.title", "steps.0.description", "steps.0.price"]


def test_form_fields_for_grid_use_text_controls():
    draft = ContentDraft("grid", {"headers": ["A", "B"], "rows": [["1", "2"], ["3", "4"]]})

    fields = {f.name: f for f in draft.form_fields()}
    assert fields["headers"].value == "A, B"
    assert fields["rows"].value == "1, 2\n3, 4"


def test_form_fields_include_cross_cutting_blocks():
    draft = ContentDraft("text", {"text": "x", "alerts": [{"type": "danger", "title": "", "message": ""}]})

    alert_type = next(f for f in draft.form_fields() if f.name == "alerts.0.type")
    assert alert_type.value == "danger"
    assert alert_type.choices == ["warning", "danger", "success"]


def test_set_value_writes_nested_paths():
    draft = ContentDraft("quiz", {"title": "", "questions": [{"question": "", "options": ["", ""], "correct": 0}]})

    draft.set_value("questions.0.options.1", "Deep end")
    draft.set_value(("title",), "Safety")

    assert draft.content["questions"][0]["options"] == ["", "Deep end"]
    assert draft.content["title"] == "Safety"
    assert draft.dirty


def test_set_value_rejects_bad_paths():
    draft = ContentDraft("list", {"items": ["a"]})

    with pytest.raises(ValueError):
        draft.set_value("items.5", "x")
    with pytest.raises(ValueError):
        draft.set_value("missing.0.title", "x")


def test_add_remove_move_elements():
    draft = ContentDraft("list", {"items": ["a"]})

    assert draft.add_element("items") == 1
    draft.set_value("items.1", "b")
    assert draft.move_element("items", 1, -1)
    assert draft.content["items"] == ["b", "a"]
    assert not draft.move_element("items", 0, -1)

    assert draft.remove_element("items", 0) == "b"
    assert draft.content["items"] == ["a"]


def test_add_element_templates():
    draft = ContentDraft("tabs", {"tabs": [{"title": "Tab 1", "content": ""}]})
    draft.add_element("tabs")
    draft.add_element("alerts")

    assert draft.content["tabs"][1] == {"title": "Tab 2", "content": ""}
    assert draft.content["alerts"] == [{"type": "warning", "title": "", "message": ""}]


def test_grid_rows_template_matches_header_count():
    draft = ContentDraft("grid", {"headers": ["A", "B", "C"], "rows": []})
    draft.add_element("rows")
    assert draft.content["rows"] == [["", "", ""]]


def test_collections_are_checked_per_type():
    draft = ContentDraft("list", {"items": []})
    with pytest.raises(ValueError):
        draft.add_element("steps")


def test_quiz_options_and_correct_answer():
    draft = ContentDraft("quiz", {"title": "", "questions": [{"question": "Q", "options": ["a", "b"], "correct": 0}]})

    assert draft.add_option(0, "c") == 2
    draft.set_correct(0, 2)
    draft.remove_option(0, 0)

    question = draft.content["questions"][0]
    assert question["options"] == ["b", "c"]
    assert question["correct"] == 1

    draft.remove_option(0, 1)
    assert question["correct"] == 0

    with pytest.raises(ValueError):
        draft.set_correct(0, 5)


def test_grid_text_controls():
    draft = ContentDraft("grid", {"headers": [], "rows": []})

    draft.set_headers_text("Day, Time")
    draft.set_value("rows", "Mon, 9am\n\nTue, 10am")

    assert draft.content == {"headers": ["Day", "Time"], "rows": [["Mon", "9am"], ["Tue", "10am"]]}
    assert rows_to_text(draft.content["rows"]) == "Mon, 9am\nTue, 10am"


def test_switch_type_resets_content():
    draft = ContentDraft("list", {"items": ["a", "b"]})
    draft.switch_type("grid")

    assert draft.container_type == "grid"
    assert draft.content == {"headers": [], "rows": []}

    with pytest.raises(ValueError):
        draft.switch_type("carousel")


def test_suggestion_is_not_applied_until_accepted():
    draft = ContentDraft("text", {"tabs": [{"title": "A", "content": {"text": "a"}}]})

    assert draft.suggested_type() == "tabs"
    assert draft.container_type == "text"

    assert draft.accept_suggestion()
    assert draft.container_type == "tabs"
    assert draft.content == {"tabs": [{"title": "A", "content": "a"}]}
    assert draft.suggested_type() is None
    assert not draft.accept_suggestion()


def test_save_creates_then_updates():
    store = FakeContentStore()
    draft = ContentDraft("text", {"text": "hi"}, title="Rules", section_id="s1")

    draft.save(store)
    assert draft.item_id == "item-1"
    assert not draft.dirty

    draft.set_value("text", "bye")
    draft.save(store)

    assert [c[0] for c in store.calls] == ["create", "update"]
    assert store.calls[1][2] == {
        "title": "Rules",
        "section_id": "s1",
        "container_type": "text",
        "content": {"text": "bye"},
    }


def test_delete_requires_saved_item():
    store = FakeContentStore()
    draft = ContentDraft("text", {"text": "hi"})

    with pytest.raises(ValueError):
        draft.delete(store)

    draft.item_id = "item-9"
    draft.delete(store)
    assert store.calls == [("delete", "item-9")]
    assert draft.item_id is None

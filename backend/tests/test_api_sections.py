def test_list_sections_is_public_and_ordered(client, make_section, make_item):
    pools = make_section("Pools", order_index=1)
    make_section("Tips & Tricks", order_index=0)
    make_section("Admin", order_index=1)
    make_item(pools, "Lane rules")

    response = client.get("/api/sections")

    assert response.status_code == 200
    body = response.get_json()
    assert [s["name"] for s in body] == ["Tips & Tricks", "Admin", "Pools"]
    assert body[0]["slug"] == "tips-and-tricks"
    assert body[2]["content_count"] == 1


def test_create_section_requires_editor(client, reader_headers, editor_headers):
    assert client.post("/api/sections", json={"name": "X"}).status_code == 401
    assert client.post("/api/sections", headers=reader_headers, json={"name": "X"}).status_code == 403

    response = client.post("/api/sections", headers=editor_headers, json={"name": "Lifeguards", "emoji": "🛟"})
    assert response.status_code == 201
    assert response.get_json()["order_index"] == 0


def test_create_section_appends_and_rejects_duplicates(client, editor_headers, make_section):
    make_section("Pools", order_index=4)

    response = client.post("/api/sections", headers=editor_headers, json={"name": "Gym"})
    assert response.get_json()["order_index"] == 5

    assert client.post("/api/sections", headers=editor_headers, json={"name": "Gym"}).status_code == 409
    assert client.post("/api/sections", headers=editor_headers, json={"name": "  "}).status_code == 400


def test_get_update_delete_section(client, db, editor_headers, make_section, make_item):
    section = make_section("Pools")
    item = make_item(section, "Lane rules")
    item_id = item.id

    assert client.get(f"/api/sections/{section.id}").get_json()["content_count"] == 1
    assert client.get("/api/sections/missing").status_code == 404

    response = client.put(f"/api/sections/{section.id}", headers=editor_headers, json={"description": "Wet"})
    assert response.status_code == 200
    assert response.get_json()["name"] == "Pools"
    assert response.get_json()["description"] == "Wet"

    assert client.delete(f"/api/sections/{section.id}", headers=editor_headers).status_code == 200
    db.session.expire_all()
    assert db.session.get(type(item), item_id) is None


def test_section_by_slug(client, make_section):
    section = make_section("Tips & Tricks")

    response = client.get("/api/sections/slug/tips-and-tricks")
    assert response.status_code == 200
    assert response.get_json()["id"] == section.id

    assert client.get("/api/sections/slug/nothing-here").status_code == 404


def test_move_section_swaps_neighbours(client, editor_headers, make_section):
    a = make_section("A", order_index=0)
    make_section("B", order_index=1)
    make_section("C", order_index=2)

    response = client.post(f"/api/sections/{a.id}/move", headers=editor_headers, json={"direction": "down"})

    assert response.status_code == 200
    assert [s["name"] for s in response.get_json()] == ["B", "A", "C"]

    top = client.post(f"/api/sections/{a.id}/move", headers=editor_headers, json={"direction": "up"})
    assert [s["name"] for s in top.get_json()] == ["A", "B", "C"]

    again = client.post(f"/api/sections/{a.id}/move", headers=editor_headers, json={"direction": "up"})
    assert [s["name"] for s in again.get_json()] == ["A", "B", "C"]


def test_move_section_with_tied_order(client, editor_headers, make_section):
    make_section("A")
    b = make_section("B")

    response = client.post(f"/api/sections/{b.id}/move", headers=editor_headers, json={"direction": "up"})
    assert [s["name"] for s in response.get_json()] == ["B", "A"]


def test_move_section_validates_direction(client, editor_headers, make_section):
    section = make_section("A")
    response = client.post(f"/api/sections/{section.id}/move", headers=editor_headers, json={"direction": "sideways"})
    assert response.status_code == 400


def test_section_content_lists_published_in_order(client, make_section, make_item):
    section = make_section("Pools")
    make_item(section, "Second", order_index=1)
    make_item(section, "Hidden", published=False)
    make_item(section, "First", order_index=0)

    response = client.get(f"/api/sections/{section.id}/content")

    assert response.status_code == 200
    assert [i["title"] for i in response.get_json()] == ["First", "Second"]

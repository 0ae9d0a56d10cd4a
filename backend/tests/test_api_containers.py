import pytest


@pytest.fixture
def item(make_section, make_item, editor):
    return make_item(make_section("Pools"), "Swim levels", author=editor)


def test_author_creates_container_with_starter_template(client, editor_headers, item):
    response = client.post(f"/api/content/{item.id}/containers", headers=editor_headers,
                           json={"container_type": "procedure"})

    assert response.status_code == 201
    body = response.get_json()
    assert body["content"] == {"steps": [{"icon": "📝", "title": "", "description": ""}]}
    assert body["order_index"] == 0

    second = client.post(f"/api/content/{item.id}/containers", headers=editor_headers,
                         json={"container_type": "text", "content": {"text": "Hi"}})
    assert second.get_json()["order_index"] == 1


def test_container_writes_need_author_or_admin(client, make_user, auth_headers, admin_headers, item):
    other = auth_headers(make_user("other@example.com", "editor"))

    denied = client.post(f"/api/content/{item.id}/containers", headers=other, json={"container_type": "text"})
    assert denied.status_code == 403

    allowed = client.post(f"/api/content/{item.id}/containers", headers=admin_headers, json={"container_type": "text"})
    assert allowed.status_code == 201

    assert client.post(f"/api/content/{item.id}/containers", json={"container_type": "text"}).status_code == 401


def test_container_validation(client, editor_headers, item):
    url = f"/api/content/{item.id}/containers"

    assert client.post(url, headers=editor_headers, json={}).status_code == 400
    assert client.post(url, headers=editor_headers, json={"container_type": "carousel"}).status_code == 400
    missing = client.post("/api/content/missing/containers", headers=editor_headers, json={"container_type": "text"})
    assert missing.status_code == 404


def test_list_get_update_delete(client, editor_headers, item):
    url = f"/api/content/{item.id}/containers"
    first = client.post(url, headers=editor_headers, json={"container_type": "list", "content": {"items": ["a"]}}).get_json()
    client.post(url, headers=editor_headers, json={"container_type": "text"})

    listed = client.get(url).get_json()
    assert [c["container_type"] for c in listed] == ["list", "text"]

    one = client.get(f"{url}/{first['id']}")
    assert one.status_code == 200
    assert one.get_json()["content"] == {"items": ["a"]}

    updated = client.put(f"{url}/{first['id']}", headers=editor_headers, json={"order_index": 5})
    assert updated.status_code == 200
    assert updated.get_json()["order_index"] == 5
    assert updated.get_json()["content"] == {"items": ["a"]}

    assert [c["id"] for c in client.get(url).get_json()][-1] == first["id"]

    assert client.delete(f"{url}/{first['id']}", headers=editor_headers).status_code == 200
    assert client.get(f"{url}/{first['id']}").status_code == 404
    assert client.delete(f"{url}/{first['id']}", headers=editor_headers).status_code == 404


def test_board_over_service_store(app, item, editor):
    from handbook.application.stores import ServiceContainerStore
    from handbook.containers.board import ContainerBoard

    board = ContainerBoard(ServiceContainerStore(actor_id=editor.id, actor_role="editor"), item.id)
    board.add("text")
    board.update(0, {"text": "first"})
    board.save(0)
    board.add("list")
    board.save(1)

    assert board.move(0, 1)

    reloaded = ContainerBoard(ServiceContainerStore(actor_id=editor.id, actor_role="editor"), item.id)
    assert [e.container_type for e in reloaded.load()] == ["list", "text"]


def test_move_container_swaps_stored_indices(client, editor_headers, make_user, auth_headers, item):
    url = f"/api/content/{item.id}/containers"
    ids = []
    for text in ("a", "b", "c", "gone"):
        created = client.post(url, headers=editor_headers, json={"container_type": "text", "content": {"text": text}})
        ids.append(created.get_json()["id"])
    client.delete(f"{url}/{ids[0]}", headers=editor_headers)

    response = client.post(f"{url}/{ids[3]}/move", headers=editor_headers, json={"direction": "up"})
    assert response.status_code == 200
    assert [c["content"]["text"] for c in response.get_json()] == ["b", "gone", "c"]
    assert [c["order_index"] for c in response.get_json()] == [1, 2, 3]

    other = auth_headers(make_user("other@example.com", "editor"))
    assert client.post(f"{url}/{ids[1]}/move", headers=other, json={"direction": "down"}).status_code == 403
    assert client.post(f"{url}/{ids[1]}/move", headers=editor_headers, json={"direction": "left"}).status_code == 400
    assert client.post(f"{url}/{ids[0]}/move", headers=editor_headers, json={"direction": "up"}).status_code == 404

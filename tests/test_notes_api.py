from datetime import datetime


def _create(client, headers, notes="<p>hello</p>", title="Test"):
    return client.post("/notes", headers=headers, json={"notes": notes, "title": title})


def test_create_get_delete_scenario(client, alice):
    r = _create(client, alice)
    assert r.status_code == 201
    created = r.json()
    assert len(created) == 1
    note = created[0]
    assert note["uuid"]
    assert note["email"] == "alice@example.com"
    assert note["notes"] == "<p>hello</p>"
    assert note["title"] == "Test"

    r = client.get("/notes", headers=alice, params={"uuid": note["uuid"]})
    assert r.status_code == 200
    assert r.json() == [note]

    r = client.delete("/notes", headers=alice, params={"uuid": note["uuid"]})
    assert r.status_code == 200
    assert r.json() == {"message": "Note deleted successfully"}

    r = client.get("/notes", headers=alice, params={"uuid": note["uuid"]})
    assert r.json() == []


def test_create_then_list_has_one_more(client, alice):
    _create(client, alice, notes="<p>first</p>")
    before = client.get("/notes", headers=alice).json()

    _create(client, alice, notes="<p>second</p>", title="Second")
    after = client.get("/notes", headers=alice).json()

    assert len(after) == len(before) + 1
    assert ("<p>second</p>", "Second") in [(n["notes"], n["title"]) for n in after]


def test_every_route_requires_a_session(client):
    assert client.get("/notes").status_code == 401
    assert client.post("/notes", json={"notes": "x"}).status_code == 401
    assert client.put("/notes", params={"uuid": "x"}, json={"notes": "x"}).status_code == 401
    assert client.delete("/notes", params={"uuid": "x"}).status_code == 401
    bad = {"Authorization": "Bearer not-a-jwt"}
    assert client.get("/notes", headers=bad).status_code == 401


def test_create_requires_content(client, alice):
    assert client.post("/notes", headers=alice, json={"title": "t"}).status_code == 400
    assert client.post("/notes", headers=alice, json={"notes": "", "title": "t"}).status_code == 400


def test_owner_comes_from_session_not_body(client, alice):
    r = client.post("/notes", headers=alice, json={"notes": "<p>x</p>", "email": "mallory@example.com"})
    assert r.json()[0]["email"] == "alice@example.com"


def test_foreign_note_reads_as_empty(client, alice, bob):
    uuid = _create(client, alice).json()[0]["uuid"]

    r = client.get("/notes", headers=bob, params={"uuid": uuid})
    assert r.status_code == 200
    assert r.json() == []
    assert client.get("/notes", headers=bob).json() == []


def test_foreign_note_cannot_be_updated_or_deleted(client, alice, bob):
    uuid = _create(client, alice).json()[0]["uuid"]

    r = client.put("/notes", headers=bob, params={"uuid": uuid}, json={"notes": "<p>pwned</p>"})
    assert r.status_code == 200
    assert r.json() == []

    client.delete("/notes", headers=bob, params={"uuid": uuid})
    still = client.get("/notes", headers=alice, params={"uuid": uuid}).json()
    assert still[0]["notes"] == "<p>hello</p>"


def test_update_advances_updated_at_and_keeps_uuid(client, alice):
    note = _create(client, alice).json()[0]

    r = client.put("/notes", headers=alice, params={"uuid": note["uuid"]}, json={"notes": "<p>edited</p>"})
    assert r.status_code == 200
    updated = r.json()[0]
    assert updated["uuid"] == note["uuid"]
    assert updated["notes"] == "<p>edited</p>"
    assert updated["title"] == "Test"  # untouched when omitted
    assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(note["updated_at"])
    assert updated["created_at"] == note["created_at"]


def test_rapid_updates_stay_monotonic(client, alice):
    uuid = _create(client, alice).json()[0]["uuid"]
    stamps = []
    for i in range(5):
        r = client.put("/notes", headers=alice, params={"uuid": uuid}, json={"notes": f"<p>{i}</p>"})
        stamps.append(datetime.fromisoformat(r.json()[0]["updated_at"]))
    assert stamps == sorted(stamps)
    assert len(set(stamps)) == len(stamps)


def test_update_ignores_client_supplied_email(client, alice):
    uuid = _create(client, alice).json()[0]["uuid"]
    r = client.put(
        "/notes", headers=alice, params={"uuid": uuid},
        json={"notes": "<p>x</p>", "email": "mallory@example.com"},
    )
    assert r.json()[0]["email"] == "alice@example.com"


def test_update_sets_summary(client, alice):
    uuid = _create(client, alice).json()[0]["uuid"]
    r = client.put("/notes", headers=alice, params={"uuid": uuid}, json={"notes": "<p>hello</p>", "summary": "Says hello."})
    assert r.json()[0]["summary"] == "Says hello."


def test_update_and_delete_require_uuid(client, alice):
    assert client.put("/notes", headers=alice, json={"notes": "x"}).status_code == 400
    assert client.delete("/notes", headers=alice).status_code == 400


def test_update_requires_content(client, alice):
    uuid = _create(client, alice).json()[0]["uuid"]
    assert client.put("/notes", headers=alice, params={"uuid": uuid}, json={"title": "t"}).status_code == 400


def test_unknown_uuid_update_returns_empty(client, alice):
    r = client.put("/notes", headers=alice, params={"uuid": "does-not-exist"}, json={"notes": "x"})
    assert r.status_code == 200
    assert r.json() == []

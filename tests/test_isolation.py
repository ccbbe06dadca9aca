"""One user's tasks and folders are invisible to every other user."""
from .conftest import API


def _setup_alice(client, alice):
    folder = client.post(f"{API}/folders", json={"name": "Private"}, headers=alice).json()
    filed = client.post(f"{API}/folders/{folder['id']}/tasks", json={"title": "secret"}, headers=alice).json()
    loose = client.post(f"{API}/task", json={"type": "task", "title": "diary"}, headers=alice).json()["data"]
    return folder, filed, loose


def test_other_user_cannot_read(client, alice, bob):
    folder, filed, loose = _setup_alice(client, alice)

    for item_id in (folder["id"], filed["id"], loose["id"]):
        assert client.get(f"{API}/task/{item_id}", headers=bob).status_code == 404
    assert client.get(f"{API}/folders/{folder['id']}", headers=bob).status_code == 404
    assert client.get(f"{API}/folders/{folder['id']}/tasks", headers=bob).json() == []
    assert client.get(f"{API}/task/folder/{folder['id']}", headers=bob).json() == []
    assert client.get(f"{API}/task", headers=bob).json() == {"tasks": [], "folders": []}
    assert client.get(f"{API}/task/nofolder", headers=bob).json() == []


def test_other_user_cannot_modify(client, alice, bob):
    folder, filed, loose = _setup_alice(client, alice)

    assert client.patch(f"{API}/task/{loose['id']}", json={"title": "pwned"}, headers=bob).status_code == 404
    assert client.patch(f"{API}/task/{folder['id']}", json={"title": "pwned"}, headers=bob).status_code == 404
    assert client.patch(
        f"{API}/folders/{folder['id']}/tasks/{filed['id']}", json={"title": "pwned"}, headers=bob
    ).status_code == 404
    assert client.patch(
        f"{API}/folders/{folder['id']}/tasks/{filed['id']}/status", json={"status": "Completed"}, headers=bob
    ).status_code == 404
    assert client.post(f"{API}/folders/{folder['id']}/tasks", json={"title": "intruder"}, headers=bob).status_code == 404
    assert client.patch(f"{API}/folders/{folder['id']}/progress/reset", headers=bob).status_code == 404

    created = client.post(
        f"{API}/task", json={"type": "task", "title": "intruder", "folder": folder["id"]}, headers=bob
    )
    assert created.status_code == 400

    assert client.get(f"{API}/task/{loose['id']}", headers=alice).json()["title"] == "diary"
    assert client.get(f"{API}/task/{folder['id']}", headers=alice).json()["name"] == "Private"
    populated = client.get(f"{API}/folders/{folder['id']}", headers=alice).json()
    assert [t["title"] for t in populated["tasks"]] == ["secret"]


def test_other_user_cannot_delete(client, alice, bob):
    folder, filed, loose = _setup_alice(client, alice)

    assert client.delete(f"{API}/task/{loose['id']}", headers=bob).status_code == 404
    assert client.delete(f"{API}/task/task/{filed['id']}", headers=bob).status_code == 404
    assert client.delete(f"{API}/task/folder/{folder['id']}", headers=bob).status_code == 404
    assert client.delete(f"{API}/task/{folder['id']}", headers=bob).status_code == 404
    assert client.delete(f"{API}/folders/{folder['id']}/tasks/{filed['id']}", headers=bob).status_code == 404
    assert client.delete(f"{API}/folders/{folder['id']}/progress", headers=bob).status_code == 404

    body = client.get(f"{API}/task", headers=alice).json()
    assert {t["id"] for t in body["tasks"]} == {filed["id"], loose["id"]}
    assert [f["id"] for f in body["folders"]] == [folder["id"]]

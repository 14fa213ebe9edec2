"""API tests for direct messages."""

import pytest

from conftest import assert_no_password, auth


def send(client, token, receiver_id, subject="Hello", content="Nice portfolio"):
    return client.post(
        "/messages",
        json={"receiver_id": receiver_id, "subject": subject, "content": content},
        headers=auth(token),
    )


class TestSend:
    def test_send(self, client, alice, bob):
        response = send(client, alice["token"], bob["user"]["id"])
        assert response.status_code == 201, response.text
        data = response.json()
        assert data["sender_id"] == alice["user"]["id"]
        assert data["receiver_id"] == bob["user"]["id"]
        assert (data["sender_name"], data["receiver_name"]) == ("Alice", "Bob")
        assert_no_password(data)

    @pytest.mark.parametrize("who", ["alice", "bob"])
    def test_cannot_message_yourself(self, client, alice, bob, who):
        user = {"alice": alice, "bob": bob}[who]
        response = send(client, user["token"], user["user"]["id"])
        assert response.status_code == 400
        assert response.json()["detail"] == "You cannot send a message to yourself"

    def test_admin_cannot_message_self(self, client, admin_token):
        admin_id = client.get("/users/me", headers=auth(admin_token)).json()["id"]
        assert send(client, admin_token, admin_id).status_code == 400

    def test_unknown_receiver(self, client, alice):
        response = send(client, alice["token"], 9999)
        assert response.status_code == 400
        assert response.json()["detail"] == "Receiver not found"

    def test_requires_auth(self, client, bob):
        response = client.post(
            "/messages",
            json={"receiver_id": bob["user"]["id"], "subject": "s", "content": "c"},
        )
        assert response.status_code == 401

    def test_empty_content_rejected(self, client, alice, bob):
        assert send(client, alice["token"], bob["user"]["id"], content="").status_code == 400


class TestInbox:
    def test_sent_and_received_newest_first(self, client, alice, bob):
        send(client, alice["token"], bob["user"]["id"], subject="first")
        send(client, bob["token"], alice["user"]["id"], subject="second")

        for user in (alice, bob):
            inbox = client.get("/messages/inbox", headers=auth(user["token"])).json()
            assert [m["subject"] for m in inbox] == ["second", "first"]

    def test_inbox_is_private(self, client, alice, bob):
        send(client, alice["token"], bob["user"]["id"])
        client.post("/users", json={"name": "Eve", "email": "eve@x.com", "password": "pw"})
        token = client.post("/login", json={"email": "eve@x.com", "password": "pw"}).json()["token"]
        assert client.get("/messages/inbox", headers=auth(token)).json() == []

    def test_requires_auth(self, client):
        assert client.get("/messages/inbox").status_code == 401

"""End-to-end tests for chat routes."""


class TestChatRoutes:
    """Starting chats, listing them and exchanging messages over HTTP."""

    def test_requires_auth(self, client):
        response = client.get("/chats")

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_invalid_token(self, client):
        response = client.get("/chats", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_start_chat_is_idempotent(self, client, auth, seeded):
        first = client.post("/chats", json={"otherUserId": 1}, headers=auth(2))
        second = client.post("/chats", json={"otherUserId": 2}, headers=auth(1))

        assert first.status_code == 201
        assert second.status_code == 201
        chat = first.json()
        assert chat["id"] == second.json()["id"]
        assert chat["userAId"] == 1
        assert chat["userBId"] == 2
        assert chat["propertyId"] is None

    def test_property_chat_is_separate(self, client, auth, seeded):
        plain = client.post("/chats", json={"otherUserId": 1}, headers=auth(2)).json()
        scoped = client.post(
            "/chats", json={"otherUserId": 1, "propertyId": 10}, headers=auth(2)
        ).json()

        assert scoped["id"] != plain["id"]
        assert scoped["propertyId"] == 10

    def test_self_chat_is_400(self, client, auth, seeded):
        response = client.post("/chats", json={"otherUserId": 2}, headers=auth(2))

        assert response.status_code == 400
        assert response.json() == {
            "error": "Cannot chat with yourself",
            "field": "otherUserId",
        }

    def test_unknown_user_is_404(self, client, auth, seeded):
        response = client.post("/chats", json={"otherUserId": 99}, headers=auth(2))

        assert response.status_code == 404
        assert "error" in response.json()

    def test_list_chats(self, client, auth, seeded):
        chat = client.post("/chats", json={"otherUserId": 1}, headers=auth(2)).json()

        mine = client.get("/chats", headers=auth(1)).json()
        theirs = client.get("/chats", headers=auth(3)).json()

        assert [c["id"] for c in mine["chats"]] == [chat["id"]]
        assert theirs["chats"] == []

    def test_send_and_list_messages(self, client, auth, seeded):
        chat = client.post("/chats", json={"otherUserId": 1}, headers=auth(2)).json()

        sent = client.post(
            f"/chats/{chat['id']}/messages",
            json={"content": "  Is the flat still available?  "},
            headers=auth(2),
        )
        client.post(
            f"/chats/{chat['id']}/messages",
            json={"content": "Yes!"},
            headers=auth(1),
        )
        history = client.get(f"/chats/{chat['id']}/messages", headers=auth(1))

        assert sent.status_code == 201
        assert sent.json()["content"] == "Is the flat still available?"
        assert sent.json()["senderId"] == 2
        messages = history.json()["messages"]
        assert [m["content"] for m in messages] == [
            "Is the flat still available?",
            "Yes!",
        ]

    def test_blank_message_is_400(self, client, auth, seeded):
        chat = client.post("/chats", json={"otherUserId": 1}, headers=auth(2)).json()

        response = client.post(
            f"/chats/{chat['id']}/messages", json={"content": "   "}, headers=auth(2)
        )

        assert response.status_code == 400
        assert response.json()["field"] == "content"

    def test_non_participant_is_403(self, client, auth, seeded):
        chat = client.post("/chats", json={"otherUserId": 1}, headers=auth(2)).json()

        send = client.post(
            f"/chats/{chat['id']}/messages", json={"content": "hi"}, headers=auth(3)
        )
        read = client.get(f"/chats/{chat['id']}/messages", headers=auth(3))

        assert send.status_code == 403
        assert read.status_code == 403

    def test_unknown_chat_is_404(self, client, auth, seeded):
        response = client.get("/chats/404/messages", headers=auth(1))

        assert response.status_code == 404

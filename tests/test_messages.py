def send(client, headers, receiver_id, content):
    return client.post("/api/messages", json={"receiver_id": receiver_id, "content": content}, headers=headers)


def test_send_and_read_conversation(client, farmer, buyer, transporter):
    assert send(client, buyer[1], farmer[0].id, "Any wheat next season?").status_code == 201
    send(client, farmer[1], buyer[0].id, "Around 150 quintals.")
    send(client, transporter[1], buyer[0].id, "I can deliver next week.")
    send(client, buyer[1], farmer[0].id, "Great, thanks!")

    convo = client.get(f"/api/messages/{farmer[0].id}", headers=buyer[1]).json()
    assert [m["content"] for m in convo] == [
        "Any wheat next season?",
        "Around 150 quintals.",
        "Great, thanks!",
    ]
    assert all(m["read"] is False for m in convo)
    # Same conversation seen from the other side.
    assert len(client.get(f"/api/messages/{buyer[0].id}", headers=farmer[1]).json()) == 3


def test_message_validation(client, buyer, farmer):
    assert send(client, buyer[1], 999, "hello").status_code == 404
    to_self = send(client, buyer[1], buyer[0].id, "note to self")
    assert to_self.status_code == 400
    assert to_self.json()["errors"] == [{"field": "receiver_id", "message": "You cannot send a message to yourself"}]
    assert client.get("/api/messages/unread", headers=buyer[1]).json() == []
    empty = send(client, buyer[1], farmer[0].id, "   ")
    assert empty.status_code == 400
    assert empty.json()["errors"][0]["field"] == "content"
    assert send(client, {}, farmer[0].id, "hi").status_code == 401


def test_conversation_with_unknown_user(client, buyer):
    assert client.get("/api/messages/999", headers=buyer[1]).status_code == 404


def test_unread_and_mark_read(client, farmer, buyer):
    message = send(client, buyer[1], farmer[0].id, "Interested in your tomatoes").json()
    send(client, buyer[1], farmer[0].id, "Still there?")

    unread = client.get("/api/messages/unread", headers=farmer[1]).json()
    assert len(unread) == 2
    assert client.get("/api/messages/unread", headers=buyer[1]).json() == []

    marked = client.patch(f"/api/messages/{message['id']}/read", headers=farmer[1])
    assert marked.status_code == 200
    assert marked.json()["read"] is True
    assert len(client.get("/api/messages/unread", headers=farmer[1]).json()) == 1

    again = client.patch(f"/api/messages/{message['id']}/read", headers=farmer[1])
    assert again.status_code == 200
    assert again.json()["read"] is True


def test_only_receiver_marks_read(client, farmer, buyer):
    message = send(client, buyer[1], farmer[0].id, "Hello").json()
    response = client.patch(f"/api/messages/{message['id']}/read", headers=buyer[1])
    assert response.status_code == 403
    unread = client.get("/api/messages/unread", headers=farmer[1]).json()
    assert [m["id"] for m in unread] == [message["id"]]


def test_mark_missing_message(client, farmer):
    assert client.patch("/api/messages/55/read", headers=farmer[1]).status_code == 404

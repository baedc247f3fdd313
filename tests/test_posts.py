"""API endpoint tests for posts, comments and direct messages."""

from unittest.mock import patch

from src.models.comment import Comment


def create_post(client, content="hello", username="Alice"):
    response = client.post("/posts", json={"content": content, "username": username})
    assert response.status_code == 201
    return response.json()


def test_create_post(client, queued_notifications):
    """Test creating a post queues the fan-out with its id."""
    post = create_post(client)

    assert post["content"] == "hello"
    assert post["username"] == "Alice"
    assert post["created_at"] is not None
    queued_notifications["post"].assert_called_once_with(post["id"])


def test_create_post_requires_content(client, queued_notifications):
    """Test that empty content is rejected before anything is written."""
    response = client.post("/posts", json={"content": "", "username": "Alice"})
    assert response.status_code == 400

    response = client.post("/posts", json={"username": "Alice"})
    assert response.status_code == 400

    queued_notifications["post"].assert_not_called()
    assert client.get("/posts").json() == []


def test_create_post_survives_broker_failure(client):
    """The post is saved even if the notification task cannot be queued."""
    with patch(
        "src.tasks.notifications.notify_new_post.delay",
        side_effect=ConnectionError("broker down"),
    ):
        response = client.post("/posts", json={"content": "still here", "username": "Alice"})

    assert response.status_code == 201
    assert [p["content"] for p in client.get("/posts").json()] == ["still here"]


def test_get_posts_newest_first(client):
    """Test posts come back in reverse creation order."""
    for content in ["first", "second", "third"]:
        create_post(client, content=content)

    response = client.get("/posts")
    assert response.status_code == 200
    assert [p["content"] for p in response.json()] == ["third", "second", "first"]


def test_get_post(client):
    """Test fetching a single post."""
    post = create_post(client)
    response = client.get(f"/posts/{post['id']}")
    assert response.status_code == 200
    assert response.json()["content"] == "hello"

    assert client.get("/posts/99999").status_code == 404


def test_update_post(client):
    """Test updating a post's content."""
    post = create_post(client)

    response = client.put(f"/posts/{post['id']}", json={"content": "edited"})
    assert response.status_code == 200
    assert response.json()["content"] == "edited"
    assert response.json()["username"] == "Alice"


def test_update_post_not_found(client):
    """Test updating a post that does not exist."""
    response = client.put("/posts/99999", json={"content": "edited"})
    assert response.status_code == 404


def test_update_post_cannot_change_author(client):
    """Only content is mutable."""
    post = create_post(client)
    response = client.put(f"/posts/{post['id']}", json={"content": "x", "username": "Mallory"})
    assert response.status_code == 400


def test_delete_post(client):
    """Test deleting a post."""
    post = create_post(client)

    response = client.delete(f"/posts/{post['id']}")
    assert response.status_code == 200
    assert "message" in response.json()
    assert client.get("/posts").json() == []

    response = client.delete(f"/posts/{post['id']}")
    assert response.status_code == 404


def test_delete_post_keeps_comments(client, db):
    """Comments are not cascaded; they just become unreachable."""
    post = create_post(client)
    client.post(
        f"/api/posts/{post['id']}/comments", json={"content": "nice", "username": "Bob"}
    )

    client.delete(f"/posts/{post['id']}")

    assert db.query(Comment).filter(Comment.post_id == post["id"]).count() == 1
    assert client.get(f"/api/posts/{post['id']}/comments").status_code == 404


def test_create_top_level_and_reply_comments(client):
    """Test comments with and without a parent."""
    post = create_post(client)
    url = f"/api/posts/{post['id']}/comments"

    top = client.post(url, json={"content": "first!", "username": "Bob", "parentId": None})
    assert top.status_code == 201
    assert top.json()["parent_id"] is None
    assert top.json()["post_id"] == post["id"]

    reply = client.post(
        url, json={"content": "agreed", "username": "Carol", "parentId": top.json()["id"]}
    )
    assert reply.status_code == 201
    assert reply.json()["parent_id"] == top.json()["id"]


def test_create_comment_unknown_parent(client):
    """A parentId that does not exist is rejected."""
    post = create_post(client)
    response = client.post(
        f"/api/posts/{post['id']}/comments",
        json={"content": "orphan", "username": "Bob", "parentId": 99999},
    )
    assert response.status_code == 400


def test_create_comment_parent_on_other_post(client):
    """A reply must stay on its parent's post."""
    first = create_post(client, content="one")
    second = create_post(client, content="two")
    parent = client.post(
        f"/api/posts/{first['id']}/comments", json={"content": "hi", "username": "Bob"}
    ).json()

    response = client.post(
        f"/api/posts/{second['id']}/comments",
        json={"content": "wrong thread", "username": "Bob", "parentId": parent["id"]},
    )
    assert response.status_code == 400


def test_create_comment_post_not_found(client):
    """Test commenting on a post that does not exist."""
    response = client.post(
        "/api/posts/99999/comments", json={"content": "hello?", "username": "Bob"}
    )
    assert response.status_code == 404


def test_get_comments_newest_first(client):
    """Test comments are listed newest first and scoped to their post."""
    post = create_post(client)
    other = create_post(client, content="other")
    url = f"/api/posts/{post['id']}/comments"
    for content in ["a", "b", "c"]:
        client.post(url, json={"content": content, "username": "Bob"})
    client.post(
        f"/api/posts/{other['id']}/comments", json={"content": "elsewhere", "username": "Bob"}
    )

    response = client.get(url)
    assert response.status_code == 200
    assert [c["content"] for c in response.json()] == ["c", "b", "a"]


def test_send_message(client, queued_notifications):
    """Test sending a message queues a notification for it."""
    response = client.post(
        "/messages", json={"sender": "Alice", "receiver": "Bob", "content": "hey"}
    )
    assert response.status_code == 201
    assert "message" in response.json()
    queued_notifications["message"].assert_called_once()


def test_send_message_missing_receiver(client, queued_notifications):
    """Test that incomplete messages are rejected."""
    response = client.post("/messages", json={"sender": "Alice", "content": "hey"})
    assert response.status_code == 400
    queued_notifications["message"].assert_not_called()


def test_conversation_is_symmetric_and_oldest_first(client):
    """Both directions of a conversation return the same ordered messages."""
    exchange = [
        ("Alice", "Bob", "hi bob"),
        ("Bob", "Alice", "hi alice"),
        ("Alice", "Carol", "unrelated"),
        ("Alice", "Bob", "how are you"),
    ]
    for sender, receiver, content in exchange:
        client.post("/messages", json={"sender": sender, "receiver": receiver, "content": content})

    forward = client.get("/messages/Alice/Bob")
    backward = client.get("/messages/Bob/Alice")
    assert forward.status_code == 200
    assert forward.json() == backward.json()
    assert [m["content"] for m in forward.json()] == ["hi bob", "hi alice", "how are you"]


def test_conversation_empty(client):
    """Test a conversation with no messages."""
    response = client.get("/messages/Alice/Nobody")
    assert response.status_code == 200
    assert response.json() == []

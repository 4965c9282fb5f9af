"""
tests/test_posts.py -- Integration tests for /api/posts routes.

Covers:
  - every posts route requires a token
  - create snapshots author name/avatar; list is newest first
  - delete: owner only, 404 for unknown id
  - like/unlike: once per user, unlike without like is rejected
  - comments: newest first, removal by comment id, owner only
"""

from __future__ import annotations

from fastapi.testclient import TestClient


def _post(client: TestClient, headers: dict, text: str = "Hello world") -> dict:
    resp = client.post("/api/posts", json={"text": text}, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


class TestPostsCrud:
    def test_all_routes_require_token(self, client: TestClient) -> None:
        some_id = "0" * 24
        calls = [
            client.get("/api/posts"),
            client.post("/api/posts", json={"text": "x"}),
            client.get(f"/api/posts/{some_id}"),
            client.delete(f"/api/posts/{some_id}"),
            client.put(f"/api/posts/like/{some_id}"),
            client.put(f"/api/posts/unlike/{some_id}"),
            client.post(f"/api/posts/comment/{some_id}", json={"text": "x"}),
            client.delete(f"/api/posts/comment/{some_id}/{some_id}"),
        ]
        assert [r.status_code for r in calls] == [401] * len(calls)

    def test_create_snapshots_author(self, client: TestClient, register) -> None:
        _token, user_id, headers = register("Ada Lovelace")
        post = _post(client, headers, "  First post  ")
        assert post["text"] == "First post"
        assert post["user"] == user_id
        assert post["name"] == "Ada Lovelace"
        assert post["avatar"].startswith("https://www.gravatar.com/avatar/")
        assert post["likes"] == [] and post["comments"] == []
        assert post["date"]

    def test_text_required(self, client: TestClient, register) -> None:
        _token, _uid, headers = register()
        resp = client.post("/api/posts", json={"text": "   "}, headers=headers)
        assert resp.status_code == 400
        assert resp.json()["error"]["fields"] == [{"field": "text", "message": "Text is required"}]

    def test_list_newest_first(self, client: TestClient, register) -> None:
        _token, _uid, headers = register()
        ids = [_post(client, headers, f"post {n}")["id"] for n in range(3)]
        listed = client.get("/api/posts", headers=headers).json()
        assert [p["id"] for p in listed] == list(reversed(ids))

    def test_get_unknown_post(self, client: TestClient, register) -> None:
        _token, _uid, headers = register()
        resp = client.get("/api/posts/" + "f" * 24, headers=headers)
        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Post not found"

    def test_delete_owner_only(self, client: TestClient, register) -> None:
        _t1, _u1, ada = register("Ada", "ada@mail.com")
        _t2, _u2, bob = register("Bob", "bob@mail.com")
        post = _post(client, ada)

        resp = client.delete(f"/api/posts/{post['id']}", headers=bob)
        assert resp.status_code == 401
        assert resp.json()["error"]["message"] == "User not authorized"
        assert client.get(f"/api/posts/{post['id']}", headers=ada).status_code == 200

        resp = client.delete(f"/api/posts/{post['id']}", headers=ada)
        assert resp.status_code == 200
        assert resp.json() == {"msg": "Post removed"}
        assert client.get(f"/api/posts/{post['id']}", headers=ada).status_code == 404
        assert client.delete(f"/api/posts/{post['id']}", headers=ada).status_code == 404


class TestLikes:
    def test_like_once_then_unlike(self, client: TestClient, register) -> None:
        _t1, ada_id, ada = register("Ada", "ada@mail.com")
        _t2, bob_id, bob = register("Bob", "bob@mail.com")
        post = _post(client, ada)

        resp = client.put(f"/api/posts/like/{post['id']}", headers=ada)
        assert resp.status_code == 200
        assert resp.json() == [{"user": ada_id}]

        resp = client.put(f"/api/posts/like/{post['id']}", headers=ada)
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Post already liked"

        resp = client.put(f"/api/posts/like/{post['id']}", headers=bob)
        assert resp.json() == [{"user": bob_id}, {"user": ada_id}]

        resp = client.put(f"/api/posts/unlike/{post['id']}", headers=ada)
        assert resp.status_code == 200
        assert resp.json() == [{"user": bob_id}]

    def test_unlike_without_like(self, client: TestClient, register) -> None:
        _token, _uid, headers = register()
        post = _post(client, headers)
        resp = client.put(f"/api/posts/unlike/{post['id']}", headers=headers)
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Post has not yet been liked"

    def test_like_unknown_post(self, client: TestClient, register) -> None:
        _token, _uid, headers = register()
        assert client.put("/api/posts/like/" + "a" * 24, headers=headers).status_code == 404


class TestComments:
    def test_comments_newest_first_and_remove_exact_id(self, client: TestClient, register) -> None:
        _t1, ada_id, ada = register("Ada", "ada@mail.com")
        post = _post(client, ada)

        client.post(f"/api/posts/comment/{post['id']}", json={"text": "first"}, headers=ada)
        comments = client.post(f"/api/posts/comment/{post['id']}", json={"text": "second"}, headers=ada).json()
        assert [c["text"] for c in comments] == ["second", "first"]
        assert all(c["user"] == ada_id and c["name"] == "Ada" for c in comments)

        # Same author, two comments: only the addressed one goes.
        first_id = comments[1]["id"]
        resp = client.delete(f"/api/posts/comment/{post['id']}/{first_id}", headers=ada)
        assert resp.status_code == 200
        assert [c["text"] for c in resp.json()] == ["second"]

        stored = client.get(f"/api/posts/{post['id']}", headers=ada).json()
        assert [c["text"] for c in stored["comments"]] == ["second"]

    def test_remove_comment_owner_only(self, client: TestClient, register) -> None:
        _t1, _u1, ada = register("Ada", "ada@mail.com")
        _t2, _u2, bob = register("Bob", "bob@mail.com")
        post = _post(client, ada)
        comments = client.post(f"/api/posts/comment/{post['id']}", json={"text": "mine"}, headers=ada).json()

        resp = client.delete(f"/api/posts/comment/{post['id']}/{comments[0]['id']}", headers=bob)
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "not_authorized"

        stored = client.get(f"/api/posts/{post['id']}", headers=bob).json()
        assert [c["id"] for c in stored["comments"]] == [comments[0]["id"]]
        assert stored["comments"][0]["text"] == "mine"

    def test_remove_unknown_comment(self, client: TestClient, register) -> None:
        _token, _uid, headers = register()
        post = _post(client, headers)
        resp = client.delete(f"/api/posts/comment/{post['id']}/nope", headers=headers)
        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Comment does not exist"

    def test_comment_text_required(self, client: TestClient, register) -> None:
        _token, _uid, headers = register()
        post = _post(client, headers)
        resp = client.post(f"/api/posts/comment/{post['id']}", json={}, headers=headers)
        assert resp.status_code == 400

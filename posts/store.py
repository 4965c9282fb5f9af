"""
posts/store.py -- SQLAlchemy Core persistence layer for posts.

Pattern: Repository + Data Mapper, same as auth/store.py and
profiles/store.py. likes and comments are JSON arrays in Text columns,
read and written whole. save_reactions() replaces both arrays with whatever
the in-memory Post holds, so concurrent likes/comments on one post are
last-write-wins.

Security: all queries use bound parameters. No f-strings in SQL.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, MetaData, String, Table, Text
from sqlalchemy.engine import Engine

from core.database import connect, dump_json, load_json, new_id, now_iso
from posts.models import Comment, Like, Post

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_posts = Table(
    "posts",
    _metadata,
    Column("id", String(24), primary_key=True),
    Column("user_id", String(24), nullable=False),
    Column("text", Text, nullable=False),
    Column("name", String(255)),
    Column("avatar", Text),
    Column("likes", Text),  # JSON array of {"user": id}, newest first
    Column("comments", Text),  # JSON array of comment docs, newest first
    Column("created_at", String(32), nullable=False),
    Index("ix_posts_created_at", "created_at"),
)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class PostStore:
    """Repository for Post documents.

    Usage:
        store = PostStore(engine)
        post_id = store.create_post(Post(user_id=uid, text="hello", name="Ada", avatar=url))
        post = store.get_post(post_id)
        post.likes.insert(0, Like(user_id=uid))
        store.save_reactions(post)
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        _metadata.create_all(self.engine)

    def create_post(self, post: Post) -> str:
        """Insert a new post and return its id. created_at is stamped here."""
        post_id = new_id()
        with connect(self.engine) as conn:
            conn.execute(
                _posts.insert().values(
                    id=post_id,
                    user_id=post.user_id,
                    text=post.text,
                    name=post.name,
                    avatar=post.avatar,
                    likes=dump_json([_like_to_doc(like) for like in post.likes]),
                    comments=dump_json([_comment_to_doc(c) for c in post.comments]),
                    created_at=now_iso(),
                )
            )
            conn.commit()
        return post_id

    def get_post(self, post_id: str) -> Post | None:
        with connect(self.engine) as conn:
            row = conn.execute(_posts.select().where(_posts.c.id == post_id)).fetchone()
        return _row_to_post(row) if row is not None else None

    def list_posts(self) -> list[Post]:
        """Return every post, newest first."""
        with connect(self.engine) as conn:
            rows = conn.execute(_posts.select().order_by(_posts.c.created_at.desc())).fetchall()
        return [_row_to_post(r) for r in rows]

    def save_reactions(self, post: Post) -> None:
        """Write post.likes and post.comments back to storage."""
        with connect(self.engine) as conn:
            conn.execute(
                _posts.update()
                .where(_posts.c.id == post.id)
                .values(
                    likes=dump_json([_like_to_doc(like) for like in post.likes]),
                    comments=dump_json([_comment_to_doc(c) for c in post.comments]),
                )
            )
            conn.commit()

    def delete_post(self, post_id: str) -> bool:
        """Delete a post. Returns True if deleted, False if not found.

        Ownership is the caller's check; the store deletes by id alone.
        """
        with connect(self.engine) as conn:
            result = conn.execute(_posts.delete().where(_posts.c.id == post_id))
            conn.commit()
        return result.rowcount > 0


# ---------------------------------------------------------------------------
# Mappers
# ---------------------------------------------------------------------------


def _like_to_doc(like: Like) -> dict:
    return {"user": like.user_id}


def _comment_to_doc(c: Comment) -> dict:
    return {
        "id": c.id,
        "user": c.user_id,
        "text": c.text,
        "name": c.name,
        "avatar": c.avatar,
        "date": c.created_at,
    }


def _doc_to_comment(doc: dict) -> Comment:
    return Comment(
        id=doc["id"],
        user_id=doc["user"],
        text=doc["text"],
        name=doc.get("name", ""),
        avatar=doc.get("avatar", ""),
        created_at=doc.get("date", ""),
    )


def _row_to_post(row) -> Post:
    return Post(
        id=row.id,
        user_id=row.user_id,
        text=row.text,
        name=row.name or "",
        avatar=row.avatar or "",
        likes=[Like(user_id=d["user"]) for d in load_json(row.likes, [])],
        comments=[_doc_to_comment(d) for d in load_json(row.comments, [])],
        created_at=row.created_at,
    )

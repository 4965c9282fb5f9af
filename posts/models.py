"""
posts/models.py -- Domain dataclasses for the posts feed.

name and avatar on Post and Comment are snapshots of the author's User record
taken at creation time; later profile changes or account deletion do not
rewrite them.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Like:
    user_id: str


@dataclass
class Comment:
    id: str
    user_id: str
    text: str
    name: str
    avatar: str
    created_at: str  # ISO 8601


@dataclass
class Post:
    """A feed post.

    likes: at most one Like per user_id, newest first.
    comments: newest first; Comment.id is unique within the post.

    id is None before the record is written to the database.
    """

    user_id: str
    text: str
    name: str
    avatar: str
    id: Optional[str] = None
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: str = ""  # ISO 8601, set by store on insert

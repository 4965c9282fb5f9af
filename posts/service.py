"""
posts/service.py -- Posts feed business rules.

Ownership: deleting a post or a comment requires the caller to be its
author; anyone signed in may read, like, unlike and comment. Ownership
failures raise Forbidden (401) and leave the data untouched.

Likes and comments are mutated in memory and written back whole via
PostStore.save_reactions(). Comment removal matches on the comment id only,
so a user with several comments on a post removes exactly the one addressed.
"""

from __future__ import annotations

import logging

from auth.models import User
from auth.store import UserStore
from core.database import new_id, now_iso
from core.errors import AlreadyLiked, Forbidden, NotFound, NotLiked
from posts.models import Comment, Like, Post
from posts.schemas import CommentCreate, PostCreate
from posts.store import PostStore

logger = logging.getLogger("devconnector.posts")


class PostService:
    def __init__(self, posts: PostStore, users: UserStore) -> None:
        self.posts = posts
        self.users = users

    def create(self, user_id: str, data: PostCreate) -> Post:
        author = self._author(user_id)
        post = Post(user_id=user_id, text=data.text, name=author.name, avatar=author.avatar)
        post_id = self.posts.create_post(post)
        return self.get_by_id(post_id)

    def list_all(self) -> list[Post]:
        return self.posts.list_posts()

    def get_by_id(self, post_id: str) -> Post:
        post = self.posts.get_post(post_id)
        if post is None:
            raise NotFound("Post not found")
        return post

    def delete(self, user_id: str, post_id: str) -> None:
        post = self.get_by_id(post_id)
        if post.user_id != user_id:
            raise Forbidden()
        self.posts.delete_post(post_id)
        logger.info("User %s deleted post %s", user_id, post_id)

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    def like(self, user_id: str, post_id: str) -> list[Like]:
        post = self.get_by_id(post_id)
        if any(like.user_id == user_id for like in post.likes):
            raise AlreadyLiked()
        post.likes.insert(0, Like(user_id=user_id))
        self.posts.save_reactions(post)
        return post.likes

    def unlike(self, user_id: str, post_id: str) -> list[Like]:
        post = self.get_by_id(post_id)
        for index, like in enumerate(post.likes):
            if like.user_id == user_id:
                del post.likes[index]
                break
        else:
            raise NotLiked()
        self.posts.save_reactions(post)
        return post.likes

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def add_comment(self, user_id: str, post_id: str, data: CommentCreate) -> list[Comment]:
        post = self.get_by_id(post_id)
        author = self._author(user_id)
        comment = Comment(
            id=new_id(),
            user_id=user_id,
            text=data.text,
            name=author.name,
            avatar=author.avatar,
            created_at=now_iso(),
        )
        post.comments.insert(0, comment)
        self.posts.save_reactions(post)
        return post.comments

    def remove_comment(self, user_id: str, post_id: str, comment_id: str) -> list[Comment]:
        post = self.get_by_id(post_id)
        comment = next((c for c in post.comments if c.id == comment_id), None)
        if comment is None:
            raise NotFound("Comment does not exist")
        if comment.user_id != user_id:
            raise Forbidden()
        post.comments = [c for c in post.comments if c.id != comment_id]
        self.posts.save_reactions(post)
        return post.comments

    def _author(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

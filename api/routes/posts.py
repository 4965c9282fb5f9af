"""
api/routes/posts.py -- Posts feed REST endpoints.

Routes:
  POST   /api/posts                              -- create post
  GET    /api/posts                              -- all posts, newest first
  GET    /api/posts/{id}                         -- single post
  DELETE /api/posts/{id}                         -- delete own post
  PUT    /api/posts/like/{id}                    -- like (once per user)
  PUT    /api/posts/unlike/{id}                  -- remove own like
  POST   /api/posts/comment/{id}                 -- add comment, newest first
  DELETE /api/posts/comment/{id}/{comment_id}    -- delete own comment

Every route requires a token. Router-level dependency applies the auth gate
to every route registered on this router.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api.models import CommentResponse, LikeResponse, MessageResponse, PostResponse
from auth.dependencies import get_current_user_id
from posts.schemas import CommentCreate, PostCreate
from posts.service import PostService

router = APIRouter(dependencies=[Depends(get_current_user_id)])


def _service(request: Request) -> PostService:
    return request.app.state.post_service


@router.post("/posts", response_model=PostResponse)
def create_post(request: Request, body: PostCreate) -> PostResponse:
    post = _service(request).create(request.state.user_id, body)
    return PostResponse.from_post(post)


@router.get("/posts", response_model=list[PostResponse])
def list_posts(request: Request) -> list[PostResponse]:
    return [PostResponse.from_post(p) for p in _service(request).list_all()]


@router.get("/posts/{post_id}", response_model=PostResponse)
def get_post(request: Request, post_id: str) -> PostResponse:
    return PostResponse.from_post(_service(request).get_by_id(post_id))


@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_post(request: Request, post_id: str) -> MessageResponse:
    """Only the author may delete; anyone else gets 401 not_authorized."""
    _service(request).delete(request.state.user_id, post_id)
    return MessageResponse(msg="Post removed")


# ---------------------------------------------------------------------------
# Likes
# ---------------------------------------------------------------------------


@router.put("/posts/like/{post_id}", response_model=list[LikeResponse])
def like_post(request: Request, post_id: str) -> list[LikeResponse]:
    likes = _service(request).like(request.state.user_id, post_id)
    return [LikeResponse.from_like(like) for like in likes]


@router.put("/posts/unlike/{post_id}", response_model=list[LikeResponse])
def unlike_post(request: Request, post_id: str) -> list[LikeResponse]:
    likes = _service(request).unlike(request.state.user_id, post_id)
    return [LikeResponse.from_like(like) for like in likes]


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


@router.post("/posts/comment/{post_id}", response_model=list[CommentResponse])
def add_comment(request: Request, post_id: str, body: CommentCreate) -> list[CommentResponse]:
    comments = _service(request).add_comment(request.state.user_id, post_id, body)
    return [CommentResponse.from_comment(c) for c in comments]


@router.delete("/posts/comment/{post_id}/{comment_id}", response_model=list[CommentResponse])
def delete_comment(request: Request, post_id: str, comment_id: str) -> list[CommentResponse]:
    comments = _service(request).remove_comment(request.state.user_id, post_id, comment_id)
    return [CommentResponse.from_comment(c) for c in comments]

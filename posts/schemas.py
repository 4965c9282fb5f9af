"""posts/schemas.py -- Input schemas for posts and comments."""

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from core.validators import required

_Text = Annotated[str, StringConstraints(strip_whitespace=True, max_length=5000), required("Text is required")]


class PostCreate(BaseModel):
    """Body for POST /api/posts."""

    text: _Text = Field(default="", validate_default=True)


class CommentCreate(BaseModel):
    """Body for POST /api/posts/comment/{id}."""

    text: _Text = Field(default="", validate_default=True)

"""
API response models for DevConnector REST endpoints.

These Pydantic v2 models define the HTTP transport contract. They are
intentionally separate from the dataclasses in */models.py, which own the
internal domain representation. Request bodies live beside their services
(auth/schemas.py, profiles/schemas.py, posts/schemas.py) because the
services consume them directly.

Wire names follow what the web client reads: "user" for owner ids, "date"
for creation timestamps, "from"/"to" for experience and education dates.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from auth.models import User
from posts.models import Comment, Like, Post
from profiles.models import Education, Experience, Profile

# ---------------------------------------------------------------------------
# Errors and misc
# ---------------------------------------------------------------------------


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    message: str


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None
    fields: Optional[list[FieldError]] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    msg: str


class TokenResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """The caller's account, minus the password hash."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    avatar: str
    date: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email, avatar=user.avatar, date=user.created_at or "")


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


class OwnerResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    avatar: Optional[str] = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    company: str
    location: Optional[str] = None
    from_date: Optional[datetime.date] = Field(default=None, alias="from")
    to_date: Optional[datetime.date] = Field(default=None, alias="to")
    current: bool = False
    description: Optional[str] = None

    @classmethod
    def from_entry(cls, e: Experience) -> "ExperienceResponse":
        return cls(
            id=e.id,
            title=e.title,
            company=e.company,
            location=e.location,
            from_date=e.from_date,
            to_date=e.to_date,
            current=e.current,
            description=e.description,
        )


class EducationResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_date: Optional[datetime.date] = Field(default=None, alias="from")
    to_date: Optional[datetime.date] = Field(default=None, alias="to")
    current: bool = False
    description: Optional[str] = None

    @classmethod
    def from_entry(cls, e: Education) -> "EducationResponse":
        return cls(
            id=e.id,
            school=e.school,
            degree=e.degree,
            fieldofstudy=e.fieldofstudy,
            from_date=e.from_date,
            to_date=e.to_date,
            current=e.current,
            description=e.description,
        )


class ProfileResponse(BaseModel):
    """A profile with its owner's public name and avatar joined in."""

    model_config = ConfigDict(frozen=True)

    id: str
    user: OwnerResponse
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    date: str

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        """Factory method -- the mapping lives with the output model, not in route handlers."""
        if profile.owner is not None:
            owner = OwnerResponse(id=profile.owner.id, name=profile.owner.name, avatar=profile.owner.avatar)
        else:
            owner = OwnerResponse(id=profile.user_id)
        return cls(
            id=profile.id,
            user=owner,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            status=profile.status,
            githubusername=profile.githubusername,
            skills=profile.skills,
            social=profile.social,
            experience=[ExperienceResponse.from_entry(e) for e in profile.experience],
            education=[EducationResponse.from_entry(e) for e in profile.education],
            date=profile.created_at,
        )


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


class LikeResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: str

    @classmethod
    def from_like(cls, like: Like) -> "LikeResponse":
        return cls(user=like.user_id)


class CommentResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    user: str
    text: str
    name: str
    avatar: str
    date: str

    @classmethod
    def from_comment(cls, c: Comment) -> "CommentResponse":
        return cls(id=c.id, user=c.user_id, text=c.text, name=c.name, avatar=c.avatar, date=c.created_at)


class PostResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    user: str
    text: str
    name: str
    avatar: str
    likes: list[LikeResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    date: str

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            user=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            likes=[LikeResponse.from_like(like) for like in post.likes],
            comments=[CommentResponse.from_comment(c) for c in post.comments],
            date=post.created_at,
        )

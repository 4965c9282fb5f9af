"""
profiles/models.py -- Domain dataclasses for developer profiles.

Pure data containers. All list mutation (front insertion, removal by id)
happens in profiles/service.py; persistence in profiles/store.py.

experience and education are newest-first by insertion order, not by date:
index 0 is whatever the user added last.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")
PROFILE_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")


@dataclass
class Experience:
    title: str
    company: str
    from_date: date
    id: str = ""  # assigned by ProfileService on insert
    location: Optional[str] = None
    to_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


@dataclass
class Education:
    school: str
    degree: str
    fieldofstudy: str
    from_date: date
    id: str = ""
    to_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


@dataclass
class ProfileOwner:
    """Public slice of the owning User, joined in when a profile is read."""

    id: str
    name: str
    avatar: str


@dataclass
class Profile:
    """One profile per user, keyed by user_id.

    social holds only the networks the user filled in (keys from
    SOCIAL_NETWORKS). owner is populated by ProfileService on reads and is
    never written back to storage.

    id is None before the record is written to the database.
    """

    user_id: str
    id: Optional[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: list[str] = field(default_factory=list)
    social: dict[str, str] = field(default_factory=dict)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    created_at: str = ""  # ISO 8601, set by store on insert
    owner: Optional[ProfileOwner] = None

"""
profiles/service.py -- Profile business rules.

Every write targets the caller's own profile (the user id resolved by the
auth gate), so there is no separate ownership check here: a user simply has
no way to address someone else's profile on a write path.

Nested lists (experience, education) are read, mutated in memory and written
back whole via ProfileStore.save_nested(). Entries go in at index 0 and are
removed by exact id; removing an id that is not present changes nothing but
still saves and returns the profile.
"""

from __future__ import annotations

import logging
from typing import Any

from auth.store import UserStore
from core.database import new_id
from core.errors import NotFound, UpstreamUnavailable
from profiles.github import fetch_github_repos
from profiles.models import PROFILE_FIELDS, SOCIAL_NETWORKS, Education, Experience, Profile, ProfileOwner
from profiles.schemas import EducationCreate, ExperienceCreate, ProfileUpsert
from profiles.store import ProfileStore

logger = logging.getLogger("devconnector.profiles")


def parse_skills(raw: str) -> list[str]:
    """Split a comma-separated skills string into a trimmed, ordered list.

    "HTML, CSS,  Python" -> ["HTML", "CSS", "Python"]. Empty items are dropped.
    """
    return [s.strip() for s in raw.split(",") if s.strip()]


class ProfileService:
    def __init__(
        self,
        profiles: ProfileStore,
        users: UserStore,
        github_api_url: str = "https://api.github.com",
        github_token: str = "",
    ) -> None:
        self.profiles = profiles
        self.users = users
        self.github_api_url = github_api_url
        self.github_token = github_token

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_own(self, user_id: str) -> Profile:
        profile = self.profiles.get_by_user(user_id)
        if profile is None:
            raise NotFound("There is no profile for this user")
        return self._with_owners([profile])[0]

    def get_by_user(self, user_id: str) -> Profile:
        profile = self.profiles.get_by_user(user_id)
        if profile is None:
            raise NotFound("Profile not found")
        return self._with_owners([profile])[0]

    def list_all(self) -> list[Profile]:
        return self._with_owners(self.profiles.list_profiles())

    # ------------------------------------------------------------------
    # Create / update / delete
    # ------------------------------------------------------------------

    def upsert(self, user_id: str, data: ProfileUpsert) -> Profile:
        """Create the caller's profile, or apply the provided fields to it.

        Partial update: fields left out of data (or blank) keep their stored
        values, including individual social links.
        """
        scalars: dict[str, Any] = {
            name: getattr(data, name) for name in PROFILE_FIELDS if getattr(data, name) is not None
        }
        skills = parse_skills(data.skills) if data.skills is not None else None
        social = {net: getattr(data, net) for net in SOCIAL_NETWORKS if getattr(data, net) is not None}

        existing = self.profiles.get_by_user(user_id)
        if existing is None:
            profile = Profile(user_id=user_id, skills=skills or [], social=social, **scalars)
            self.profiles.create_profile(profile)
            logger.info("Created profile for user %s", user_id)
        else:
            merged_social = {**existing.social, **social} if social else None
            self.profiles.update_fields(user_id, skills=skills, social=merged_social, **scalars)
        return self.get_own(user_id)

    def remove_own(self, user_id: str) -> None:
        """Delete the caller's profile and account.

        Posts the user wrote are left in place; their author name and avatar
        were snapshotted at creation, so they still render.
        """
        self.profiles.delete_by_user(user_id)
        self.users.delete_user(user_id)
        logger.info("Deleted profile and account for user %s", user_id)

    # ------------------------------------------------------------------
    # Experience / education
    # ------------------------------------------------------------------

    def add_experience(self, user_id: str, data: ExperienceCreate) -> Profile:
        profile = self._load_own(user_id)
        entry = Experience(
            id=new_id(),
            title=data.title,
            company=data.company,
            location=data.location,
            from_date=data.from_date,
            to_date=data.to_date,
            current=data.current,
            description=data.description,
        )
        profile.experience.insert(0, entry)
        self.profiles.save_nested(profile)
        return self.get_own(user_id)

    def remove_experience(self, user_id: str, exp_id: str) -> Profile:
        profile = self._load_own(user_id)
        profile.experience = [e for e in profile.experience if e.id != exp_id]
        self.profiles.save_nested(profile)
        return self.get_own(user_id)

    def add_education(self, user_id: str, data: EducationCreate) -> Profile:
        profile = self._load_own(user_id)
        entry = Education(
            id=new_id(),
            school=data.school,
            degree=data.degree,
            fieldofstudy=data.fieldofstudy,
            from_date=data.from_date,
            to_date=data.to_date,
            current=data.current,
            description=data.description,
        )
        profile.education.insert(0, entry)
        self.profiles.save_nested(profile)
        return self.get_own(user_id)

    def remove_education(self, user_id: str, edu_id: str) -> Profile:
        profile = self._load_own(user_id)
        profile.education = [e for e in profile.education if e.id != edu_id]
        self.profiles.save_nested(profile)
        return self.get_own(user_id)

    # ------------------------------------------------------------------
    # GitHub
    # ------------------------------------------------------------------

    def github_repos(self, username: str) -> list[dict]:
        repos = fetch_github_repos(username, api_url=self.github_api_url, token=self.github_token or None)
        if repos is None:
            raise UpstreamUnavailable()
        return repos

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_own(self, user_id: str) -> Profile:
        profile = self.profiles.get_by_user(user_id)
        if profile is None:
            raise NotFound("There is no profile for this user")
        return profile

    def _with_owners(self, profiles: list[Profile]) -> list[Profile]:
        """Attach the owner's name/avatar to each profile (one batched user lookup)."""
        users = self.users.get_by_ids(p.user_id for p in profiles)
        for profile in profiles:
            user = users.get(profile.user_id)
            if user is not None:
                profile.owner = ProfileOwner(id=user.id, name=user.name, avatar=user.avatar)
        return profiles

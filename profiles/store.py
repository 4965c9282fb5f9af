"""
profiles/store.py -- SQLAlchemy Core persistence layer for profiles.

Pattern: Repository + Data Mapper. ProfileStore is the repository;
_row_to_profile and the _*_to_doc / _doc_to_* helpers are the mappers.

Document layout: scalar profile fields are columns. skills, social,
experience and education are JSON serialized into Text columns and always
read and written whole -- save_nested() replaces both arrays in one UPDATE.
There is no version column, so two requests editing the same profile's
arrays concurrently resolve as last-write-wins.

UNIQUE(user_id) enforces one profile per user at the DB level.

Security: all queries use bound parameters. No f-strings in SQL.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from sqlalchemy import Column, MetaData, String, Table, Text
from sqlalchemy.engine import Engine

from core.database import connect, dump_json, load_json, new_id, now_iso
from profiles.models import PROFILE_FIELDS, Education, Experience, Profile

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_profiles = Table(
    "profiles",
    _metadata,
    Column("id", String(24), primary_key=True),
    Column("user_id", String(24), nullable=False, unique=True),
    Column("company", String(255)),
    Column("website", String(255)),
    Column("location", String(255)),
    Column("bio", Text),
    Column("status", String(255)),
    Column("githubusername", String(255)),
    Column("skills", Text),  # JSON array of strings
    Column("social", Text),  # JSON object, network -> URL
    Column("experience", Text),  # JSON array, newest first
    Column("education", Text),  # JSON array, newest first
    Column("created_at", String(32), nullable=False),
)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ProfileStore:
    """Repository for Profile documents.

    Usage:
        store = ProfileStore(engine)
        store.create_profile(Profile(user_id=uid, status="Developer"))
        profile = store.get_by_user(uid)
        profile.experience.insert(0, entry)
        store.save_nested(profile)
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        _metadata.create_all(self.engine)

    def create_profile(self, profile: Profile) -> str:
        """Insert a new profile and return its id.

        Raises StorageError if the user already has one (UNIQUE(user_id)).
        """
        profile_id = new_id()
        with connect(self.engine) as conn:
            conn.execute(
                _profiles.insert().values(
                    id=profile_id,
                    user_id=profile.user_id,
                    **{name: getattr(profile, name) for name in PROFILE_FIELDS},
                    skills=dump_json(profile.skills),
                    social=dump_json(profile.social),
                    experience=dump_json([_experience_to_doc(e) for e in profile.experience]),
                    education=dump_json([_education_to_doc(e) for e in profile.education]),
                    created_at=now_iso(),
                )
            )
            conn.commit()
        return profile_id

    def get_by_user(self, user_id: str) -> Profile | None:
        with connect(self.engine) as conn:
            row = conn.execute(_profiles.select().where(_profiles.c.user_id == user_id)).fetchone()
        return _row_to_profile(row) if row is not None else None

    def list_profiles(self) -> list[Profile]:
        """Return every profile, oldest first."""
        with connect(self.engine) as conn:
            rows = conn.execute(_profiles.select().order_by(_profiles.c.created_at, _profiles.c.id)).fetchall()
        return [_row_to_profile(r) for r in rows]

    def update_fields(
        self,
        user_id: str,
        *,
        skills: Optional[list[str]] = None,
        social: Optional[dict[str, str]] = None,
        **fields: Any,
    ) -> bool:
        """Overwrite the given scalar fields plus skills/social when provided.

        Only keys in PROFILE_FIELDS are accepted. Unknown keys raise
        ValueError rather than being silently dropped.

        Returns True if a row was updated, False if the user has no profile.
        """
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {unknown!r}")
        values: dict[str, Any] = dict(fields)
        if skills is not None:
            values["skills"] = dump_json(skills)
        if social is not None:
            values["social"] = dump_json(social)
        if not values:
            return self.get_by_user(user_id) is not None
        with connect(self.engine) as conn:
            result = conn.execute(_profiles.update().where(_profiles.c.user_id == user_id).values(**values))
            conn.commit()
        return result.rowcount > 0

    def save_nested(self, profile: Profile) -> None:
        """Write the experience and education arrays back as they are on profile."""
        with connect(self.engine) as conn:
            conn.execute(
                _profiles.update()
                .where(_profiles.c.user_id == profile.user_id)
                .values(
                    experience=dump_json([_experience_to_doc(e) for e in profile.experience]),
                    education=dump_json([_education_to_doc(e) for e in profile.education]),
                )
            )
            conn.commit()

    def delete_by_user(self, user_id: str) -> bool:
        """Delete the user's profile. Returns True if one existed."""
        with connect(self.engine) as conn:
            result = conn.execute(_profiles.delete().where(_profiles.c.user_id == user_id))
            conn.commit()
        return result.rowcount > 0


# ---------------------------------------------------------------------------
# Mappers
# ---------------------------------------------------------------------------


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _experience_to_doc(e: Experience) -> dict:
    return {
        "id": e.id,
        "title": e.title,
        "company": e.company,
        "location": e.location,
        "from": _iso(e.from_date),
        "to": _iso(e.to_date),
        "current": e.current,
        "description": e.description,
    }


def _doc_to_experience(doc: dict) -> Experience:
    return Experience(
        id=doc["id"],
        title=doc["title"],
        company=doc["company"],
        location=doc.get("location"),
        from_date=_parse_date(doc.get("from")),
        to_date=_parse_date(doc.get("to")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def _education_to_doc(e: Education) -> dict:
    return {
        "id": e.id,
        "school": e.school,
        "degree": e.degree,
        "fieldofstudy": e.fieldofstudy,
        "from": _iso(e.from_date),
        "to": _iso(e.to_date),
        "current": e.current,
        "description": e.description,
    }


def _doc_to_education(doc: dict) -> Education:
    return Education(
        id=doc["id"],
        school=doc["school"],
        degree=doc["degree"],
        fieldofstudy=doc["fieldofstudy"],
        from_date=_parse_date(doc.get("from")),
        to_date=_parse_date(doc.get("to")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def _row_to_profile(row) -> Profile:
    return Profile(
        id=row.id,
        user_id=row.user_id,
        company=row.company,
        website=row.website,
        location=row.location,
        bio=row.bio,
        status=row.status,
        githubusername=row.githubusername,
        skills=load_json(row.skills, []),
        social=load_json(row.social, {}),
        experience=[_doc_to_experience(d) for d in load_json(row.experience, [])],
        education=[_doc_to_education(d) for d in load_json(row.education, [])],
        created_at=row.created_at,
    )

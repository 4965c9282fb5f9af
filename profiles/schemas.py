"""
profiles/schemas.py -- Input schemas for profile, experience and education writes.

ProfileUpsert is fully optional: blank strings count as "not provided" so a
form that submits every field, most of them empty, only touches the ones the
user actually filled in.

The wire names "from" and "to" are Python keywords, so the attributes are
from_date / to_date with aliases. populate_by_name lets services and tests
construct the models with the attribute names. An omitted "from" is filled in
as None before validation so the error is always reported under "from".
"""

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from core.validators import OptionalText, required


def _blank_date(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


_OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_date)]


class ProfileUpsert(BaseModel):
    """Body for POST /api/profile. skills is a comma-separated string."""

    model_config = ConfigDict(str_strip_whitespace=True)

    company: OptionalText = None
    website: OptionalText = None
    location: OptionalText = None
    bio: OptionalText = None
    status: OptionalText = None
    githubusername: OptionalText = None
    skills: OptionalText = None
    youtube: OptionalText = None
    twitter: OptionalText = None
    facebook: OptionalText = None
    linkedin: OptionalText = None
    instagram: OptionalText = None


class _DatedEntry(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def fill_missing_from(cls, data):
        if isinstance(data, dict) and "from" not in data and "from_date" not in data:
            data = {**data, "from": None}
        return data


class ExperienceCreate(_DatedEntry):
    """Body for PUT /api/profile/experience."""

    title: Annotated[OptionalText, required("Title is required")] = Field(default=None, validate_default=True)
    company: Annotated[OptionalText, required("Company is required")] = Field(default=None, validate_default=True)
    from_date: Annotated[_OptionalDate, required("From date is required")] = Field(default=None, alias="from")
    location: OptionalText = None
    to_date: _OptionalDate = Field(default=None, alias="to")
    current: bool = False
    description: OptionalText = None


class EducationCreate(_DatedEntry):
    """Body for PUT /api/profile/education."""

    school: Annotated[OptionalText, required("School is required")] = Field(default=None, validate_default=True)
    degree: Annotated[OptionalText, required("Degree is required")] = Field(default=None, validate_default=True)
    fieldofstudy: Annotated[OptionalText, required("Field of study is required")] = Field(
        default=None, validate_default=True
    )
    from_date: Annotated[_OptionalDate, required("From date is required")] = Field(default=None, alias="from")
    to_date: _OptionalDate = Field(default=None, alias="to")
    current: bool = False
    description: OptionalText = None

"""
api/routes/profile.py -- Profile REST endpoints.

Routes (static paths registered before parameterized ones):
  GET    /api/profile/me                    -- caller's profile (private)
  POST   /api/profile                       -- create or update caller's profile (private)
  GET    /api/profile                       -- all profiles (public)
  GET    /api/profile/user/{user_id}        -- profile by user id (public)
  DELETE /api/profile                       -- delete caller's profile and account (private)
  PUT    /api/profile/experience            -- add experience, newest first (private)
  DELETE /api/profile/experience/{exp_id}   -- remove experience by id (private)
  PUT    /api/profile/education             -- add education, newest first (private)
  DELETE /api/profile/education/{edu_id}    -- remove education by id (private)
  GET    /api/profile/github/{username}     -- latest GitHub repos (public)

Writes only ever address the caller's own profile: the user id comes from the
token, never from the URL or body.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api.models import MessageResponse, ProfileResponse
from auth.dependencies import get_current_user_id
from profiles.schemas import EducationCreate, ExperienceCreate, ProfileUpsert
from profiles.service import ProfileService

router = APIRouter()


def _service(request: Request) -> ProfileService:
    return request.app.state.profile_service


# ---------------------------------------------------------------------------
# Caller's own profile
# ---------------------------------------------------------------------------


@router.get("/profile/me", response_model=ProfileResponse)
def get_my_profile(request: Request, user_id: str = Depends(get_current_user_id)) -> ProfileResponse:
    return ProfileResponse.from_profile(_service(request).get_own(user_id))


@router.post("/profile", response_model=ProfileResponse)
def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user_id: str = Depends(get_current_user_id),
) -> ProfileResponse:
    """Create the caller's profile or update the fields present in the body.

    skills is a comma-separated string; social links are top-level fields
    (youtube, twitter, facebook, linkedin, instagram) nested under "social"
    in the response.
    """
    return ProfileResponse.from_profile(_service(request).upsert(user_id, body))


@router.delete("/profile", response_model=MessageResponse)
def delete_profile(request: Request, user_id: str = Depends(get_current_user_id)) -> MessageResponse:
    """Delete the caller's profile and account. Posts are kept."""
    _service(request).remove_own(user_id)
    return MessageResponse(msg="User deleted")


# ---------------------------------------------------------------------------
# Experience / education
# ---------------------------------------------------------------------------


@router.put("/profile/experience", response_model=ProfileResponse)
def add_experience(
    request: Request,
    body: ExperienceCreate,
    user_id: str = Depends(get_current_user_id),
) -> ProfileResponse:
    return ProfileResponse.from_profile(_service(request).add_experience(user_id, body))


@router.delete("/profile/experience/{exp_id}", response_model=ProfileResponse)
def delete_experience(
    request: Request,
    exp_id: str,
    user_id: str = Depends(get_current_user_id),
) -> ProfileResponse:
    return ProfileResponse.from_profile(_service(request).remove_experience(user_id, exp_id))


@router.put("/profile/education", response_model=ProfileResponse)
def add_education(
    request: Request,
    body: EducationCreate,
    user_id: str = Depends(get_current_user_id),
) -> ProfileResponse:
    return ProfileResponse.from_profile(_service(request).add_education(user_id, body))


@router.delete("/profile/education/{edu_id}", response_model=ProfileResponse)
def delete_education(
    request: Request,
    edu_id: str,
    user_id: str = Depends(get_current_user_id),
) -> ProfileResponse:
    return ProfileResponse.from_profile(_service(request).remove_education(user_id, edu_id))


# ---------------------------------------------------------------------------
# Public reads
# ---------------------------------------------------------------------------


@router.get("/profile", response_model=list[ProfileResponse])
def list_profiles(request: Request) -> list[ProfileResponse]:
    return [ProfileResponse.from_profile(p) for p in _service(request).list_all()]


@router.get("/profile/user/{user_id}", response_model=ProfileResponse)
def get_profile_by_user(request: Request, user_id: str) -> ProfileResponse:
    return ProfileResponse.from_profile(_service(request).get_by_user(user_id))


@router.get("/profile/github/{username}")
def github_repos(request: Request, username: str) -> list[dict]:
    """Proxy GitHub's repo list for username. 404 github_not_found if GitHub fails."""
    return _service(request).github_repos(username)

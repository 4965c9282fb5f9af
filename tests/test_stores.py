"""
tests/test_stores.py -- Store and service unit tests against an in-memory database.

Exercises the repositories directly (no HTTP): JSON round-trip of nested
arrays, field whitelisting, batch lookups, and the service-level rules that
are awkward to reach through the API.
"""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from auth.models import User
from auth.store import UserStore
from core.errors import NotFound, StorageError
from posts.models import Comment, Like, Post
from posts.schemas import PostCreate
from posts.service import PostService
from posts.store import PostStore
from profiles.models import Experience, Profile
from profiles.schemas import ExperienceCreate, ProfileUpsert
from profiles.service import ProfileService, parse_skills
from profiles.store import ProfileStore


def _user(store: UserStore, name: str = "Ada", email: str = "ada@mail.com") -> str:
    return store.create_user(User(name=name, email=email, hashed_password="x", avatar="http://a/1"))


class TestUserStore:
    def test_create_and_lookup(self, engine) -> None:
        store = UserStore(engine)
        uid = _user(store)
        assert len(uid) == 24
        assert store.get_by_email("ADA@mail.com").id == uid
        assert store.get_by_id(uid).name == "Ada"
        assert store.get_by_id("missing") is None

    def test_duplicate_email_is_storage_error(self, engine) -> None:
        store = UserStore(engine)
        _user(store)
        with pytest.raises(StorageError):
            _user(store, name="Other")

    def test_get_by_ids(self, engine) -> None:
        store = UserStore(engine)
        a = _user(store, "Ada", "ada@mail.com")
        b = _user(store, "Bob", "bob@mail.com")
        found = store.get_by_ids([a, b, a, "missing"])
        assert set(found) == {a, b}
        assert store.get_by_ids([]) == {}

    def test_delete(self, engine) -> None:
        store = UserStore(engine)
        uid = _user(store)
        assert store.delete_user(uid) is True
        assert store.delete_user(uid) is False


class TestProfileStore:
    def test_nested_round_trip(self, engine) -> None:
        store = ProfileStore(engine)
        store.create_profile(Profile(user_id="u1", status="Developer", skills=["Go"], social={"twitter": "t"}))
        profile = store.get_by_user("u1")
        profile.experience.insert(
            0, Experience(id="e1", title="Dev", company="Acme", from_date=date(2020, 1, 1), current=True)
        )
        store.save_nested(profile)

        loaded = store.get_by_user("u1")
        assert loaded.skills == ["Go"]
        assert loaded.social == {"twitter": "t"}
        assert loaded.experience[0].from_date == date(2020, 1, 1)
        assert loaded.experience[0].to_date is None
        assert loaded.experience[0].current is True

    def test_update_fields_rejects_unknown(self, engine) -> None:
        store = ProfileStore(engine)
        store.create_profile(Profile(user_id="u1"))
        with pytest.raises(ValueError):
            store.update_fields("u1", hashed_password="nope")

    def test_one_profile_per_user(self, engine) -> None:
        store = ProfileStore(engine)
        store.create_profile(Profile(user_id="u1"))
        with pytest.raises(StorageError):
            store.create_profile(Profile(user_id="u1"))


class TestPostStore:
    def test_reactions_round_trip(self, engine) -> None:
        store = PostStore(engine)
        post_id = store.create_post(Post(user_id="u1", text="hi", name="Ada", avatar="a"))
        post = store.get_post(post_id)
        post.likes.insert(0, Like(user_id="u2"))
        post.comments.insert(0, Comment(id="c1", user_id="u2", text="yo", name="Bob", avatar="b", created_at="t"))
        store.save_reactions(post)

        loaded = store.get_post(post_id)
        assert [like.user_id for like in loaded.likes] == ["u2"]
        assert loaded.comments[0].id == "c1"
        assert loaded.comments[0].text == "yo"

    def test_delete(self, engine) -> None:
        store = PostStore(engine)
        post_id = store.create_post(Post(user_id="u1", text="hi", name="Ada", avatar="a"))
        assert store.delete_post(post_id) is True
        assert store.get_post(post_id) is None


class TestServices:
    def test_parse_skills(self) -> None:
        assert parse_skills(" HTML, CSS,,  Python ") == ["HTML", "CSS", "Python"]
        assert parse_skills("") == []

    def test_upsert_keeps_skills_when_absent(self, engine) -> None:
        users = UserStore(engine)
        uid = _user(users)
        service = ProfileService(ProfileStore(engine), users)
        service.upsert(uid, ProfileUpsert(skills="Go, Rust"))
        profile = service.upsert(uid, ProfileUpsert(status="Lead"))
        assert profile.skills == ["Go", "Rust"]
        assert profile.status == "Lead"
        assert profile.owner.name == "Ada"

    def test_experience_accepts_attribute_names(self, engine) -> None:
        users = UserStore(engine)
        uid = _user(users)
        service = ProfileService(ProfileStore(engine), users)
        service.upsert(uid, ProfileUpsert(status="Dev"))
        profile = service.add_experience(
            uid, ExperienceCreate(title="Dev", company="Acme", from_date=date(2021, 5, 1))
        )
        assert profile.experience[0].from_date == date(2021, 5, 1)

    @pytest.mark.parametrize("body", [{}, {"from": ""}, {"from": None}])
    def test_missing_from_date_located_by_alias(self, body: dict) -> None:
        with pytest.raises(PydanticValidationError) as excinfo:
            ExperienceCreate.model_validate({"title": "Dev", "company": "Acme", **body})
        assert [e["loc"] for e in excinfo.value.errors()] == [("from",)]

    def test_post_for_deleted_author(self, engine) -> None:
        users = UserStore(engine)
        service = PostService(PostStore(engine), users)
        with pytest.raises(NotFound):
            service.create("0" * 24, PostCreate(text="ghost"))

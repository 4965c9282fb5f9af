"""
auth/service.py -- Registration, login and current-user lookup.

AuthService is built once in the API lifespan and shared by every request; it
holds no per-request state. Input arrives already validated (RegisterRequest /
LoginRequest), so the methods here deal only with the business rules:
duplicate emails, credential checks and token issuance.

Login failures are deliberately indistinguishable to the client: unknown
email and wrong password both raise InvalidCredentials with the same message.
The internal reason is logged so operators can still tell them apart.
"""

from __future__ import annotations

import logging

from auth.avatar import gravatar_url
from auth.models import User
from auth.schemas import LoginRequest, RegisterRequest
from auth.store import UserStore
from auth.tokens import TokenService, authenticate_user, hash_password
from core.errors import DuplicateUser, InvalidCredentials, NotFound

logger = logging.getLogger("devconnector.auth")


class AuthService:
    def __init__(self, users: UserStore, tokens: TokenService) -> None:
        self.users = users
        self.tokens = tokens

    def register(self, data: RegisterRequest) -> str:
        """Create an account and return a token so the user is logged in right away."""
        if self.users.get_by_email(data.email) is not None:
            raise DuplicateUser()

        user = User(
            name=data.name,
            email=data.email,
            avatar=gravatar_url(data.email),
            hashed_password=hash_password(data.password),
        )
        user_id = self.users.create_user(user)
        logger.info("Registered user %s", user_id)
        return self.tokens.issue(user_id)

    def login(self, data: LoginRequest) -> str:
        user, reason = authenticate_user(self.users, data.email, data.password)
        if user is None:
            logger.info("Login failed (%s)", reason)
            raise InvalidCredentials(reason)
        return self.tokens.issue(user.id)

    def get_me(self, user_id: str) -> User:
        """Return the caller's record. The route strips hashed_password before responding."""
        user = self.users.get_by_id(user_id)
        if user is None:
            # Token outlived the account (DELETE /api/profile).
            raise NotFound("User not found")
        return user

"""
FastAPI dependencies.

The application builds its Database, IdentityProvider and SparkGenerator once
at startup and keeps them on ``app.state``; repositories are constructed per
request around that Database.
"""

import json
import logging
from typing import Optional, Type

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from config import settings
from ..ai.generator import SparkGenerator
from ..auth.identity import AuthenticationError, AuthUser, IdentityProvider
from ..database.connection import Database
from ..database.repositories import (
    CompletionRepository,
    GoalRepository,
    ProfileRepository,
    SparkRepository,
)
from .errors import BadRequest, Unauthorized, validation_message

logger = logging.getLogger(__name__)


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity


def get_spark_generator(request: Request) -> SparkGenerator:
    return request.app.state.spark_generator


def get_goal_repository(db: Database = Depends(get_database)) -> GoalRepository:
    return GoalRepository(db)


def get_spark_repository(db: Database = Depends(get_database)) -> SparkRepository:
    return SparkRepository(db)


def get_completion_repository(db: Database = Depends(get_database)) -> CompletionRepository:
    return CompletionRepository(db)


def get_profile_repository(db: Database = Depends(get_database)) -> ProfileRepository:
    return ProfileRepository(db)


def extract_access_token(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, else the auth cookie."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return request.cookies.get(settings.auth_cookie_name)


async def get_current_user(
    request: Request,
    identity: IdentityProvider = Depends(get_identity_provider),
) -> AuthUser:
    """Authenticate the caller or fail with 401."""
    try:
        return await identity.get_user(extract_access_token(request))
    except AuthenticationError as e:
        logger.debug(f"Rejected request to {request.url.path}: {e}")
        raise Unauthorized()


def json_body(model: Type[BaseModel]):
    """
    Dependency parsing the JSON request body into ``model``.

    Runs after get_current_user, so an unauthenticated request is rejected
    with 401 before its body is read. An empty body is treated as ``{}``.
    """

    async def parse_body(
        request: Request,
        user: AuthUser = Depends(get_current_user),
    ) -> BaseModel:
        raw = await request.body()
        try:
            data = json.loads(raw) if raw else {}
        except ValueError:
            raise BadRequest("Invalid JSON body")

        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise BadRequest(validation_message(e))

    return parse_body

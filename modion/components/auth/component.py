from typing import cast
from uuid import uuid4

from modion.core.ports.db import DuplicateKeyError
from modion.core.ports.time import TimePort
from modion.domain.entities import ROLES, RoleType, User

from .models import (
    AuthOutput,
    CreateSessionInput,
    LoginInput,
    RegisterInput,
    ResolveIdentityInput,
)
from .ports import AuthAdapterPort, UserRepoPort

SESSION_TTL_MINUTES = 24 * 60  # 1 day


def normalize_role(role: str | None) -> RoleType:
    """Unknown or missing roles fall back to "user"."""
    if role in ROLES:
        return cast(RoleType, role)
    return "user"


def run_create_session(inp: CreateSessionInput, auth_adapter: AuthAdapterPort) -> AuthOutput:
    token = auth_adapter.create_token(inp.user.id, SESSION_TTL_MINUTES)
    return AuthOutput(user=inp.user, token_raw=token, success=True)


def run_register(
    inp: RegisterInput,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
    time: TimePort,
) -> AuthOutput:
    if not inp.name or not inp.email or not inp.password:
        return AuthOutput(error="All fields are required", code="missing_fields")

    if user_repo.get_by_email(inp.email):
        return AuthOutput(error="email already exists", code="email_taken")

    now = time.now_utc()
    user = User(
        id=uuid4(),
        name=inp.name,
        email=inp.email,
        password_hash=auth_adapter.hash_password(inp.password),
        role=normalize_role(inp.role),
        created_at=now,
        updated_at=now,
    )
    try:
        user_repo.save(user)
    except DuplicateKeyError:
        return AuthOutput(error="email already exists", code="email_taken")

    return run_create_session(CreateSessionInput(user=user), auth_adapter)


def run_login(
    inp: LoginInput, user_repo: UserRepoPort, auth_adapter: AuthAdapterPort
) -> AuthOutput:
    if not inp.email or not inp.password:
        return AuthOutput(error="Email and password are required", code="missing_fields")

    user = user_repo.get_by_email(inp.email)
    if not user:
        return AuthOutput(error="Invalid credentials", code="invalid_credentials")

    if not auth_adapter.verify_password(inp.password, user.password_hash):
        return AuthOutput(error="Invalid credentials", code="invalid_credentials")

    return run_create_session(CreateSessionInput(user=user), auth_adapter)


def run_resolve_identity(
    inp: ResolveIdentityInput,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
) -> AuthOutput:
    if not inp.token:
        return AuthOutput(error="Unauthorized: No token provided", code="no_token")

    user_id = auth_adapter.validate_token(inp.token)
    if not user_id:
        return AuthOutput(error="Unauthorized: Invalid token", code="invalid_token")

    user = user_repo.get_by_id(user_id)
    if not user:
        return AuthOutput(error="Unauthorized: User not found", code="user_not_found")

    return AuthOutput(user=user, success=True)


def run_status(user: User | None) -> AuthOutput:
    if user is None:
        return AuthOutput(error="Not authenticated", code="not_authenticated")
    return AuthOutput(user=user, success=True)

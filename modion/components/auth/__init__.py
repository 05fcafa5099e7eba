"""
Auth component - Registration, login and identity resolution.

Issues signed session tokens and resolves them back to stored users.
"""

from .component import (
    SESSION_TTL_MINUTES,
    normalize_role,
    run_create_session,
    run_login,
    run_register,
    run_resolve_identity,
    run_status,
)
from .models import (
    AuthOutput,
    CreateSessionInput,
    LoginInput,
    RegisterInput,
    ResolveIdentityInput,
)
from .ports import AuthAdapterPort, UserRepoPort

__all__ = [
    # Entry points
    "run_create_session",
    "run_login",
    "run_register",
    "run_resolve_identity",
    "run_status",
    "normalize_role",
    "SESSION_TTL_MINUTES",
    # Models
    "AuthOutput",
    "CreateSessionInput",
    "LoginInput",
    "RegisterInput",
    "ResolveIdentityInput",
    # Ports
    "AuthAdapterPort",
    "UserRepoPort",
]

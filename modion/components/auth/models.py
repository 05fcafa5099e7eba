from dataclasses import dataclass

from modion.domain.entities import User


@dataclass
class RegisterInput:
    name: str | None
    email: str | None
    password: str | None
    role: str | None = None


@dataclass
class LoginInput:
    email: str | None
    password: str | None


@dataclass
class CreateSessionInput:
    user: User


@dataclass
class ResolveIdentityInput:
    token: str | None


@dataclass
class AuthOutput:
    user: User | None = None
    token_raw: str | None = None
    success: bool = False
    error: str | None = None
    code: str | None = None

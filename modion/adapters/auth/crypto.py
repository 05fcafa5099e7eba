from datetime import timedelta
from typing import Any

from modion.api.auth_utils import (
    DEFAULT_SECRET_KEY,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class JWTAuthAdapter:
    """Auth adapter that uses JWT tokens and passlib for password hashing."""

    def __init__(self, secret_key: str = DEFAULT_SECRET_KEY) -> None:
        self.secret_key = secret_key

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def verify_password(self, plain: str, hashed: str) -> bool:
        return verify_password(plain, hashed)

    def create_token(self, user_id: Any, ttl_minutes: int) -> str:
        return create_access_token(
            {"sub": str(user_id)},
            timedelta(minutes=ttl_minutes),
            secret_key=self.secret_key,
        )

    def validate_token(self, token: str) -> str | None:
        payload = decode_access_token(token, self.secret_key)
        if not payload:
            return None
        sub = payload.get("sub")
        return sub if isinstance(sub, str) else None

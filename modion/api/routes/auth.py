from fastapi import APIRouter, Depends, HTTPException, Response, status

from modion.adapters.auth.crypto import JWTAuthAdapter
from modion.adapters.clock import SystemClock
from modion.adapters.sqlite.repos import SQLiteUserRepo
from modion.api.auth_utils import ACCESS_TOKEN_EXPIRE_MINUTES
from modion.api.deps import (
    AUTH_COOKIE,
    Settings,
    get_auth_adapter,
    get_current_user,
    get_settings,
    get_time_port,
    get_user_repo,
)
from modion.api.errors import storage_errors
from modion.api.schemas import (
    LoginRequest,
    RegisterRequest,
    StatusResponse,
    SuccessResponse,
    TokenResponse,
    UserSummary,
)
from modion.components.auth import (
    AuthOutput,
    LoginInput,
    RegisterInput,
    run_login,
    run_register,
    run_status,
)
from modion.domain.entities import User

router = APIRouter()

LOGIN_STATUS_BY_CODE = {
    "missing_fields": status.HTTP_400_BAD_REQUEST,
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
}


def _set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
        secure=settings.is_production,
    )


def _token_response(result: AuthOutput) -> TokenResponse:
    assert result.user is not None and result.token_raw is not None
    return TokenResponse(
        message="Login successful",
        token=result.token_raw,
        user=UserSummary.from_entity(result.user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    response: Response,
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    auth_adapter: JWTAuthAdapter = Depends(get_auth_adapter),
    clock: SystemClock = Depends(get_time_port),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Create an account and start a session."""
    inp = RegisterInput(name=body.name, email=body.email, password=body.password, role=body.role)
    with storage_errors("Server error", expose=False):
        result = run_register(inp, user_repo, auth_adapter, clock)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)

    assert result.token_raw is not None
    _set_auth_cookie(response, result.token_raw, settings)
    return _token_response(result)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    response: Response,
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    auth_adapter: JWTAuthAdapter = Depends(get_auth_adapter),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Authenticate with email and password."""
    with storage_errors("Server error", expose=False):
        result = run_login(
            LoginInput(email=body.email, password=body.password), user_repo, auth_adapter
        )
    if not result.success:
        raise HTTPException(
            status_code=LOGIN_STATUS_BY_CODE.get(result.code or "", status.HTTP_400_BAD_REQUEST),
            detail=result.error,
        )

    assert result.token_raw is not None
    _set_auth_cookie(response, result.token_raw, settings)
    return _token_response(result)


@router.post("/logout", response_model=SuccessResponse)
def logout(response: Response) -> SuccessResponse:
    """Log out user by clearing cookie."""
    response.delete_cookie(key=AUTH_COOKIE)
    return SuccessResponse(message="Logged out successfully")


@router.get("/status", response_model=StatusResponse)
def auth_status(current_user: User = Depends(get_current_user)) -> StatusResponse:
    """Get current user info."""
    result = run_status(current_user)
    if not result.success or result.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error)
    return StatusResponse(user=UserSummary.from_entity(result.user))

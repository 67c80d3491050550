from typing import Optional, Tuple
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.token_lifecycle import TokenLifecycleManager
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    LoginUseCase,
    LogoutAllUseCase,
    LogoutUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    UserResponse,
)
from src.app.use_cases.users import GetProfileUseCase, UpdateProfileUseCase
from src.depends import get_current_user, get_token_manager, get_unit_of_work, require_roles
from src.domain.claims import AccessClaims
from src.domain.entities import Role

router = APIRouter(prefix="/auth", tags=["Authentication"])


def client_metadata(request: Request) -> Tuple[Optional[str], Optional[str]]:
    """User agent and IP of the caller, None when not available"""
    user_agent = request.headers.get("user-agent")
    ip_address = request.client.host if request.client else None
    return user_agent, ip_address


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    name: str = Field(..., min_length=2, max_length=255, description="Display name")
    role: Optional[Role] = Field(None, description="User role (only admins may set it)")

    def to_command(self) -> RegisterCommand:
        return RegisterCommand(
            email=self.email, password=self.password, name=self.name, role=self.role
        )


class MessageResponse(BaseModel):
    message: str


def _raise_register_error(error):
    if error.code == "EMAIL_ALREADY_EXISTS":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    elif error.code == "FORBIDDEN":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    raise ServerError(error)


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse
)
async def register(
    request: RegisterRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenLifecycleManager = Depends(get_token_manager),
):
    """
    Register a new user

    The first registered user becomes ADMIN. Returns an access token and a
    refresh token for the new session.

    Raises:
        - 403 Forbidden: Role requested without admin rights
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    user_agent, ip_address = client_metadata(http_request)

    use_case = RegisterUseCase(uow, tokens)
    result = await use_case.execute(
        request.to_command(), user_agent=user_agent, ip_address=ip_address
    )

    if result.is_err():
        _raise_register_error(result.error)

    return result.value


@router.post(
    "/register/admin", status_code=status.HTTP_201_CREATED, response_model=UserResponse
)
async def admin_register(
    request: RegisterRequest,
    admin: AccessClaims = Depends(require_roles(Role.ADMIN)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenLifecycleManager = Depends(get_token_manager),
):
    """
    Admin: register a new user with a role

    No session is opened for the created account.

    Raises:
        - 401 Unauthorized: Missing or invalid access token
        - 403 Forbidden: Caller is not an admin
        - 409 Conflict: Email already registered
    """
    use_case = RegisterUseCase(uow, tokens)
    result = await use_case.create_by_admin(request.to_command(), admin.role)

    if result.is_err():
        _raise_register_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenLifecycleManager = Depends(get_token_manager),
):
    """
    Login with email and password

    Raises:
        - 401 Unauthorized: Invalid credentials or disabled account
    """
    user_agent, ip_address = client_metadata(http_request)

    use_case = LoginUseCase(uow, tokens)
    result = await use_case.execute(
        request.email, request.password, user_agent, ip_address
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_CREDENTIALS", "USER_DISABLED"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token")


@router.post(
    "/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse
)
async def refresh(
    request: RefreshRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenLifecycleManager = Depends(get_token_manager),
):
    """
    Refresh access token

    Rotates the refresh token: the presented token becomes invalid and a new
    one is returned with the new access token.

    Raises:
        - 401 Unauthorized: Unknown, reused or expired refresh token
    """
    user_agent, ip_address = client_metadata(http_request)

    use_case = RefreshTokenUseCase(uow, tokens)
    result = await use_case.execute(request.refresh_token, user_agent, ip_address)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class LogoutRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token of the session to close")


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    request: LogoutRequest,
    current_user: AccessClaims = Depends(get_current_user),
    tokens: TokenLifecycleManager = Depends(get_token_manager),
):
    """
    Logout and invalidate the session behind the refresh token

    Unknown tokens are accepted silently.
    """
    use_case = LogoutUseCase(tokens)
    result = await use_case.execute(request.refresh_token, UUID(current_user.subject))

    if result.is_err():
        raise ServerError(result.error)

    return {"message": "Logged out successfully"}


@router.post("/logout/all", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout_all(
    current_user: AccessClaims = Depends(get_current_user),
    tokens: TokenLifecycleManager = Depends(get_token_manager),
):
    """Logout from all devices"""
    use_case = LogoutAllUseCase(tokens)
    result = await use_case.execute(UUID(current_user.subject))

    if result.is_err():
        raise ServerError(result.error)

    return {"message": f"Logged out from {result.value['revoked_count']} device(s)"}


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def get_profile(
    current_user: AccessClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get current user profile

    Raises:
        - 404 Not Found: User no longer exists
    """
    use_case = GetProfileUseCase(uow)
    result = await use_case.execute(UUID(current_user.subject))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None


@router.patch("/me", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: AccessClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update current user profile

    Raises:
        - 404 Not Found: User no longer exists
        - 409 Conflict: Email already in use
    """
    use_case = UpdateProfileUseCase(uow)
    result = await use_case.execute(
        UUID(current_user.subject), name=request.name, email=request.email
    )

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value

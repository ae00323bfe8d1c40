"""Authentication routes (register, login, me)."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_service
from api.models import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserResponse
from api.security import create_access_token, get_current_user_required
from domain.model.result import AuthErrorKind, Err
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

ERROR_STATUS = {
    AuthErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    AuthErrorKind.EMAIL_TAKEN: status.HTTP_409_CONFLICT,
    AuthErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AuthErrorKind.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _error_response(result: Err, model: type[RegisterResponse] | type[LoginResponse]) -> JSONResponse:
    body = model(
        success=False,
        error=result.error.message,
        errors=result.error.field_errors or None,
    )
    return JSONResponse(
        status_code=ERROR_STATUS[result.kind],
        content=body.model_dump(mode="json", exclude_none=True),
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def register(request: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Register a new user.

    No token is issued; the client logs in explicitly afterwards.

    Returns:
        400 on invalid input, 409 if the email is taken, 503 if the store is down
    """
    result = service.signup(request.name, request.email, request.password)
    if isinstance(result, Err):
        return _error_response(result, RegisterResponse)

    return RegisterResponse(success=True, user=UserResponse.from_domain(result.user))


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
def login(request: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Login user and return an opaque bearer token.

    Returns:
        400 on invalid input, 401 for bad credentials, 503 if the store is down
    """
    result = service.login(request.email, request.password)
    if isinstance(result, Err):
        return _error_response(result, LoginResponse)

    token = create_access_token(result.user.id)
    return LoginResponse(success=True, user=UserResponse.from_domain(result.user), token=token)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return current_user

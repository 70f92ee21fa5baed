"""
User endpoints.

Handles registration and login. Both issue a session token, returned in
the body and set as the HTTP-only ``token`` cookie.
"""

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import TOKEN_COOKIE, get_app_settings, get_user_service
from app.core.config import Settings
from app.schemas.user import AuthResponse, UserCreate, UserLogin
from app.services.user_service import UserService

router = APIRouter()


def _set_token_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(TOKEN_COOKIE, token, max_age=settings.token_max_age, path="/", secure=False, httponly=True)


@router.post("/register",
             summary="User registration endpoint.",
             response_model=AuthResponse,
             response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, response: Response, service: UserService = Depends(get_user_service),
             settings: Settings = Depends(get_app_settings), ):
    """
    Register a new user.

    Args:
        user_data: email, password, firstName, lastName (all required)

    Returns:
        Envelope with the new user id as ``resourceId`` and the session token

    Raises:
        HTTPException 409: If email already registered
    """
    user, token = service.register(user_data)
    _set_token_cookie(response, token, settings)
    return AuthResponse(status=status.HTTP_201_CREATED, message="User registered successfully!",
                        resource_id=user.id, email=user.email, token=token)


@router.post("/login",
             summary="User login endpoint.",
             response_model=AuthResponse,
             response_model_exclude_none=True)
def login(login_data: UserLogin, response: Response, service: UserService = Depends(get_user_service),
          settings: Settings = Depends(get_app_settings), ):
    """
    Authenticate user via JSON body.

    Returns:
        Envelope with the user id as ``resourceId`` and the session token
    """
    user, token = service.authenticate(login_data)
    _set_token_cookie(response, token, settings)
    return AuthResponse(status=status.HTTP_200_OK, message="User logged in successfully!",
                        resource_id=user.id, email=user.email, token=token)

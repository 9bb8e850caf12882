from urllib.parse import quote
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from octane_nexus.modules.auth.schemas import LoginRequest, TokenResponse, MagicLinkRequest, MagicLinkResponse
from octane_nexus.modules.auth.service import AuthService, app_url, safe_return_path
from octane_nexus.core.dependencies import get_auth_service, get_current_token, get_current_user
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/magic-link", response_model=MagicLinkResponse)
def magic_link(
    request: MagicLinkRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Send a passwordless login link"""
    return service.send_magic_link(request)


@router.get("/callback")
def auth_callback(
    code: Optional[str] = None,
    returnTo: Optional[str] = None,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange the emailed/OAuth code for a session, then redirect back into the app"""
    return_to = safe_return_path(returnTo)
    login_url = app_url("/login")
    if not code:
        return RedirectResponse(url=f"{login_url}?returnTo={quote(return_to)}", status_code=307)
    try:
        service.exchange_code(code)
    except Exception as e:
        detail = getattr(e, "detail", None) or str(e) or "Authentication failed"
        logger.error(f"Error exchanging code for session: {detail}")
        return RedirectResponse(
            url=f"{login_url}?error={quote(str(detail))}&returnTo={quote(return_to)}",
            status_code=307,
        )
    return RedirectResponse(url=app_url(return_to), status_code=307)


@router.post("/logout", status_code=200)
def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
def me(current_user: Dict = Depends(get_current_user)):
    """Get current authenticated user"""
    return current_user

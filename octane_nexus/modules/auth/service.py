import hashlib
import logging
import time
from urllib.parse import quote, urljoin
from supabase import Client
from octane_nexus.modules.auth.models import MOCK_SESSION_PREFIX, MOCK_USER, DEFAULT_RETURN_PATH
from octane_nexus.modules.auth.schemas import LoginRequest, TokenResponse, MagicLinkRequest, MagicLinkResponse
from octane_nexus.config import settings
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


def safe_return_path(return_to: Optional[str]) -> str:
    """In-app path to land on after login. Anything but a single-slash path falls back to /identity."""
    if not return_to or not return_to.startswith("/") or return_to.startswith("//") or "\\" in return_to:
        return DEFAULT_RETURN_PATH
    return return_to


def app_url(path: str) -> str:
    """Absolute URL on the site for an in-app path"""
    return urljoin(settings.site_url.rstrip("/") + "/", safe_return_path(path))


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            self.ensure_profile(auth_response.user.id, auth_response.user.email or login_data.email)
            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def send_magic_link(self, request: MagicLinkRequest) -> MagicLinkResponse:
        """Email a one-time login link that lands on /auth/callback"""
        return_to = safe_return_path(request.return_to)
        redirect_to = f"{app_url('/auth/callback')}?returnTo={quote(return_to)}"
        try:
            self.supabase.auth.sign_in_with_otp({
                "email": request.email,
                "options": {"email_redirect_to": redirect_to}
            })
        except Exception as e:
            logger.error(f"Magic link request failed for {request.email}: {e}")
            raise HTTPException(status_code=500, detail=f"Could not send magic link: {str(e)}")
        return MagicLinkResponse(email=request.email, message="Check your email for the login link")

    def exchange_code(self, code: str) -> Dict[str, Any]:
        """Exchange an OAuth / magic link code for a session and make sure the profile row exists"""
        response = self.supabase.auth.exchange_code_for_session({"auth_code": code})
        if not response.user:
            raise HTTPException(status_code=401, detail="Authentication failed")
        self.ensure_profile(response.user.id, response.user.email)
        return {
            "id": response.user.id,
            "email": response.user.email,
            "access_token": response.session.access_token if response.session else None,
        }

    def ensure_profile(self, user_id: str, email: Optional[str]) -> None:
        """Upsert profiles(id, email). Failures are logged; the profile may already exist."""
        try:
            self.supabase.table("profiles")\
                .upsert({"id": user_id, "email": email}, on_conflict="id")\
                .execute()
        except Exception as e:
            logger.error(f"Error creating/updating profile for {user_id}: {e}")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        if settings.mock_auth_active and token.startswith(MOCK_SESSION_PREFIX):
            return dict(MOCK_USER)
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            # Supabase Auth tokens are stateless JWTs, so logout is mainly client-side
            self.supabase.auth.sign_out()
            return True
        except Exception:
            return False

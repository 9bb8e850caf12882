"""
Core dependencies for route protection
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from octane_nexus.database.supabase_client import get_supabase, get_optional_supabase
from octane_nexus.modules.auth.service import AuthService
from supabase import Client
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must surface as 401, not HTTPBearer's default 403
security = HTTPBearer(auto_error=False)

UNAUTHORIZED_DETAIL = "Unauthorized. Please sign in."


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_DETAIL)
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Resolve the bearer token to the Supabase user"""
    try:
        return auth_service.get_current_user(token)
    except HTTPException as e:
        if e.status_code == status.HTTP_401_UNAUTHORIZED:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_DETAIL)
        raise


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    supabase: Optional[Client] = Depends(get_optional_supabase)
) -> Optional[Dict[str, Any]]:
    """Like get_current_user, but anonymous callers get None instead of a 401"""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return AuthService(supabase).get_current_user(credentials.credentials)
    except HTTPException:
        logger.debug("Ignoring invalid bearer token on optional-auth route")
        return None

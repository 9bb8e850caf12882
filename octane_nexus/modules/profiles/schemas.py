from pydantic import BaseModel
from typing import Optional, List, Dict, Literal
from datetime import datetime

HandlePlatform = Literal["Instagram", "TikTok", "X", "YouTube"]


class LinkedAccounts(BaseModel):
    instagram: Optional[str] = None
    tiktok: Optional[str] = None
    x: Optional[str] = None
    youtube: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    niche: Optional[str] = None
    onboarding_step: Optional[int] = None
    streak_count: int = 0
    last_post_date: Optional[datetime] = None
    linked_accounts: LinkedAccounts = LinkedAccounts()
    founder_license: bool = False
    has_purchased_package: bool = False
    purchased_package_type: Optional[str] = None


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    niche: Optional[str] = None
    onboarding_step: Optional[int] = None
    linked_accounts: Optional[Dict[str, Optional[str]]] = None


class ProfileAccess(BaseModel):
    has_purchased_package: bool = False
    purchased_package_type: Optional[str] = None
    founder_license: bool = False

    @property
    def has_vault(self) -> bool:
        return self.purchased_package_type == "vault"


class StreakResponse(BaseModel):
    streak_count: int
    last_post_date: Optional[datetime] = None
    was_reset: bool = False


class HandleCheckRequest(BaseModel):
    handle: str
    primary_platform: Optional[HandlePlatform] = None


class HandleCheck(BaseModel):
    platform: HandlePlatform
    handle: str
    available: bool
    suggestions: Optional[List[str]] = None

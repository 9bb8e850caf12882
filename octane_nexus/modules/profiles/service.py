import re
import logging
from datetime import datetime, timezone
from supabase import Client
from octane_nexus.modules.profiles.models import STREAK_GRACE_HOURS, HANDLE_PLATFORMS, LINKED_ACCOUNT_KEYS
from octane_nexus.modules.profiles.schemas import (
    ProfileResponse, ProfileUpdate, ProfileAccess, StreakResponse,
    HandleCheck, LinkedAccounts
)
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a Supabase timestamptz string; naive values are treated as UTC. Returns None when unparsable."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def coerce_streak(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if value is None:
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def normalize_linked_accounts(accounts: Optional[Dict[str, Any]]) -> LinkedAccounts:
    """Map the spellings the clients have used over time onto instagram/tiktok/x/youtube"""
    normalized: Dict[str, Optional[str]] = {}
    if not isinstance(accounts, dict):
        return LinkedAccounts()
    for key, value in accounts.items():
        canonical = LINKED_ACCOUNT_KEYS.get(key)
        if canonical is None:
            continue
        cleaned = value.strip() if isinstance(value, str) else None
        # First non-empty spelling wins ("instagram" over "Instagram")
        if cleaned and not normalized.get(canonical):
            normalized[canonical] = cleaned
        else:
            normalized.setdefault(canonical, None)
    return LinkedAccounts(**normalized)


def check_handle_availability(
    handle: str,
    primary_platform: Optional[str] = None,
    year: Optional[int] = None
) -> List[HandleCheck]:
    """Deterministic availability simulation used by the Handle Sniper step.

    There is no platform API behind this: a handle counts as taken when
    (len + platform index) is divisible by 3 on the primary platform, or by 2
    on every other platform.
    """
    normalized = re.sub(r"[^a-z0-9]", "", handle.lower())
    year = year if year is not None else datetime.now(timezone.utc).year
    results = []
    for index, platform in enumerate(HANDLE_PLATFORMS):
        if primary_platform == platform:
            taken = (len(normalized) + index) % 3 == 0
        else:
            taken = (len(normalized) + index) % 2 == 0
        suggestions = [
            f"{normalized}_hq",
            f"real{normalized}",
            f"{normalized}{year % 100}",
        ] if taken else None
        results.append(HandleCheck(
            platform=platform,
            handle=f"@{normalized or 'yourname'}",
            available=not taken,
            suggestions=suggestions,
        ))
    return results


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _fetch_row(self, user_id: str, columns: str = "*") -> Optional[Dict[str, Any]]:
        result = self.supabase.table("profiles")\
            .select(columns)\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get the caller's profile row"""
        try:
            row = self._fetch_row(user_id)
        except Exception as e:
            logger.error(f"Error loading profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if not row:
            raise HTTPException(status_code=404, detail="Profile not found")
        return self._to_response(row)

    def _to_response(self, row: Dict[str, Any]) -> ProfileResponse:
        return ProfileResponse(
            id=row["id"],
            email=row.get("email"),
            full_name=row.get("full_name"),
            niche=row.get("niche"),
            onboarding_step=row.get("onboarding_step"),
            streak_count=coerce_streak(row.get("streak_count")),
            last_post_date=parse_timestamp(row.get("last_post_date")),
            linked_accounts=normalize_linked_accounts(row.get("linked_accounts")),
            founder_license=bool(row.get("founder_license")),
            has_purchased_package=bool(row.get("has_purchased_package")),
            purchased_package_type=row.get("purchased_package_type"),
        )

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update profile fields that the onboarding flow owns"""
        update_data: Dict[str, Any] = {}
        if profile_data.full_name is not None:
            update_data["full_name"] = profile_data.full_name.strip()
        if profile_data.niche is not None:
            update_data["niche"] = profile_data.niche.strip()
        if profile_data.onboarding_step is not None:
            update_data["onboarding_step"] = profile_data.onboarding_step
        if profile_data.linked_accounts is not None:
            update_data["linked_accounts"] = normalize_linked_accounts(profile_data.linked_accounts).model_dump()

        if not update_data:
            return self.get_profile(user_id)

        try:
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        return self._to_response(result.data[0])

    def get_access(self, user_data: Dict[str, Any]) -> ProfileAccess:
        """Package flags for feature gating. Missing profile rows count as no purchase."""
        if user_data.get("is_mock"):
            return ProfileAccess(
                has_purchased_package=user_data.get("has_purchased_package", False),
                purchased_package_type=user_data.get("purchased_package_type"),
                founder_license=user_data.get("founder_license", False),
            )
        try:
            row = self._fetch_row(
                user_data["id"], "has_purchased_package, purchased_package_type, founder_license"
            )
        except Exception as e:
            logger.error(f"Error loading package access for {user_data['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        row = row or {}
        return ProfileAccess(
            has_purchased_package=bool(row.get("has_purchased_package")),
            purchased_package_type=row.get("purchased_package_type"),
            founder_license=bool(row.get("founder_license")),
        )

    def get_streak(self, user_id: str, now: Optional[datetime] = None) -> StreakResponse:
        """Current posting streak. Streak guard: more than 48h since the last post resets it to 0."""
        now = now or datetime.now(timezone.utc)
        try:
            row = self._fetch_row(user_id, "streak_count, last_post_date") or {}
        except Exception as e:
            logger.error(f"Error loading streak from profiles: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        streak = coerce_streak(row.get("streak_count"))
        last_post = parse_timestamp(row.get("last_post_date"))
        was_reset = False
        if last_post is not None:
            hours_since = (now - last_post).total_seconds() / 3600
            if hours_since > STREAK_GRACE_HOURS and streak != 0:
                streak = 0
                was_reset = True
                try:
                    self.supabase.table("profiles")\
                        .update({"streak_count": 0})\
                        .eq("id", user_id)\
                        .execute()
                except Exception as e:
                    logger.error(f"Error resetting streak in Supabase: {e}")
        return StreakResponse(streak_count=streak, last_post_date=last_post, was_reset=was_reset)

    def record_post(self, user_id: str, now: Optional[datetime] = None) -> StreakResponse:
        """'I posted today': bump the (guarded) streak and stamp last_post_date"""
        now = now or datetime.now(timezone.utc)
        current = self.get_streak(user_id, now=now)
        next_streak = current.streak_count + 1
        try:
            self.supabase.table("profiles")\
                .update({"streak_count": next_streak, "last_post_date": now.isoformat()})\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating streak in Supabase: {e}")
            raise HTTPException(status_code=500, detail="Could not update streak")
        return StreakResponse(streak_count=next_streak, last_post_date=now)

import logging
from datetime import datetime, timezone
from supabase import Client
from octane_nexus.modules.library.models import (
    FREE_BLUEPRINT_LIMIT, FREE_LIMIT_DETAIL, COMMUNITY_VIRAL_MARKS, COMMUNITY_WINS_LIMIT,
    WIN_IDEA_WORDS, WIN_IDEA_MAX_CHARS, DEFAULT_WIN_NICHE
)
from octane_nexus.modules.library.schemas import (
    SavedBlueprint, PerformanceResponse, ContentHistory, CommunityWin, CommunityInsights
)
from octane_nexus.modules.generation.context import ContextService
from octane_nexus.modules.generation.service import GenerationService
from octane_nexus.modules.profiles.schemas import ProfileAccess
from octane_nexus.modules.profiles.service import parse_timestamp
from fastapi import HTTPException
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def anonymize_idea(idea: Optional[str]) -> str:
    """First few words of an idea, short enough to show without identifying the creator"""
    words = " ".join((idea or "").split()[:WIN_IDEA_WORDS])
    if len(words) > WIN_IDEA_MAX_CHARS:
        return words[:WIN_IDEA_MAX_CHARS - 3] + "..."
    return words


class LibraryService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    # Blueprints

    def list_blueprints(self, user_id: str) -> List[SavedBlueprint]:
        """Saved blueprints, newest first"""
        try:
            result = self.supabase.table("saved_blueprints")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading blueprints for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        blueprints = []
        for row in result.data or []:
            if not isinstance(row.get("idea"), str) or not isinstance(row.get("blueprint"), dict):
                logger.warning(f"Skipping malformed saved blueprint {row.get('id')} for {user_id}")
                continue
            blueprints.append(SavedBlueprint(**row))
        return blueprints

    def count_blueprints(self, user_id: str) -> int:
        result = self.supabase.table("saved_blueprints")\
            .select("id")\
            .eq("user_id", user_id)\
            .execute()
        return len(result.data or [])

    def create_blueprint(
        self,
        user_id: str,
        idea: str,
        access: ProfileAccess,
        generation: GenerationService
    ) -> SavedBlueprint:
        """Generate TikTok/Instagram/X blueprints for an idea and save them. Free tier stops at 3."""
        idea = (idea or "").strip()
        if not idea:
            raise HTTPException(status_code=400, detail="Please share an idea first so we can shape a blueprint.")

        try:
            if not access.has_vault and self.count_blueprints(user_id) >= FREE_BLUEPRINT_LIMIT:
                raise HTTPException(status_code=403, detail=FREE_LIMIT_DETAIL)

            blueprints = generation.generate_platform_blueprints(idea, user_id)
            result = self.supabase.table("saved_blueprints").insert({
                "user_id": user_id,
                "idea": idea,
                "blueprint": blueprints.model_dump(),
                "created_at": datetime.now(timezone.utc).isoformat(),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save blueprint")
            logger.info(f"Blueprint saved for user {user_id}")
            return SavedBlueprint(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving blueprint for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def mark_performance(self, user_id: str, blueprint_id: str, status: str) -> PerformanceResponse:
        """Mark one of the user's blueprints as viral or successful (one mark per user and blueprint)"""
        try:
            owned = self.supabase.table("saved_blueprints")\
                .select("id")\
                .eq("id", blueprint_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if not owned.data:
                raise HTTPException(status_code=404, detail="Blueprint not found")

            marked_at = datetime.now(timezone.utc)
            self.supabase.table("blueprint_performance").upsert({
                "blueprint_id": owned.data[0]["id"],
                "user_id": user_id,
                "status": status,
                "marked_at": marked_at.isoformat(),
            }, on_conflict="blueprint_id,user_id").execute()
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error marking blueprint {blueprint_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        return PerformanceResponse(
            blueprint_id=owned.data[0]["id"], user_id=user_id, status=status, marked_at=marked_at
        )

    # Brand voice

    def get_content_history(self, user_id: str) -> ContentHistory:
        try:
            result = self.supabase.table("user_content_history")\
                .select("content_text, updated_at")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading content history for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            return ContentHistory()
        row = result.data[0]
        return ContentHistory(content_text=row.get("content_text"), updated_at=parse_timestamp(row.get("updated_at")))

    def save_content_history(self, user_id: str, content_text: str) -> ContentHistory:
        content_text = (content_text or "").strip()
        if not content_text:
            raise HTTPException(status_code=400, detail="Please paste at least one of your top-performing posts.")
        updated_at = datetime.now(timezone.utc)
        try:
            self.supabase.table("user_content_history").upsert({
                "user_id": user_id,
                "content_text": content_text,
                "updated_at": updated_at.isoformat(),
            }, on_conflict="user_id").execute()
        except Exception as e:
            logger.error(f"Error saving content history for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Could not save your brand voice. Please try again in a moment.")
        return ContentHistory(content_text=content_text, updated_at=updated_at)

    # Community

    def get_community_wins(self) -> List[CommunityWin]:
        """Latest viral marks, reduced to the first words of the idea and the creator's niche"""
        try:
            marks = self.supabase.table("blueprint_performance")\
                .select("blueprint_id, marked_at")\
                .eq("status", "viral")\
                .order("marked_at", desc=True)\
                .limit(COMMUNITY_VIRAL_MARKS)\
                .execute().data or []
            if not marks:
                return []

            blueprints: List[Dict[str, Any]] = self.supabase.table("saved_blueprints")\
                .select("id, idea, user_id")\
                .in_("id", [m["blueprint_id"] for m in marks])\
                .execute().data or []
            if not blueprints:
                return []

            user_ids = list({bp["user_id"] for bp in blueprints if bp.get("user_id")})
            profiles: List[Dict[str, Any]] = []
            if user_ids:
                profiles = self.supabase.table("profiles")\
                    .select("id, niche")\
                    .in_("id", user_ids)\
                    .execute().data or []
        except Exception as e:
            logger.warning(f"Could not load community wins: {e}")
            return []

        niches = {p["id"]: p.get("niche") for p in profiles}
        return [
            CommunityWin(
                idea=anonymize_idea(bp.get("idea")),
                niche=niches.get(bp.get("user_id")) or DEFAULT_WIN_NICHE,
            )
            for bp in blueprints[:COMMUNITY_WINS_LIMIT]
        ]

    def get_community_insights(self) -> CommunityInsights:
        community = ContextService(self.supabase).get_community_context()
        return CommunityInsights(
            dominant_vibe=community.dominant_vibe,
            viral_potential=community.viral_potential,
            viral_count=community.viral_count,
            success_count=community.success_count,
        )

    def generate_insight(
        self,
        user_id: str,
        user_name: Optional[str],
        generation: GenerationService
    ) -> str:
        """Active Librarian insight over the user's saved ideas"""
        ideas = [bp.idea for bp in self.list_blueprints(user_id)]
        if not ideas:
            raise HTTPException(status_code=400, detail="No saved ideas to analyze.")
        return generation.generate_librarian_insight(ideas, user_name)

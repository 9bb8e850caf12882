import logging
from collections import Counter
from supabase import Client
from octane_nexus.modules.generation.schemas import CommunityContext
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

COMMUNITY_MARK_LIMIT = 50
COMMUNITY_IDEA_LIMIT = 20

# (keywords, vibe) in tie-break order
VIBE_KEYWORDS = [
    (("quick", "fast"), "urgent"),
    (("secret", "hidden"), "mysterious"),
    (("never", "stop"), "bold"),
    (("simple", "easy"), "accessible"),
    (("proven", "tested"), "confident"),
]


def blueprint_hook(blueprint: Any) -> str:
    """Hook of a saved blueprint: the TikTok hook for platform maps, else the single hook"""
    if not isinstance(blueprint, dict):
        return ""
    if "tiktok" in blueprint:
        tiktok = blueprint.get("tiktok")
        return (tiktok.get("hook") or "") if isinstance(tiktok, dict) else ""
    return blueprint.get("hook") or ""


def dominant_vibe(hooks: List[str]) -> Optional[str]:
    counts: Counter = Counter()
    for hook in hooks:
        lower = hook.lower()
        for keywords, vibe in VIBE_KEYWORDS:
            if any(keyword in lower for keyword in keywords):
                counts[vibe] += 1
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def viral_potential(viral_count: int, total: int) -> Optional[int]:
    """Share of viral marks as a rounded percentage; None when zero"""
    if total <= 0:
        return None
    potential = int(viral_count * 100 / total + 0.5)
    return potential or None


class ContextService:
    """Brand voice and community context appended to generation prompts. Lookups never raise."""

    def __init__(self, supabase: Optional[Client]):
        self.supabase = supabase

    def get_brand_voice(self, user_id: Optional[str]) -> Optional[str]:
        if not user_id or self.supabase is None:
            return None
        try:
            result = self.supabase.table("user_content_history")\
                .select("content_text")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.warning(f"Could not load brand voice for {user_id}: {e}")
            return None
        if not result.data:
            return None
        text = result.data[0].get("content_text")
        return text if isinstance(text, str) and text.strip() else None

    def get_community_context(self) -> CommunityContext:
        if self.supabase is None:
            return CommunityContext()
        try:
            return self._build_community_context()
        except Exception as e:
            logger.warning(f"Could not load community context: {e}")
            return CommunityContext()

    def _build_community_context(self) -> CommunityContext:
        performances: List[Dict[str, Any]] = self.supabase.table("blueprint_performance")\
            .select("blueprint_id, status")\
            .in_("status", ["viral", "success"])\
            .limit(COMMUNITY_MARK_LIMIT)\
            .execute().data or []
        if not performances:
            return CommunityContext()

        viral_ids = [p["blueprint_id"] for p in performances if p.get("status") == "viral"]
        viral_count = len(viral_ids)
        success_count = sum(1 for p in performances if p.get("status") == "success")

        blueprints: List[Dict[str, Any]] = self.supabase.table("saved_blueprints")\
            .select("id, idea, blueprint")\
            .in_("id", [p["blueprint_id"] for p in performances])\
            .execute().data or []
        if not blueprints:
            return CommunityContext(viral_count=viral_count, success_count=success_count)

        status_by_id = {p["blueprint_id"]: p.get("status") for p in performances}
        hooks = [blueprint_hook(bp.get("blueprint")) for bp in blueprints if bp.get("id") in viral_ids]

        lines = [
            f"GLOBAL CONTEXT: The Octane Nexus community has marked {viral_count + success_count} "
            f"blueprints as successful ({viral_count} viral, {success_count} successful). "
            f"Study these proven patterns:",
            "",
        ]
        for index, bp in enumerate(blueprints[:COMMUNITY_IDEA_LIMIT]):
            if bp.get("idea"):
                status = (status_by_id.get(bp.get("id")) or "success").upper()
                lines.append(f"{index + 1}. [{status}] {bp['idea']}")
        lines.append("")
        lines.append(
            "Use these community-validated patterns to inform your content generation. "
            "These ideas have proven to resonate with real audiences."
        )

        return CommunityContext(
            context="\n".join(lines),
            viral_count=viral_count,
            success_count=success_count,
            dominant_vibe=dominant_vibe(hooks),
            viral_potential=viral_potential(viral_count, len(performances)),
        )

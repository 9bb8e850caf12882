# Supabase tables: saved_blueprints, blueprint_performance, user_content_history
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

saved_blueprints:
- id: bigint/uuid (primary key)
- user_id: uuid (foreign key to profiles.id)
- idea: text
- blueprint: jsonb - a single blueprint {hook, meat, cta, setup_tip}
  or a platform map {tiktok, instagram, x}
- created_at: timestamptz

blueprint_performance:
- blueprint_id: foreign key to saved_blueprints.id
- user_id: uuid
- status: text - values: viral, success
- marked_at: timestamptz
- unique (blueprint_id, user_id)

user_content_history:
- user_id: uuid (unique)
- content_text: text - the creator's pasted top posts ("brand voice")
- updated_at: timestamptz
"""

FREE_BLUEPRINT_LIMIT = 3
FREE_LIMIT_DETAIL = (
    "You've reached the free limit of 3 blueprints. "
    "Upgrade to the Authority Vault for unlimited access."
)

COMMUNITY_VIRAL_MARKS = 10
COMMUNITY_WINS_LIMIT = 5
WIN_IDEA_WORDS = 4
WIN_IDEA_MAX_CHARS = 30
DEFAULT_WIN_NICHE = "Creator"

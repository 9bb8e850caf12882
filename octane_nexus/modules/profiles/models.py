# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text
- full_name: text (nullable)
- niche: text (nullable)
- onboarding_step: integer (nullable)
- streak_count: integer (default: 0)
- last_post_date: timestamptz (nullable)
- linked_accounts: jsonb (nullable) - {"instagram": ..., "tiktok": ..., "x": ..., "youtube": ...}
- founder_license: boolean (default: false)
- has_purchased_package: boolean (default: false)
- purchased_package_type: text (nullable) - values: sniper, vault

Rows are upserted on first login (see AuthService.ensure_profile) and the purchase
columns are only written by the Stripe webhook.
"""

STREAK_GRACE_HOURS = 48

HANDLE_PLATFORMS = ["Instagram", "TikTok", "X", "YouTube"]

# Accepted spellings for linked_accounts keys -> canonical key
LINKED_ACCOUNT_KEYS = {
    "instagram": "instagram",
    "Instagram": "instagram",
    "tiktok": "tiktok",
    "TikTok": "tiktok",
    "x": "x",
    "X": "x",
    "twitter": "x",
    "Twitter": "x",
    "youtube": "youtube",
    "YouTube": "youtube",
}

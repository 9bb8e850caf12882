# Supabase Auth
# Users live in Supabase's auth.users table; this service keeps no user table of its own.
# The first successful login (password, magic link or OAuth code exchange) upserts
# a matching row into public.profiles, see modules/profiles/models.py.

"""
Supabase Auth calls used here:
- auth.sign_in_with_password() - email + password login
- auth.sign_in_with_otp() - magic link email, redirecting to /auth/callback
- auth.exchange_code_for_session() - turns the callback ?code= into a session
- auth.get_user() - resolves a bearer JWT to its user
- auth.sign_out() - logout

Local development can skip Supabase entirely with MOCK_AUTH_ENABLED=true:
bearer tokens starting with "mock_session" resolve to MOCK_USER below.
"""

MOCK_SESSION_PREFIX = "mock_session"

MOCK_USER = {
    "id": "dev_admin",
    "email": "admin@octanenexus.com",
    "user_metadata": {"full_name": "Dev Admin"},
    "app_metadata": {},
    "is_mock": True,
    "has_purchased_package": True,
    "purchased_package_type": "vault",
    "founder_license": True,
}

DEFAULT_RETURN_PATH = "/identity"

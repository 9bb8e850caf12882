# Stripe packages sold through Checkout
# Purchases are recorded on the profiles table (see modules/profiles/models.py)

"""
Columns written by the Stripe webhook on checkout.session.completed:

profiles:
- has_purchased_package: boolean
- purchased_package_type: text - values: sniper, vault
- founder_license: boolean - only set for vault (and legacy founder_license purchases)
"""

PACKAGES = {
    "sniper": {
        "name": "The Identity Sniper",
        "description": "Cross-platform handle securing, 3 professional bios, and custom niche analysis.",
        "amount": 14900,  # $149.00
    },
    "vault": {
        "name": "The Authority Vault",
        "description": "Everything in the Sniper package plus 30 days of custom, voice-matched platform blueprints (90 total scripts).",
        "amount": 29900,  # $299.00
    },
}

CURRENCY = "usd"

CHECKOUT_COMPLETED_EVENT = "checkout.session.completed"
LEGACY_FOUNDER_LICENSE_TYPE = "founder_license"

import json
import logging
import stripe
from supabase import Client
from octane_nexus.config import settings
from octane_nexus.modules.payments.models import (
    PACKAGES, CURRENCY, CHECKOUT_COMPLETED_EVENT, LEGACY_FOUNDER_LICENSE_TYPE
)
from octane_nexus.modules.payments.schemas import CheckoutResponse, PackageInfo
from fastapi import HTTPException
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def parse_checkout_body(raw: bytes) -> Dict[str, Any]:
    """Request body as a dict; anything unparsable is treated as an empty body"""
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def list_packages() -> List[PackageInfo]:
    return [
        PackageInfo(
            type=package_type,
            name=package["name"],
            description=package["description"],
            amount=package["amount"],
            currency=CURRENCY,
            publishable_key=settings.stripe_publishable_key,
        )
        for package_type, package in PACKAGES.items()
    ]


class PaymentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def has_purchased_package(self, user_id: str) -> bool:
        result = self.supabase.table("profiles")\
            .select("has_purchased_package")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        return bool(result.data and result.data[0].get("has_purchased_package"))

    def create_checkout_session(self, user_data: Dict[str, Any], body: Dict[str, Any]) -> CheckoutResponse:
        """Create a one-time Stripe Checkout session for the sniper or vault package"""
        package_type = body.get("packageType")
        if not isinstance(package_type, str) or package_type not in PACKAGES:
            raise HTTPException(status_code=400, detail="Invalid package type.")

        user_id = user_data["id"]
        try:
            if self.has_purchased_package(user_id):
                raise HTTPException(status_code=400, detail="You already have an active package.")

            if not settings.stripe_secret_key:
                raise HTTPException(status_code=500, detail="Stripe is not configured.")

            selected = PACKAGES[package_type]
            session = stripe.checkout.Session.create(
                api_key=settings.stripe_secret_key,
                payment_method_types=["card"],
                line_items=[{
                    "price_data": {
                        "currency": CURRENCY,
                        "product_data": {
                            "name": selected["name"],
                            "description": selected["description"],
                        },
                        "unit_amount": selected["amount"],
                    },
                    "quantity": 1,
                }],
                mode="payment",
                success_url=f"{settings.site_url}/dashboard?success=true&package={package_type}",
                cancel_url=f"{settings.site_url}?canceled=true",
                client_reference_id=user_id,
                customer_email=user_data.get("email") or None,
                metadata={"user_id": user_id, "package_type": package_type},
                custom_text={"submit": {"message": f"Securing your {selected['name']}..."}},
            )
            logger.info(f"Checkout session {session.id} created for user {user_id} ({package_type})")
            return CheckoutResponse(sessionId=session.id)
        except HTTPException:
            raise
        except stripe.StripeError as e:
            logger.error(f"Error creating Stripe checkout session: {e}")
            raise HTTPException(status_code=500, detail=e.user_message or str(e) or "Failed to create checkout session.")
        except Exception as e:
            logger.error(f"Error creating Stripe checkout session: {e}")
            raise HTTPException(status_code=500, detail=str(e) or "Failed to create checkout session.")


class WebhookService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def verify_event(self, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """Check the stripe-signature header against the raw body and decode the event"""
        if not signature:
            raise HTTPException(status_code=400, detail="No signature provided")
        if not settings.stripe_webhook_secret:
            logger.error("STRIPE_WEBHOOK_SECRET is not set; rejecting webhook")
            raise HTTPException(status_code=400, detail="Webhook Error: webhook secret is not configured")
        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body, signature, settings.stripe_webhook_secret, stripe.Webhook.DEFAULT_TOLERANCE
            )
            event = json.loads(body)
        except stripe.SignatureVerificationError as e:
            logger.error(f"Webhook signature verification failed: {e}")
            raise HTTPException(status_code=400, detail=f"Webhook Error: {e}")
        except ValueError as e:
            logger.error(f"Webhook payload could not be decoded: {e}")
            raise HTTPException(status_code=400, detail=f"Webhook Error: {e}")
        if not isinstance(event, dict):
            raise HTTPException(status_code=400, detail="Webhook Error: Invalid payload")
        return event

    def _update_profile(self, user_id: str, update_data: Dict[str, Any], failure_detail: str) -> None:
        try:
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"{failure_detail} for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=failure_detail)
        if not result.data:
            logger.warning(f"Webhook update matched no profile row for user {user_id}")

    def handle_event(self, event: Dict[str, Any]) -> None:
        """Grant package access on checkout.session.completed; other events are only acknowledged"""
        event_type = event.get("type")
        if event_type != CHECKOUT_COMPLETED_EVENT:
            logger.info(f"Ignoring Stripe event {event_type}")
            return

        session = (event.get("data") or {}).get("object") or {}
        metadata = session.get("metadata") or {}
        user_id = metadata.get("user_id") or session.get("client_reference_id")
        if not user_id:
            logger.error("No user ID found in session metadata")
            raise HTTPException(status_code=400, detail="No user ID found")

        package_type = metadata.get("package_type")
        if package_type:
            update_data = {
                "has_purchased_package": True,
                "purchased_package_type": package_type,
            }
            if package_type == "vault":
                update_data["founder_license"] = True
            self._update_profile(user_id, update_data, "Failed to update package purchase")
            logger.info(f"Package purchase activated for user: {user_id}, package: {package_type}")

        if metadata.get("type") == LEGACY_FOUNDER_LICENSE_TYPE:
            self._update_profile(user_id, {
                "founder_license": True,
                "has_purchased_package": True,
                "purchased_package_type": "vault",
            }, "Failed to update founder license")
            logger.info(f"Founder license activated for user: {user_id}")

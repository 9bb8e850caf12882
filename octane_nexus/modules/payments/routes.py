from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from octane_nexus.database.supabase_client import get_supabase, get_service_supabase
from octane_nexus.modules.payments.schemas import CheckoutResponse, WebhookResponse, PackageInfo
from octane_nexus.modules.payments.service import (
    PaymentService, WebhookService, parse_checkout_body, list_packages
)
from octane_nexus.core.dependencies import get_current_user
from octane_nexus.core.limiter import limiter
from supabase import Client
from typing import Dict, List

router = APIRouter(tags=["payments"])


def get_payment_service(supabase: Client = Depends(get_supabase)) -> PaymentService:
    return PaymentService(supabase)


def get_webhook_service(supabase: Client = Depends(get_service_supabase)) -> WebhookService:
    return WebhookService(supabase)


@router.get("/packages", response_model=List[PackageInfo])
async def get_packages():
    return list_packages()


@router.post("/checkout", response_model=CheckoutResponse)
async def create_checkout(
    request: Request,
    user_data: Dict = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service)
):
    """Start a Stripe Checkout session. Body: {"packageType": "sniper" | "vault"}"""
    body = parse_checkout_body(await request.body())
    return await run_in_threadpool(service.create_checkout_session, user_data, body)


@router.post("/webhooks/stripe", response_model=WebhookResponse)
@limiter.exempt
async def stripe_webhook(
    request: Request,
    service: WebhookService = Depends(get_webhook_service)
):
    """Stripe webhook; the raw body is needed for signature verification"""
    payload = await request.body()
    event = service.verify_event(payload, request.headers.get("stripe-signature"))
    await run_in_threadpool(service.handle_event, event)
    return WebhookResponse(received=True)

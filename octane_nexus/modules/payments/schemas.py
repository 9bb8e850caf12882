from pydantic import BaseModel
from typing import Optional


class CheckoutResponse(BaseModel):
    sessionId: str


class WebhookResponse(BaseModel):
    received: bool = True


class PackageInfo(BaseModel):
    type: str
    name: str
    description: str
    amount: int
    currency: str
    publishable_key: Optional[str] = None

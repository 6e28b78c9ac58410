from pydantic import BaseModel
from typing import Optional


class SubscriptionActivate(BaseModel):
    paypal_order_id: str


class OrderCreate(BaseModel):
    amount: Optional[str] = None
    currency: Optional[str] = None
    intent: str = "CAPTURE"

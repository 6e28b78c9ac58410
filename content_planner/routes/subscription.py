"""
Payment and subscription routes.
"""
from fastapi import APIRouter, Depends

from ..auth import get_required_user
from ..config import get_settings
from ..dependencies import get_payment_client, get_storage
from ..logging_config import payment_logger
from ..models.user import User
from ..responses import payment_required, success
from ..schemas.auth import UserResponse
from ..schemas.subscription import OrderCreate, SubscriptionActivate
from ..services.payments import PayPalClient
from ..storage import Storage

settings = get_settings()

router = APIRouter(prefix="/api", tags=["subscription"])


@router.get("/paypal/setup")
def paypal_setup(paypal: PayPalClient = Depends(get_payment_client)):
    """Client token for the PayPal checkout widget."""
    return {"client_token": paypal.get_client_token()}


@router.post("/paypal/order")
def create_paypal_order(order: OrderCreate, paypal: PayPalClient = Depends(get_payment_client)):
    return paypal.create_order(
        amount=order.amount or settings.subscription_price,
        currency=order.currency or settings.subscription_currency,
        intent=order.intent,
    )


@router.post("/paypal/order/{order_id}/capture")
def capture_paypal_order(order_id: str, paypal: PayPalClient = Depends(get_payment_client)):
    return paypal.capture_order(order_id)


@router.post("/subscription/activate")
def activate_subscription(
    activation: SubscriptionActivate,
    storage: Storage = Depends(get_storage),
    paypal: PayPalClient = Depends(get_payment_client),
    current_user: User = Depends(get_required_user),
):
    """
    Mark the caller's subscription active after checkout.

    By default the order id from the client is trusted as-is. Set
    ``VERIFY_PAYMENT_CAPTURE`` to require PayPal to report the order completed.
    """
    order_id = activation.paypal_order_id
    if settings.verify_payment_capture:
        order = paypal.get_order(order_id)
        if order.get("status") != "COMPLETED":
            payment_required("Payment has not been captured")

    user = storage.activate_subscription(current_user.id, order_id, order_id)
    payment_logger.info("Subscription activated", user_id=current_user.id, order_id=order_id)
    return success(
        data=UserResponse.model_validate(user).model_dump(mode="json"),
        message="Subscription activated successfully",
    )

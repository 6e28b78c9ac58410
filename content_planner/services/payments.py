"""
PayPal Orders API client.
"""
from typing import Any, Dict, Optional

import requests

from ..errors import PaymentProviderError
from ..logging_config import payment_logger

PAYPAL_BASE_URLS = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}


class PayPalClient:
    """
    Thin wrapper over the PayPal REST endpoints the subscription flow uses.

    An OAuth2 client-credentials token is requested for every call. Any
    non-2xx answer or network error raises ``PaymentProviderError``.
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        environment: str = "sandbox",
        timeout: int = 15,
        session: Optional[requests.Session] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = PAYPAL_BASE_URLS.get(environment, PAYPAL_BASE_URLS["sandbox"])
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise PaymentProviderError(f"PayPal request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            payment_logger.warning(
                "PayPal returned an error",
                path=path,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise PaymentProviderError(
                f"PayPal {method} {path} returned {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def _access_token(self) -> str:
        if not self.configured:
            raise PaymentProviderError("PayPal credentials are not configured")
        response = self._request(
            "POST",
            "/v1/oauth2/token",
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials"},
        )
        return response.json()["access_token"]

    def _authorized(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._access_token()}",
            "Content-Type": "application/json",
        }
        return self._request(method, path, headers=headers, **kwargs).json()

    def get_client_token(self) -> str:
        return self._authorized("POST", "/v1/identity/generate-token")["client_token"]

    def create_order(self, amount: str, currency: str, intent: str = "CAPTURE") -> Dict[str, Any]:
        order = self._authorized(
            "POST",
            "/v2/checkout/orders",
            json={
                "intent": intent.upper(),
                "purchase_units": [{"amount": {"currency_code": currency, "value": amount}}],
            },
        )
        payment_logger.info("PayPal order created", order_id=order.get("id"), amount=amount, currency=currency)
        return order

    def capture_order(self, order_id: str) -> Dict[str, Any]:
        result = self._authorized("POST", f"/v2/checkout/orders/{order_id}/capture")
        payment_logger.info("PayPal order captured", order_id=order_id, status=result.get("status"))
        return result

    def get_order(self, order_id: str) -> Dict[str, Any]:
        return self._authorized("GET", f"/v2/checkout/orders/{order_id}")

    def close(self):
        self.session.close()

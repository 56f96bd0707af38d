import logging
from typing import Optional

import requests

from shared.core.config import Settings
from shared.helpers.json_response_helper import error_response
from shared.utils.enums import ErrorKind

logger = logging.getLogger(__name__)


class PaymentClient:
    """Thin client for the payment processor's REST API (Stripe wire format)."""

    def __init__(self, secret_key: Optional[str], api_base: str, timeout: float = 20):
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaymentClient":
        return cls(settings.STRIPE_SECRET_KEY, settings.STRIPE_API_BASE,
                   settings.PAYMENT_TIMEOUT_SECONDS)

    def _post(self, path: str, data: dict, failure_message: str) -> dict:
        if not self.secret_key:
            return error_response(
                message="Payment processor is not configured",
                kind=ErrorKind.CONFIGURATION
            )

        try:
            response = requests.post(
                f"{self.api_base}{path}",
                data=data,
                auth=(self.secret_key, ""),
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            detail = e.response.text if e.response is not None else None
            logger.exception("Payment processor call %s failed: %s", path, detail or e)
            return error_response(message=failure_message, kind=ErrorKind.UPSTREAM_FAILURE)
        except ValueError:
            logger.exception("Payment processor returned a non-JSON body for %s", path)
            return error_response(message=failure_message, kind=ErrorKind.UPSTREAM_FAILURE)

    def create_payment_intent(self, order_id: str, amount: int, currency: str,
                              customer_email: Optional[str] = None) -> str:
        data = {
            "amount": amount,
            "currency": currency,
            "metadata[order_id]": order_id,
        }
        if customer_email:
            data["receipt_email"] = customer_email

        intent = self._post("/v1/payment_intents", data,
                            "Failed to create payment intent")

        client_secret = intent.get("client_secret")
        if not client_secret:
            logger.error("Payment intent %s came back without a client secret",
                         intent.get("id"))
            return error_response(message="Failed to create payment intent",
                                  kind=ErrorKind.UPSTREAM_FAILURE)

        logger.info("Payment intent created: %s", intent.get("id"))
        return client_secret

    def create_customer(self, email: str) -> str:
        customer = self._post("/v1/customers", {"email": email},
                              "Failed to create payment customer")
        customer_id = customer.get("id")
        if not customer_id:
            return error_response(message="Failed to create payment customer",
                                  kind=ErrorKind.UPSTREAM_FAILURE)
        return customer_id

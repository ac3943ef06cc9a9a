# memora_backend/services/payment_provider.py
import logging
from typing import Any, Dict, Optional, Protocol

import stripe # Stripe library
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class PaymentProviderError(Exception):
    """Any failure talking to the payments provider: declines, bad ids, network, malformed responses."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProviderPaymentIntent(BaseModel):
    id: str
    status: str
    client_secret: Optional[str] = None


class PaymentProvider(Protocol):
    async def create_intent(self, amount: int, currency: str, metadata: Dict[str, str]) -> ProviderPaymentIntent:
        ...

    async def confirm_intent(self, payment_intent_id: str, payment_method_id: str) -> ProviderPaymentIntent:
        ...


def _to_snapshot(payment_intent: Any, require_client_secret: bool = False) -> ProviderPaymentIntent:
    intent_id = getattr(payment_intent, "id", None)
    status = getattr(payment_intent, "status", None)
    client_secret = getattr(payment_intent, "client_secret", None)

    if not intent_id or not status:
        raise PaymentProviderError("Malformed response from payment provider")
    if require_client_secret and not client_secret:
        raise PaymentProviderError("Payment provider did not return a client secret")

    return ProviderPaymentIntent(id=intent_id, status=status, client_secret=client_secret)


class StripePaymentProvider:
    """
    PaymentProvider backed by the Stripe SDK.

    The secret key is passed on every call instead of being assigned to the
    module-global stripe.api_key. The SDK is synchronous, so each call runs in
    the threadpool and the request handler awaits it.
    """

    def __init__(self, secret_key: str):
        self._secret_key = secret_key
        if not secret_key:
            logger.warning("StripePaymentProvider created without a secret key. Payment endpoints will fail.")

    async def create_intent(self, amount: int, currency: str, metadata: Dict[str, str]) -> ProviderPaymentIntent:
        payment_intent_params = {
            'amount': amount,
            'currency': currency,
            'automatic_payment_methods': {'enabled': True},
            'metadata': metadata,
        }
        try:
            payment_intent = await run_in_threadpool(
                stripe.PaymentIntent.create, api_key=self._secret_key, **payment_intent_params
            )
        except stripe.StripeError as e:
            raise PaymentProviderError(self._message_for(e)) from e

        return _to_snapshot(payment_intent, require_client_secret=True)

    async def confirm_intent(self, payment_intent_id: str, payment_method_id: str) -> ProviderPaymentIntent:
        try:
            payment_intent = await run_in_threadpool(
                stripe.PaymentIntent.confirm,
                payment_intent_id,
                api_key=self._secret_key,
                payment_method=payment_method_id,
            )
        except stripe.StripeError as e:
            raise PaymentProviderError(self._message_for(e)) from e

        return _to_snapshot(payment_intent)

    @staticmethod
    def _message_for(error: stripe.StripeError) -> str:
        # user_message is set for card errors and is safe to show to the end user
        return getattr(error, 'user_message', None) or str(error) or error.__class__.__name__

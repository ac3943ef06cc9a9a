# memora_backend/api/endpoints/payments.py
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from memora_backend.core.dependencies import get_payment_provider
from memora_backend.core.payment_rules import (
    PaymentValidationError,
    format_amount,
    validate_payment_intent_request,
)
from memora_backend.schemas.common import ErrorResponse
from memora_backend.schemas.payment import (
    PaymentConfirmRequest,
    PaymentConfirmResponse,
    PaymentIntentCreateRequest,
    PaymentIntentCreateResponse,
)
from memora_backend.services.payment_provider import PaymentProvider, PaymentProviderError

logger = logging.getLogger(__name__)
router = APIRouter()

APP_TAG = "memora"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Rejected before reaching the payments provider"},
    500: {"model": ErrorResponse, "description": "Payments provider error"},
}


@router.post("/create-payment-intent", response_model=PaymentIntentCreateResponse, responses=ERROR_RESPONSES)
async def create_payment_intent_endpoint(
    payload: PaymentIntentCreateRequest,
    provider: PaymentProvider = Depends(get_payment_provider),
):
    """
    Create a Stripe payment intent for a premium plan purchase.
    Returns the client secret the app hands to the Stripe payment sheet.
    """
    try:
        validate_payment_intent_request(payload.amount, payload.currency, payload.plan)
    except PaymentValidationError as e:
        logger.info(f"Rejected payment intent request: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)

    logger.info(
        f"Creating payment intent: amount={payload.amount} currency={payload.currency} "
        f"plan={payload.plan} ({format_amount(payload.amount)})"
    )

    metadata = {
        'app': APP_TAG,
        'plan': payload.plan,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }

    try:
        payment_intent = await provider.create_intent(payload.amount, payload.currency, metadata)
    except PaymentProviderError as e:
        logger.error(f"Stripe API error creating payment intent: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)
    except Exception as e:
        logger.error(f"Generic error creating payment intent: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e) or "Payment provider error")

    logger.info(f"Payment intent created: {payment_intent.id}")
    return PaymentIntentCreateResponse(
        client_secret=payment_intent.client_secret,
        payment_intent_id=payment_intent.id
    )


@router.post("/confirm-payment", response_model=PaymentConfirmResponse, responses=ERROR_RESPONSES)
async def confirm_payment_endpoint(
    payload: PaymentConfirmRequest,
    provider: PaymentProvider = Depends(get_payment_provider),
):
    """
    Confirm a payment intent with the given payment method.
    The returned status may be non-terminal (e.g. requires_action for 3D Secure).
    """
    if not payload.payment_intent_id or not payload.payment_method_id:
        raise HTTPException(status_code=400, detail="paymentIntentId and paymentMethodId are required")

    logger.info(f"Confirming payment: intent={payload.payment_intent_id} method={payload.payment_method_id}")

    try:
        payment_intent = await provider.confirm_intent(payload.payment_intent_id, payload.payment_method_id)
    except PaymentProviderError as e:
        logger.error(f"Stripe API error confirming payment {payload.payment_intent_id}: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)
    except Exception as e:
        logger.error(f"Generic error confirming payment {payload.payment_intent_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e) or "Payment provider error")

    logger.info(f"Payment confirmed: {payment_intent.id} status={payment_intent.status}")
    return PaymentConfirmResponse(status=payment_intent.status, payment_intent_id=payment_intent.id)

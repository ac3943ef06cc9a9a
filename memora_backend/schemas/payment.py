# memora_backend/schemas/payment.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Optional

from memora_backend.core.payment_rules import DEFAULT_CURRENCY


class CamelModel(BaseModel):
    # The mobile client speaks camelCase JSON
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentIntentCreateRequest(CamelModel):
    """
    Fields are untyped on purpose: type, range and enumeration checks all happen
    in payment_rules so the error messages come out in a fixed order.
    """
    amount: Any = None
    currency: Any = DEFAULT_CURRENCY
    plan: Any = None


class PaymentIntentCreateResponse(CamelModel):
    success: bool = True
    client_secret: str
    payment_intent_id: str


class PaymentConfirmRequest(CamelModel):
    payment_intent_id: Optional[str] = None
    payment_method_id: Optional[str] = None


class PaymentConfirmResponse(CamelModel):
    success: bool = True
    status: str
    payment_intent_id: str

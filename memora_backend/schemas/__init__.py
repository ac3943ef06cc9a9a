from .common import ErrorResponse, ServiceInfo
from .payment import (
    PaymentIntentCreateRequest,
    PaymentIntentCreateResponse,
    PaymentConfirmRequest,
    PaymentConfirmResponse
)
from .ai import (
    ImproveTextRequest,
    ImproveTextResponse,
    CaptionRequest,
    CaptionResponse
)

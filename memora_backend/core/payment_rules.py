from typing import Any

MIN_AMOUNT = 50       # $0.50 in cents
MAX_AMOUNT = 100000   # $1000.00 in cents
SUPPORTED_CURRENCIES = ("usd", "eur", "gbp")
SUPPORTED_PLANS = ("monthly", "yearly")
DEFAULT_CURRENCY = "usd"


class PaymentValidationError(ValueError):
    """Raised when a payment request is rejected before reaching the provider."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def validate_payment_intent_request(amount: Any, currency: Any, plan: Any) -> None:
    """
    Checks run in a fixed order (amount, currency, plan) and the first failure wins.
    Values arrive straight from the JSON body, so any type can show up here.
    """
    # bool is an int subclass; true/false is never an amount
    if isinstance(amount, bool) or not isinstance(amount, int) or not MIN_AMOUNT <= amount <= MAX_AMOUNT:
        raise PaymentValidationError(
            f"Invalid amount. Must be between ${MIN_AMOUNT / 100:.2f} and ${MAX_AMOUNT / 100:.2f}"
        )

    if currency not in SUPPORTED_CURRENCIES:
        raise PaymentValidationError(f"Invalid currency. Supported: {', '.join(SUPPORTED_CURRENCIES)}")

    if plan not in SUPPORTED_PLANS:
        raise PaymentValidationError(f"Invalid plan. Supported: {', '.join(SUPPORTED_PLANS)}")


def format_amount(amount: int) -> str:
    return f"${amount / 100:.2f}"

import pytest
from types import SimpleNamespace
from typing import Dict, List, Optional
from fastapi.testclient import TestClient
import os

# Add project root to sys.path to allow imports from memora_backend
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from memora_backend.main import create_app
from memora_backend.core.config import Settings
from memora_backend.services.payment_provider import ProviderPaymentIntent
from memora_backend.services.writing_assistant import WritingAssistant

ALLOWED_ORIGIN = "http://localhost:8080"


class FakePaymentProvider:
    """Records every call; returns canned intents or raises the configured error."""

    def __init__(self):
        self.create_calls: List[Dict] = []
        self.confirm_calls: List[Dict] = []
        self.error: Optional[Exception] = None
        self.confirm_status = "succeeded"
        self._counter = 0

    async def create_intent(self, amount, currency, metadata):
        self.create_calls.append({"amount": amount, "currency": currency, "metadata": metadata})
        if self.error:
            raise self.error
        self._counter += 1
        intent_id = f"pi_test_{self._counter}"
        return ProviderPaymentIntent(
            id=intent_id, status="requires_payment_method", client_secret=f"{intent_id}_secret_abc"
        )

    async def confirm_intent(self, payment_intent_id, payment_method_id):
        self.confirm_calls.append({"payment_intent_id": payment_intent_id, "payment_method_id": payment_method_id})
        if self.error:
            raise self.error
        return ProviderPaymentIntent(id=payment_intent_id, status=self.confirm_status)


class FakeChatCompletions:
    def __init__(self):
        self.calls: List[Dict] = []
        self.reply: str = ""
        self.error: Optional[Exception] = None

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAIClient:
    def __init__(self):
        self.completions = FakeChatCompletions()
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture(scope="function")
def settings() -> Settings:
    return Settings(
        stripe_secret_key="sk_test_123",
        openai_api_key="sk-openai-test",
        environment="test",
        allowed_origins=["http://localhost:3000", ALLOWED_ORIGIN],
        max_body_bytes=10 * 1024 * 1024,
    )


@pytest.fixture(scope="function")
def fake_provider() -> FakePaymentProvider:
    return FakePaymentProvider()


@pytest.fixture(scope="function")
def fake_openai() -> FakeOpenAIClient:
    return FakeOpenAIClient()


@pytest.fixture(scope="function")
def app(settings, fake_provider, fake_openai):
    return create_app(
        settings=settings,
        payment_provider=fake_provider,
        writing_assistant=WritingAssistant(client=fake_openai),
    )


@pytest.fixture(scope="function")
def client(app):
    with TestClient(app) as c:
        yield c

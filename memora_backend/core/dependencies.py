from fastapi import Request

from memora_backend.core.config import Settings
from memora_backend.services.payment_provider import PaymentProvider
from memora_backend.services.writing_assistant import WritingAssistant

# Collaborators are attached to app.state by create_app(); tests swap them by
# building the app with fakes or via app.dependency_overrides.


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_payment_provider(request: Request) -> PaymentProvider:
    return request.app.state.payment_provider


def get_writing_assistant(request: Request) -> WritingAssistant:
    return request.app.state.writing_assistant

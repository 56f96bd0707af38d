from fastapi import Request

from shared.core.config import Settings
from ..services.completion_client import CompletionClient
from ..services.payment_client import PaymentClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


def get_payment_client(request: Request) -> PaymentClient:
    return request.app.state.payment_client

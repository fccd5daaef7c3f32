# newsletter/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import SecretStr

from .config import (
    ALLOWED_ORIGINS,
    APP_BASE_URL,
    EMAIL_BASE_URL,
    EMAIL_FROM,
    EMAIL_TIMEOUT_MILLISECONDS,
    RESEND_API_KEY,
)
from .domain import SubscriberEmail
from .email_resend import ResendEmailClient
from .log import setup_logging
from .subscriptions import router as subscriptions_router
from .subscriptions_store import SubscriptionStore

logger = logging.getLogger(__name__)


def build_email_client() -> ResendEmailClient:
    if not RESEND_API_KEY:
        raise RuntimeError("RESEND_API_KEY is missing.")
    if not EMAIL_FROM:
        raise RuntimeError("EMAIL_FROM is missing.")
    return ResendEmailClient(
        base_url=EMAIL_BASE_URL,
        sender=SubscriberEmail.parse(EMAIL_FROM),
        authorization_token=SecretStr(RESEND_API_KEY),
        timeout=timedelta(milliseconds=EMAIL_TIMEOUT_MILLISECONDS),
    )


def create_app(
    email_client: Optional[ResendEmailClient] = None,
    subscription_store: Optional[SubscriptionStore] = None,
    app_base_url: str = APP_BASE_URL,
) -> FastAPI:
    """
    Builds the API. Clients passed in are used as-is and left open on
    shutdown; a client built here is closed with the app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        owns_client = app.state.email_client is None
        if owns_client:
            app.state.email_client = build_email_client()
        logger.info(
            "Application starting",
            extra={"email_base_url": app.state.email_client.base_url},
        )

        yield

        if owns_client:
            await app.state.email_client.aclose()
            app.state.email_client = None
        logger.info("Application shutdown complete")

    app = FastAPI(title="Newsletter API", lifespan=lifespan)
    app.state.email_client = email_client
    app.state.subscription_store = subscription_store or SubscriptionStore()
    app.state.app_base_url = app_base_url

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in ALLOWED_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Inject shared clients for routers/endpoints
    @app.middleware("http")
    async def inject_clients(request: Request, call_next):
        request.state.email_client = app.state.email_client
        request.state.subscription_store = app.state.subscription_store
        request.state.app_base_url = app.state.app_base_url
        return await call_next(request)

    app.include_router(subscriptions_router)

    @app.get("/health_check")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()

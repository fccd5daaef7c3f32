from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Form, HTTPException, Request

from .domain import NewSubscriber
from .email_resend import EmailSendError
from .email_templates import render_confirmation_email

logger = logging.getLogger(__name__)

router = APIRouter()


def confirmation_link(base_url: str, token: str) -> str:
    query = urlencode({"subscription_token": token})
    return f"{base_url.rstrip('/')}/subscriptions/confirm?{query}"


@router.post("/subscriptions")
async def subscribe(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
):
    try:
        new_subscriber = NewSubscriber.from_form(name=name, email=email)
    except ValueError as e:
        raise HTTPException(400, str(e))

    email_client = request.state.email_client
    store = request.state.subscription_store
    if email_client is None or store is None:
        raise HTTPException(500, "Server misconfigured")

    sub = store.add_pending(new_subscriber)
    if sub.status == "confirmed":
        logger.info("Email already subscribed", extra={"to": str(new_subscriber.email)})
        return {"status": "confirmed"}

    subject, html, text = render_confirmation_email(
        confirmation_link(request.state.app_base_url, sub.token)
    )

    try:
        await email_client.send_email(new_subscriber.email, subject, html, text)
    except EmailSendError as e:
        logger.error(
            "Failed to send confirmation email",
            extra={"to": str(new_subscriber.email), "error": str(e)},
        )
        raise HTTPException(500, "Failed to send confirmation email")

    logger.info("New subscriber pending confirmation", extra={"to": str(new_subscriber.email)})
    return {"status": "pending_confirmation"}


@router.get("/subscriptions/confirm")
async def confirm(request: Request, subscription_token: Optional[str] = None):
    if not subscription_token:
        raise HTTPException(400, "Missing subscription_token")

    sub = request.state.subscription_store.confirm(subscription_token)
    if sub is None:
        raise HTTPException(401, "Unknown subscription token")

    logger.info("Subscription confirmed", extra={"to": str(sub.subscriber.email)})
    return {"status": sub.status}

# newsletter/subscriptions_store.py
from __future__ import annotations

import secrets
import string
from dataclasses import dataclass
from typing import Dict, Literal, Optional

from .domain import NewSubscriber, SubscriberEmail

SubscriptionStatus = Literal["pending_confirmation", "confirmed"]

TOKEN_LENGTH = 25
_TOKEN_ALPHABET = string.ascii_letters + string.digits


def generate_subscription_token() -> str:
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


@dataclass
class Subscription:
    token: str
    subscriber: NewSubscriber
    status: SubscriptionStatus = "pending_confirmation"


class SubscriptionStore:
    """
    Process-local registry of subscriptions, keyed by confirmation token.
    Nothing is persisted; a restart forgets every pending subscription.
    """

    def __init__(self):
        self._by_token: Dict[str, Subscription] = {}
        self._by_email: Dict[SubscriberEmail, Subscription] = {}

    def add_pending(self, subscriber: NewSubscriber) -> Subscription:
        """
        Registers a pending subscription, one per email address.
        A known email gets its existing subscription back: a pending one keeps
        its token so the link can be re-sent, a confirmed one stays as it is.
        """
        existing = self._by_email.get(subscriber.email)
        if existing is not None:
            return existing

        sub = Subscription(token=generate_subscription_token(), subscriber=subscriber)
        self._by_token[sub.token] = sub
        self._by_email[subscriber.email] = sub
        return sub

    def get(self, token: str) -> Optional[Subscription]:
        return self._by_token.get(token)

    def confirm(self, token: str) -> Optional[Subscription]:
        sub = self._by_token.get(token)
        if sub is None:
            return None
        sub.status = "confirmed"
        return sub

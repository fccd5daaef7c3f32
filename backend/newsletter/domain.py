# newsletter/domain.py
from __future__ import annotations

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

MAX_NAME_LENGTH = 256
FORBIDDEN_NAME_CHARACTERS = set('/()"<>\\{}')


@dataclass(frozen=True)
class SubscriberEmail:
    """
    An email address that passed syntax validation.
    Build it with SubscriberEmail.parse(); the value is kept exactly as given.
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValueError(f"{self.value!r} is not a valid subscriber email.")
        try:
            validate_email(self.value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"{self.value!r} is not a valid subscriber email: {e}") from e

    @classmethod
    def parse(cls, raw: str) -> "SubscriberEmail":
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SubscriberName:
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Subscriber name is empty.")
        if len(self.value) > MAX_NAME_LENGTH:
            raise ValueError(f"Subscriber name is longer than {MAX_NAME_LENGTH} characters.")
        if any(ch in FORBIDDEN_NAME_CHARACTERS for ch in self.value):
            raise ValueError(f"{self.value!r} contains forbidden characters.")

    @classmethod
    def parse(cls, raw: str) -> "SubscriberName":
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NewSubscriber:
    email: SubscriberEmail
    name: SubscriberName

    @classmethod
    def from_form(cls, *, name: str, email: str) -> "NewSubscriber":
        # raises ValueError on the first invalid field
        return cls(email=SubscriberEmail.parse(email), name=SubscriberName.parse(name))

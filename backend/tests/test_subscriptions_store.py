from newsletter.domain import NewSubscriber
from newsletter.subscriptions_store import TOKEN_LENGTH, SubscriptionStore


def _subscriber(email="ursula@domain.com"):
    return NewSubscriber.from_form(name="Ursula", email=email)


def test_add_pending_returns_an_alphanumeric_token():
    store = SubscriptionStore()
    sub = store.add_pending(_subscriber())
    assert len(sub.token) == TOKEN_LENGTH
    assert sub.token.isalnum()
    assert store.get(sub.token).status == "pending_confirmation"


def test_resubscribing_while_pending_reuses_the_token():
    store = SubscriptionStore()
    assert store.add_pending(_subscriber()).token == store.add_pending(_subscriber()).token


def test_resubscribing_after_confirmation_keeps_the_single_confirmed_subscription():
    store = SubscriptionStore()
    first = store.add_pending(_subscriber())
    store.confirm(first.token)

    again = store.add_pending(_subscriber())

    assert again is first
    assert again.status == "confirmed"
    assert [s.token for s in store._by_token.values()] == [first.token]


def test_different_emails_get_different_tokens():
    store = SubscriptionStore()
    a = store.add_pending(_subscriber("a@domain.com"))
    b = store.add_pending(_subscriber("b@domain.com"))
    assert a.token != b.token


def test_confirm_marks_subscription_confirmed():
    store = SubscriptionStore()
    token = store.add_pending(_subscriber()).token
    sub = store.confirm(token)
    assert sub.status == "confirmed"
    # confirming twice is harmless
    assert store.confirm(token).status == "confirmed"


def test_confirm_unknown_token_returns_none():
    assert SubscriptionStore().confirm("nope") is None

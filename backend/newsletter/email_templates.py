# newsletter/email_templates.py
from html import escape


def render_confirmation_email(confirmation_link: str) -> tuple[str, str, str]:
    subject = "Welcome! Please confirm your subscription"

    html = (
        "<p>Welcome to our newsletter!</p>"
        "<p>Click "
        f'<a href="{escape(confirmation_link, quote=True)}">here</a>'
        " to confirm your subscription.</p>"
    )

    text = (
        "Welcome to our newsletter!\n\n"
        "Visit the link below to confirm your subscription:\n"
        f"{confirmation_link}\n"
    )
    return subject, html, text

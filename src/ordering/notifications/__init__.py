"""Mailer registry.

Uses the in-memory fake by default; ``EMAIL_BACKEND=smtp`` switches to SMTP
with Gmail credentials from the environment.
"""

from ordering.notifications.fake_adapter import FakeMailer
from ordering.notifications.port import Mailer
from ordering.notifications.smtp_adapter import SMTPMailer
from shared.config import env_int, env_str

_current_mailer: Mailer | None = None


def get_mailer() -> Mailer:
    global _current_mailer
    if _current_mailer is None:
        if env_str("EMAIL_BACKEND", "fake").lower() == "smtp":
            _current_mailer = SMTPMailer(
                host=env_str("SMTP_HOST", "smtp.gmail.com"),
                port=env_int("SMTP_PORT", 465),
                username=env_str("GMAIL_USER"),
                password=env_str("GMAIL_APP_PASSWORD"),
            )
        else:
            _current_mailer = FakeMailer()
    return _current_mailer


def set_mailer(mailer: Mailer) -> None:
    global _current_mailer
    _current_mailer = mailer


def reset_mailer() -> None:
    global _current_mailer
    _current_mailer = None

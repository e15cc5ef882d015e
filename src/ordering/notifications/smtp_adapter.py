"""SMTP mailer (Gmail app password by default)."""

import smtplib
from email.message import EmailMessage
from uuid import uuid4

from ordering.notifications.port import DeliveryReceipt, Mailer, OutboundEmail


class SMTPMailer(Mailer):
    def __init__(self, host: str, port: int, username: str, password: str, sender: str | None = None) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username

    def deliver(self, email: OutboundEmail) -> DeliveryReceipt:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = email.to
        message["Subject"] = email.subject
        message_id = f"<{uuid4().hex}@dajow>"
        message["Message-ID"] = message_id
        message.set_content(email.text)
        if email.html:
            message.add_alternative(email.html, subtype="html")

        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=10) as client:
                client.login(self.username, self.password)
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            return DeliveryReceipt(delivered=False, error=str(exc))

        return DeliveryReceipt(delivered=True, message_id=message_id)

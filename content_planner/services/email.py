"""
Outbound email through the SendGrid v3 HTTP API.
"""
from dataclasses import dataclass
from typing import Optional

import requests

from ..logging_config import reminder_logger

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


@dataclass
class EmailMessage:
    to: str
    sender: str
    subject: str
    text: Optional[str] = None
    html: Optional[str] = None


class SendGridTransport:
    """
    Client handle for SendGrid.

    Built once per process (see ``main.lifespan``) and handed to whoever needs
    it. ``send`` reports delivery acceptance as a boolean and never raises for
    provider or network failures.
    """

    def __init__(self, api_key: Optional[str], timeout: int = 10, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _payload(self, message: EmailMessage) -> dict:
        content = []
        if message.text:
            content.append({"type": "text/plain", "value": message.text})
        if message.html:
            content.append({"type": "text/html", "value": message.html})
        return {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": message.sender},
            "subject": message.subject,
            "content": content,
        }

    def send(self, message: EmailMessage) -> bool:
        if not self.api_key:
            reminder_logger.warning("SendGrid API key not configured; email not sent", to=message.to)
            return False

        try:
            response = self.session.post(
                SENDGRID_SEND_URL,
                json=self._payload(message),
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            reminder_logger.error("SendGrid request failed", error=e, to=message.to)
            return False

        if 200 <= response.status_code < 300:
            reminder_logger.info("Email accepted by SendGrid", to=message.to, subject=message.subject)
            return True

        reminder_logger.warning(
            "SendGrid rejected email",
            to=message.to,
            status_code=response.status_code,
            body=response.text[:500],
        )
        return False

    def close(self):
        self.session.close()

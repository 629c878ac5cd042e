import logging
import smtplib
import socket
from email.message import EmailMessage
from typing import Optional

from .errors import NotificationError
from .models import NotificationEvent, NotificationMessage

logger = logging.getLogger(__name__)

SUBJECT = "Campus network login notice"
SUBJECT_CHANGED = "Campus network login notice - IP address changed"
SMTPS_PORT = 465


def compose_message(
    event: NotificationEvent,
    recipient: str,
    hostname: Optional[str] = None,
) -> NotificationMessage:
    hostname = hostname or socket.gethostname()
    lines = [
        f"Account {event.username} has logged in to the campus network.",
        "",
        f"Hostname: {hostname}",
        f"IP address: {event.address}",
        f"Login time: {event.timestamp:%Y-%m-%d %H:%M:%S}",
        "",
    ]
    if event.changed:
        lines.append(
            "Warning: the IP address has changed. If this was not you, change your password now."
        )
    else:
        lines.append("If this was not you, change your password.")

    return NotificationMessage(
        recipient=recipient,
        subject=SUBJECT_CHANGED if event.changed else SUBJECT,
        body="\n".join(lines),
    )


class SmtpNotificationSink:
    def __init__(self, server: str, port: int, sender: str, password: str, receiver: str, timeout: float = 30) -> None:
        self.server = server
        self.port = port
        self.sender = sender
        self.password = password
        self.receiver = receiver
        self.timeout = timeout

    @classmethod
    def from_config(cls, smtp) -> "SmtpNotificationSink":
        return cls(
            server=smtp.server,
            port=smtp.port,
            sender=smtp.sender,
            password=smtp.password,
            receiver=smtp.receiver,
        )

    def notify(self, event: NotificationEvent) -> None:
        self.deliver(compose_message(event, self.receiver))

    def deliver(self, message: NotificationMessage) -> None:
        email = EmailMessage()
        email["From"] = self.sender
        email["To"] = message.recipient
        email["Subject"] = message.subject
        email.set_content(message.body)

        logger.info("Sending notification to %s via %s:%s", message.recipient, self.server, self.port)
        try:
            implicit_tls = self.port == SMTPS_PORT
            smtp_class = smtplib.SMTP_SSL if implicit_tls else smtplib.SMTP
            with smtp_class(self.server, self.port, timeout=self.timeout) as client:
                if not implicit_tls:
                    client.starttls()
                client.login(self.sender, self.password)
                client.send_message(email)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"failed to send notification: {exc}") from exc
        logger.info("Notification sent")

"""
Adapter pour les notifications.

Les alertes de stock (stock bas, stock rétabli) passent par cette
abstraction, ce qui découple les handlers du canal concret.
"""

from __future__ import annotations

import abc
import logging
import smtplib

logger = logging.getLogger(__name__)


class AbstractNotifications(abc.ABC):
    """Interface abstraite pour les notifications."""

    @abc.abstractmethod
    def send(self, destination: str, message: str) -> None:
        raise NotImplementedError


class LoggingNotifications(AbstractNotifications):
    """Se contente de journaliser : canal par défaut sans SMTP configuré."""

    def send(self, destination: str, message: str) -> None:
        logger.info("Notification pour %s : %s", destination, message)


class EmailNotifications(AbstractNotifications):
    """Implémentation concrète envoyant des emails via SMTP."""

    def __init__(self, smtp_host: str = "localhost", smtp_port: int = 587):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port

    def send(self, destination: str, message: str) -> None:
        msg = f"Subject: Alerte de stock distributeur\n\n{message}"
        with smtplib.SMTP(self.smtp_host, self.smtp_port) as smtp:
            smtp.sendmail(
                from_addr="vending@example.com",
                to_addrs=[destination],
                msg=msg,
            )

"""Once-per-session alert about stock that is about to expire."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from kitchen_wiz.domain.inventory import Ingredient
from kitchen_wiz.services.views import expiring_soon

_logger = logging.getLogger(__name__)

ALERT_TITLE = "KitchenWiz Alert"


class Notifier(Protocol):
    """Delivers a user-visible alert."""

    def notify(self, title: str, body: str) -> None:
        """Show an alert to the user."""


@dataclass
class LogNotifier(Notifier):
    """Notifier that writes alerts to the application log."""

    def notify(self, title: str, body: str) -> None:
        _logger.warning("%s: %s", title, body)


@dataclass
class NotificationSession:
    """Per-session record of whether the expiry alert was shown."""

    notified: bool = False

    def reset(self) -> None:
        self.notified = False


@dataclass(frozen=True)
class ExpiryAlert:
    """Alert shown for expiring stock."""

    title: str
    body: str
    items: list[Ingredient]


@dataclass
class ExpiryNotifier:
    """Emits at most one expiry alert per session, when permitted."""

    notifier: Notifier
    enabled: bool = True

    def check(
        self,
        inventory: list[Ingredient],
        session: NotificationSession,
        as_of: date | datetime | None = None,
    ) -> ExpiryAlert | None:
        """Alert about expiring stock unless already done this session."""
        if not self.enabled or session.notified:
            return None
        items = expiring_soon(inventory, as_of)
        if not items:
            return None
        alert = ExpiryAlert(
            title=ALERT_TITLE,
            body=(
                f"{len(items)} items are expiring soon! "
                "Check your inventory to avoid waste."
            ),
            items=items,
        )
        self.notifier.notify(alert.title, alert.body)
        session.notified = True
        return alert

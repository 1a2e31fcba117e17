from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .errors import ConfigurationError
from .models import DEFAULT_DEALER, DealerIdentity

DEFAULT_CONTAINER_ID = "GTM-MBB4RX9S"
DEFAULT_CONVERSION_DESTINATION = "AW-CONVERSION_ID/CONVERSION_LABEL"
DEFAULT_COLLECTOR_TIMEOUT = 5.0


@dataclass
class WidgetConfig:
    """Startup inputs for analytics delivery and dealer attribution."""

    container_id: str = DEFAULT_CONTAINER_ID
    conversion_destination: str = DEFAULT_CONVERSION_DESTINATION
    dealer: DealerIdentity = field(default_factory=lambda: DEFAULT_DEALER)
    collector_url: Optional[str] = None
    collector_timeout: float = DEFAULT_COLLECTOR_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WidgetConfig":
        env = os.environ if environ is None else environ
        dealer = DealerIdentity(
            id=env.get("LEAD_WIDGET_DEALER_ID", DEFAULT_DEALER.id).strip(),
            name=env.get("LEAD_WIDGET_DEALER_NAME", DEFAULT_DEALER.name).strip(),
        )
        if not dealer.id or not dealer.name:
            raise ConfigurationError("Dealer id and name must not be empty")

        collector_url = env.get("LEAD_WIDGET_COLLECTOR_URL", "").strip() or None
        raw_timeout = env.get("LEAD_WIDGET_COLLECTOR_TIMEOUT")
        return cls(
            container_id=env.get("LEAD_WIDGET_GTM_ID", DEFAULT_CONTAINER_ID),
            conversion_destination=env.get(
                "LEAD_WIDGET_CONVERSION_SEND_TO", DEFAULT_CONVERSION_DESTINATION
            ),
            dealer=dealer,
            collector_url=collector_url,
            collector_timeout=_parse_timeout(raw_timeout),
        )


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_COLLECTOR_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Collector timeout is not a number: {raw!r}") from exc
    if timeout <= 0:
        raise ConfigurationError("Collector timeout must be positive")
    return timeout

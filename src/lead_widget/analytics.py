from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, Tuple

import requests

from .config import WidgetConfig

logger = logging.getLogger(__name__)

GtagCall = Tuple[str, str, Dict[str, Any]]


class AnalyticsSink(Protocol):
    """Fire-and-forget delivery of built analytics payloads.

    Implementations log delivery failures instead of raising them.
    """

    def report_conversion(self, payload: Dict[str, Any]) -> None:
        ...

    def push_event(self, payload: Dict[str, Any]) -> None:
        ...


class NullSink:
    """Stands in for an analytics layer that is not initialised yet."""

    def report_conversion(self, payload: Dict[str, Any]) -> None:
        return None

    def push_event(self, payload: Dict[str, Any]) -> None:
        return None


@dataclass
class DataLayerBatch:
    data_layer: List[Dict[str, Any]]
    gtag_calls: List[GtagCall]
    flushed_at: datetime = field(
        default_factory=lambda: datetime.now(tz=timezone.utc)
    )


class DataLayerSink:
    """In-memory mirror of the page's ``dataLayer`` and ``gtag`` queue."""

    def __init__(self, *, conversion_destination: str) -> None:
        self.conversion_destination = conversion_destination
        self._data_layer: List[Dict[str, Any]] = []
        self._gtag_calls: List[GtagCall] = []

    def report_conversion(self, payload: Dict[str, Any]) -> None:
        body = {"send_to": self.conversion_destination, **payload}
        self._gtag_calls.append(("event", "conversion", body))

    def push_event(self, payload: Dict[str, Any]) -> None:
        self._data_layer.append(dict(payload))

    def flush(self) -> DataLayerBatch:
        batch = DataLayerBatch(
            data_layer=list(self._data_layer),
            gtag_calls=list(self._gtag_calls),
        )
        self._data_layer.clear()
        self._gtag_calls.clear()
        return batch

    @property
    def data_layer(self) -> List[Dict[str, Any]]:
        return list(self._data_layer)

    @property
    def gtag_calls(self) -> List[GtagCall]:
        return list(self._gtag_calls)


class HttpCollectorSink:
    """Forwards payloads to a server-side tag collector with a single POST each."""

    def __init__(
        self,
        *,
        collector_url: str,
        container_id: str,
        conversion_destination: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.collector_url = collector_url.rstrip("/")
        self.container_id = container_id
        self.conversion_destination = conversion_destination
        self.timeout = timeout
        self.session = session or requests.Session()

    def report_conversion(self, payload: Dict[str, Any]) -> None:
        body = {"send_to": self.conversion_destination, **payload}
        self._post("conversion", body)

    def push_event(self, payload: Dict[str, Any]) -> None:
        self._post("event", payload)

    def _post(self, kind: str, payload: Dict[str, Any]) -> None:
        try:
            response = self.session.post(
                self.collector_url,
                headers={"Content-Type": "application/json"},
                json={
                    "container_id": self.container_id,
                    "kind": kind,
                    "payload": payload,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning(
                "analytics delivery dropped",
                extra={"kind": kind, "collector": self.collector_url, "error": str(exc)},
            )


def build_sink(config: WidgetConfig) -> AnalyticsSink:
    if config.collector_url:
        return HttpCollectorSink(
            collector_url=config.collector_url,
            container_id=config.container_id,
            conversion_destination=config.conversion_destination,
            timeout=config.collector_timeout,
        )
    return DataLayerSink(conversion_destination=config.conversion_destination)

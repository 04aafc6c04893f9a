"""Logging-backed stand-in for a broker connection, used for dry runs."""

from __future__ import annotations

import logging
from typing import Any

from cel_amqp.infrastructure.amqp_connections import ConnectionStatus

LOGGER = logging.getLogger("cel_amqp.events")


class LoggingAmqpConnection:
    """Emit would-be publications to structured logs instead of a broker."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.published = 0

    def basic_publish(
        self,
        *,
        exchange: str,
        routing_key: str,
        body: bytes,
        properties: Any,
        mandatory: bool = False,
    ) -> bool:
        self.published += 1
        LOGGER.info(
            "cel_event_published",
            extra={
                "connection": self.name,
                "exchange": exchange,
                "routing_key": routing_key,
                "content_type": getattr(properties, "content_type", None),
                "delivery_mode": getattr(properties, "delivery_mode", None),
                "body": body.decode("utf-8"),
            },
        )
        return True


class LoggingConnectionManager:
    """Connection provider whose connections only log."""

    def __init__(self) -> None:
        self._connections: dict[str, LoggingAmqpConnection] = {}

    def get_connection(self, name: str) -> LoggingAmqpConnection:
        resolved = name or "dry-run"
        if resolved not in self._connections:
            self._connections[resolved] = LoggingAmqpConnection(resolved)
        return self._connections[resolved]

    def status(self) -> list[ConnectionStatus]:
        return [
            ConnectionStatus(name=name, url="dry-run://", connected=True)
            for name in sorted(self._connections)
        ]

    def close_all(self) -> None:
        self._connections.clear()

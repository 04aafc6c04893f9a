"""Application-level contracts for the AMQP connection collaborator."""

from __future__ import annotations

from typing import Any, Protocol


class AmqpConnectionHandle(Protocol):
    """Port for an already-open broker connection."""

    name: str

    def basic_publish(
        self,
        *,
        exchange: str,
        routing_key: str,
        body: bytes,
        properties: Any,
        mandatory: bool = False,
    ) -> bool:
        """Publish one message and report whether the broker accepted the write."""


class ConnectionProvider(Protocol):
    """Port resolving a named profile to a live connection."""

    def get_connection(self, name: str) -> AmqpConnectionHandle | None:
        """Return the connection for ``name`` or None when it cannot be acquired."""

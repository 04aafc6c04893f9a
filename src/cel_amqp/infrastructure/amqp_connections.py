"""Named AMQP connection profiles backed by pika blocking connections."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urlsplit, urlunsplit

import pika
import pika.exceptions

from cel_amqp.utils.config import AmqpConfig, AmqpConnectionProfile

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[AmqpConnectionProfile], Any]


def open_blocking_connection(profile: AmqpConnectionProfile) -> pika.BlockingConnection:
    """Open a blocking pika connection for a configured profile."""

    parameters = pika.URLParameters(profile.url)
    parameters.frame_max = profile.max_frame_bytes
    parameters.heartbeat = profile.heartbeat_seconds
    return pika.BlockingConnection(parameters)


def redact_url(url: str) -> str:
    parts = urlsplit(url)
    if parts.password is None:
        return url
    host = parts.hostname or ""
    if parts.port is not None:
        host = f"{host}:{parts.port}"
    netloc = f"{parts.username or ''}:****@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


@dataclass(frozen=True, slots=True)
class ConnectionStatus:
    """Health summary of one configured connection profile."""

    name: str
    url: str
    connected: bool

    @property
    def state(self) -> str:
        return "Connected" if self.connected else "Disconnected"


class AmqpConnection:
    """An open broker connection with one publishing channel.

    pika connections are not thread-safe, so every operation holds the
    connection lock.
    """

    def __init__(self, name: str, profile: AmqpConnectionProfile, blocking_connection: Any) -> None:
        self.name = name
        self.profile = profile
        self._connection = blocking_connection
        self._channel = blocking_connection.channel()
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return bool(self._connection.is_open)

    def basic_publish(
        self,
        *,
        exchange: str,
        routing_key: str,
        body: bytes,
        properties: Any,
        mandatory: bool = False,
    ) -> bool:
        with self._lock:
            if not self._connection.is_open:
                logger.error("AMQP connection is closed", extra={"connection": self.name})
                return False
            try:
                if not self._channel.is_open:
                    self._channel = self._connection.channel()
                self._channel.basic_publish(
                    exchange=exchange,
                    routing_key=routing_key,
                    body=body,
                    properties=properties,
                    mandatory=mandatory,
                )
            except pika.exceptions.AMQPError as exc:
                logger.error(
                    "AMQP publish failed",
                    extra={"connection": self.name, "exchange": exchange, "routing_key": routing_key},
                    exc_info=exc,
                )
                return False
        return True

    def close(self) -> None:
        with self._lock:
            if not self._connection.is_open:
                return
            try:
                self._connection.close()
            except pika.exceptions.AMQPError as exc:
                logger.warning("Error closing AMQP connection", extra={"connection": self.name}, exc_info=exc)


class AmqpConnectionManager:
    """Resolve connection profile names to shared live connections."""

    def __init__(self, config: AmqpConfig, connection_factory: ConnectionFactory = open_blocking_connection) -> None:
        self._config = config
        self._connection_factory = connection_factory
        self._connections: dict[str, AmqpConnection] = {}
        self._lock = threading.Lock()

    def resolve_name(self, name: str) -> str:
        return name or self._config.general.default_connection

    def get_connection(self, name: str) -> AmqpConnection | None:
        resolved = self.resolve_name(name)
        profile = self._config.connections.get(resolved)
        if profile is None:
            logger.error("AMQP connection profile not found", extra={"connection": resolved})
            return None

        with self._lock:
            existing = self._connections.get(resolved)
            if existing is not None and existing.is_open:
                return existing

            try:
                connection = AmqpConnection(resolved, profile, self._connection_factory(profile))
            except (pika.exceptions.AMQPError, OSError, ValueError) as exc:
                logger.error(
                    "Could not open AMQP connection",
                    extra={"connection": resolved, "url": redact_url(profile.url)},
                    exc_info=exc,
                )
                return None

            self._connections[resolved] = connection
            logger.info("AMQP connection established", extra={"connection": resolved})
            return connection

    def status(self) -> list[ConnectionStatus]:
        with self._lock:
            live = dict(self._connections)
        return [
            ConnectionStatus(
                name=name,
                url=redact_url(profile.url),
                connected=name in live and live[name].is_open,
            )
            for name, profile in sorted(self._config.connections.items())
        ]

    def close_all(self) -> None:
        with self._lock:
            connections = list(self._connections.values())
            self._connections.clear()
        for connection in connections:
            connection.close()

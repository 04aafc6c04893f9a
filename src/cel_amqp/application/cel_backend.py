"""CEL backend that forwards formatted events to an AMQP broker."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from cel_amqp.application.amqp_ports import AmqpConnectionHandle, ConnectionProvider
from cel_amqp.application.backend_registry import CelBackendRegistry
from cel_amqp.domain.records import CelEventRecord
from cel_amqp.errors import CelFormattingError, ConfigurationError, ConnectionUnavailableError
from cel_amqp.formatting import format_cel_event
from cel_amqp.infrastructure.amqp_publisher import publish_cel_document
from cel_amqp.utils.config import CelAmqpConfig, GlobalOptions

logger = logging.getLogger(__name__)

BACKEND_NAME = "AMQP"

ConfigLoader = Callable[[], CelAmqpConfig]
DocumentPublisher = Callable[..., bool]


class ModuleLoadResult(str, Enum):
    """Outcome reported to the host when the backend module loads."""

    SUCCESS = "success"
    DECLINE = "decline"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class RoutingSnapshot:
    """One configuration generation paired with the connection it resolved."""

    options: GlobalOptions
    connection: AmqpConnectionHandle


class CelAmqpBackend:
    """Holds the active routing snapshot and publishes CEL events against it.

    Readers take a single reference to the current snapshot per event.
    Reloads build a complete new snapshot and rebind it, so an event in
    flight never sees options from one generation with the connection of
    another.
    """

    def __init__(
        self,
        config_loader: ConfigLoader,
        connections: ConnectionProvider,
        publisher: DocumentPublisher = publish_cel_document,
    ) -> None:
        self._config_loader = config_loader
        self._connections = connections
        self._publisher = publisher
        self._snapshot: RoutingSnapshot | None = None
        self._write_lock = threading.Lock()

    @property
    def snapshot(self) -> RoutingSnapshot | None:
        return self._snapshot

    def load(self) -> bool:
        return self._apply_config(reloading=False)

    def reload(self) -> bool:
        return self._apply_config(reloading=True)

    def unload(self) -> None:
        with self._write_lock:
            self._snapshot = None

    def handle_event(self, record: CelEventRecord) -> bool:
        """Publish one event and report whether it reached the broker."""

        snapshot = self._snapshot
        if snapshot is None:
            logger.warning("Dropping CEL event; AMQP backend has no active configuration")
            return False

        try:
            document = format_cel_event(record)
        except CelFormattingError as exc:
            logger.error(
                "Dropping CEL event that could not be formatted",
                extra={"code": exc.code, "reason": exc.message, "unique_id": record.unique_id},
            )
            return False

        options = snapshot.options
        published = self._publisher(
            snapshot.connection,
            exchange=options.exchange,
            queue=options.queue,
            document=document,
        )
        if not published:
            logger.error(
                "Error publishing CEL to AMQP",
                extra={"exchange": options.exchange, "queue": options.queue, "unique_id": record.unique_id},
            )
        return published

    def _apply_config(self, *, reloading: bool) -> bool:
        with self._write_lock:
            try:
                snapshot = self._build_snapshot()
            except (ConfigurationError, ConnectionUnavailableError) as exc:
                logger.error(
                    "CEL AMQP configuration rejected",
                    extra={"code": exc.code, "reason": exc.message, "reloading": reloading},
                )
                return False
            self._snapshot = snapshot

        logger.info(
            "CEL AMQP configuration applied",
            extra={
                "connection": snapshot.connection.name,
                "exchange": snapshot.options.exchange,
                "queue": snapshot.options.queue,
                "reloading": reloading,
            },
        )
        return True

    def _build_snapshot(self) -> RoutingSnapshot:
        options = self._config_loader().global_options
        connection = self._connections.get_connection(options.connection)
        if connection is None:
            raise ConnectionUnavailableError(
                "connection_unavailable",
                f"Could not get AMQP connection '{options.connection}'.",
            )
        return RoutingSnapshot(options=options, connection=connection)


def load_module(backend: CelAmqpBackend, registry: CelBackendRegistry) -> ModuleLoadResult:
    if not backend.load():
        logger.warning("Configuration failed to load")
        return ModuleLoadResult.DECLINE

    if not registry.register(BACKEND_NAME, backend.handle_event):
        logger.error("Could not register CEL backend", extra={"backend": BACKEND_NAME})
        backend.unload()
        return ModuleLoadResult.FAILURE

    logger.info("CEL AMQP logging enabled")
    return ModuleLoadResult.SUCCESS


def reload_module(backend: CelAmqpBackend) -> bool:
    return backend.reload()


def unload_module(backend: CelAmqpBackend, registry: CelBackendRegistry) -> bool:
    backend.unload()
    return registry.unregister(BACKEND_NAME)

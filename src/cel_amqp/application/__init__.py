"""Application layer."""

from .amqp_ports import AmqpConnectionHandle, ConnectionProvider
from .backend_registry import CelBackendRegistry

__all__ = ["AmqpConnectionHandle", "ConnectionProvider", "CelBackendRegistry"]

"""Public package exports for cel_amqp with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "AmaFlag",
    "CelEventType",
    "CelEventRecord",
    "build_cel_document",
    "format_cel_event",
    "publish_cel_document",
    "CelAmqpBackend",
    "CelBackendRegistry",
    "ModuleLoadResult",
    "load_module",
    "reload_module",
    "unload_module",
    "AmqpConnectionManager",
    "CelAmqpError",
    "CelFormattingError",
    "ConfigurationError",
    "ConnectionUnavailableError",
]

_EXPORT_MODULES: dict[str, str] = {
    "AmaFlag": "cel_amqp.cel_types",
    "CelEventType": "cel_amqp.cel_types",
    "CelEventRecord": "cel_amqp.domain.records",
    "build_cel_document": "cel_amqp.formatting",
    "format_cel_event": "cel_amqp.formatting",
    "publish_cel_document": "cel_amqp.infrastructure.amqp_publisher",
    "CelAmqpBackend": "cel_amqp.application.cel_backend",
    "CelBackendRegistry": "cel_amqp.application.backend_registry",
    "ModuleLoadResult": "cel_amqp.application.cel_backend",
    "load_module": "cel_amqp.application.cel_backend",
    "reload_module": "cel_amqp.application.cel_backend",
    "unload_module": "cel_amqp.application.cel_backend",
    "AmqpConnectionManager": "cel_amqp.infrastructure.amqp_connections",
    "CelAmqpError": "cel_amqp.errors",
    "CelFormattingError": "cel_amqp.errors",
    "ConfigurationError": "cel_amqp.errors",
    "ConnectionUnavailableError": "cel_amqp.errors",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'cel_amqp' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value

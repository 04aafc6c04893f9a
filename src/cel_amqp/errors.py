"""Error types raised across the CEL AMQP backend."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, slots=True)
class CelAmqpError(RuntimeError):
    code: str
    message: str

    def __str__(self) -> str:
        return self.message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


@dataclass(eq=False, slots=True)
class ConfigurationError(CelAmqpError):
    """A configuration file is missing, unreadable or invalid."""


@dataclass(eq=False, slots=True)
class ConnectionUnavailableError(CelAmqpError):
    """A named AMQP connection could not be acquired."""


@dataclass(eq=False, slots=True)
class CelFormattingError(CelAmqpError):
    """A CEL event could not be turned into a JSON document."""


@dataclass(eq=False, slots=True)
class BackendLoadError(CelAmqpError):
    """The backend declined to load or could not register with the host."""

"""CLI-facing handlers that wire the backend to its collaborators."""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator

from cel_amqp.application.backend_registry import CelBackendRegistry
from cel_amqp.application.cel_backend import CelAmqpBackend, ModuleLoadResult, load_module, unload_module
from cel_amqp.domain.records import CelEventRecord
from cel_amqp.errors import BackendLoadError, CelFormattingError
from cel_amqp.infrastructure.amqp_connections import AmqpConnectionManager, ConnectionStatus
from cel_amqp.infrastructure.logging_connection import LoggingConnectionManager
from cel_amqp.utils.config import GlobalOptions, load_amqp_config, load_cel_amqp_config


@dataclass(slots=True)
class BackendRuntime:
    backend: CelAmqpBackend
    registry: CelBackendRegistry
    connections: Any


@dataclass(slots=True)
class ForwardSummary:
    total: int = 0
    published: int = 0
    dropped: int = 0
    rejected: list[tuple[int, str]] = field(default_factory=list)


def build_runtime(cel_config: Path, amqp_config: Path, *, dry_run: bool = False) -> BackendRuntime:
    if dry_run:
        connections: Any = LoggingConnectionManager()
    else:
        connections = AmqpConnectionManager(load_amqp_config(amqp_config))
    backend = CelAmqpBackend(lambda: load_cel_amqp_config(cel_config), connections)
    return BackendRuntime(backend=backend, registry=CelBackendRegistry(), connections=connections)


@contextmanager
def running_backend(cel_config: Path, amqp_config: Path, *, dry_run: bool = False) -> Iterator[BackendRuntime]:
    """Load and register the backend for the duration of the block."""

    runtime = build_runtime(cel_config, amqp_config, dry_run=dry_run)
    try:
        result = load_module(runtime.backend, runtime.registry)
        if result is not ModuleLoadResult.SUCCESS:
            raise BackendLoadError(result.value, f"CEL AMQP backend failed to load ({result.value}).")
        try:
            yield runtime
        finally:
            unload_module(runtime.backend, runtime.registry)
    finally:
        runtime.connections.close_all()


def collect_status(cel_config: Path, amqp_config: Path) -> tuple[bool, list[ConnectionStatus]]:
    runtime = build_runtime(cel_config, amqp_config)
    try:
        loaded = runtime.backend.load()
        return loaded, runtime.connections.status()
    finally:
        runtime.connections.close_all()


def forward_lines(lines: Iterable[str], registry: CelBackendRegistry) -> ForwardSummary:
    """Dispatch one JSON-encoded CEL record per line.

    A record counts as dropped when no registered backend accepted it.
    """

    summary = ForwardSummary()
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        summary.total += 1
        try:
            record = CelEventRecord.from_mapping(json.loads(line))
        except json.JSONDecodeError as exc:
            summary.rejected.append((line_number, f"invalid JSON: {exc.msg}"))
            continue
        except CelFormattingError as exc:
            summary.rejected.append((line_number, exc.message))
            continue
        if registry.dispatch(record):
            summary.published += 1
        else:
            summary.dropped += 1
    return summary


def forward_events(
    lines: Iterable[str],
    cel_config: Path,
    amqp_config: Path,
    *,
    dry_run: bool = False,
) -> ForwardSummary:
    with running_backend(cel_config, amqp_config, dry_run=dry_run) as runtime:
        return forward_lines(lines, runtime.registry)


def effective_options(cel_config: Path) -> GlobalOptions:
    return load_cel_amqp_config(cel_config).global_options

from __future__ import annotations

from cel_amqp.application.backend_registry import CelBackendRegistry
from cel_amqp.cel_types import CelEventType
from cel_amqp.domain.records import CelEventRecord


def test_register_dispatch_and_unregister():
    registry = CelBackendRegistry()
    seen = []

    assert registry.register("AMQP", seen.append) is True
    record = CelEventRecord(event_type=CelEventType.ANSWER)

    assert registry.dispatch(record) == 1
    assert seen == [record]

    assert registry.unregister("AMQP") is True
    assert registry.dispatch(record) == 0
    assert registry.names() == []


def test_duplicate_and_empty_names_are_refused():
    registry = CelBackendRegistry()

    assert registry.register("AMQP", lambda record: None) is True
    assert registry.register("AMQP", lambda record: None) is False
    assert registry.register("", lambda record: None) is False
    assert registry.names() == ["AMQP"]


def test_unregister_unknown_name_fails():
    assert CelBackendRegistry().unregister("AMQP") is False


def test_failing_backend_does_not_block_others():
    registry = CelBackendRegistry()
    seen = []

    def explode(record):
        raise RuntimeError("boom")

    registry.register("broken", explode)
    registry.register("working", seen.append)

    assert registry.dispatch(CelEventRecord(event_type=CelEventType.HANGUP)) == 1
    assert len(seen) == 1


def test_backend_returning_false_is_not_counted():
    registry = CelBackendRegistry()
    registry.register("dropping", lambda record: False)
    registry.register("publishing", lambda record: True)

    assert registry.dispatch(CelEventRecord(event_type=CelEventType.ANSWER)) == 1

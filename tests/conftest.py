from __future__ import annotations

from datetime import datetime, timezone

import pytest

from cel_amqp.cel_types import CelEventType
from cel_amqp.domain.records import CelEventRecord


class RecordingConnection:
    def __init__(self, name: str = "main", result: bool = True) -> None:
        self.name = name
        self.result = result
        self.calls: list[dict] = []

    def basic_publish(self, *, exchange, routing_key, body, properties, mandatory=False) -> bool:
        self.calls.append(
            {
                "exchange": exchange,
                "routing_key": routing_key,
                "body": body,
                "properties": properties,
                "mandatory": mandatory,
            }
        )
        return self.result


class FakeConnectionProvider:
    def __init__(self, connections: dict[str, RecordingConnection]) -> None:
        self.connections = connections
        self.requested: list[str] = []

    def get_connection(self, name: str) -> RecordingConnection | None:
        self.requested.append(name)
        return self.connections.get(name)


@pytest.fixture
def recording_connection() -> RecordingConnection:
    return RecordingConnection()


@pytest.fixture
def make_connection():
    return RecordingConnection


@pytest.fixture
def make_provider():
    return FakeConnectionProvider


@pytest.fixture
def answer_record() -> CelEventRecord:
    return CelEventRecord(
        event_type=CelEventType.ANSWER,
        event_time=datetime(2015, 3, 2, 17, 22, 33, 123456, tzinfo=timezone.utc),
        unique_id="1425316953.3",
        linked_id="1425316953.2",
        caller_id_num="5551234",
        caller_id_name="Alice",
        caller_id_ani="5551234",
        caller_id_rdnis="",
        caller_id_dnid="100",
        extension="100",
        context="default",
        channel_name="PJSIP/alice-00000003",
        application_name="Dial",
        application_data="PJSIP/bob",
        account_code="acct-7",
        amaflag=3,
        user_field="vip",
        peer="PJSIP/bob-00000004",
        peer_account="acct-9",
    )

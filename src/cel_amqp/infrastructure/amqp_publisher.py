"""Single-shot publication of formatted CEL documents."""

from __future__ import annotations

import pika

from cel_amqp.application.amqp_ports import AmqpConnectionHandle

PERSISTENT_DELIVERY_MODE = 2
JSON_CONTENT_TYPE = "application/json"


def cel_message_properties() -> pika.BasicProperties:
    return pika.BasicProperties(
        delivery_mode=PERSISTENT_DELIVERY_MODE,
        content_type=JSON_CONTENT_TYPE,
    )


def publish_cel_document(
    connection: AmqpConnectionHandle,
    *,
    exchange: str,
    queue: str,
    document: str,
) -> bool:
    """Publish a JSON document using the queue name as routing key.

    Unroutable messages are not returned to us; the broker may drop them.
    """

    return connection.basic_publish(
        exchange=exchange,
        routing_key=queue,
        body=document.encode("utf-8"),
        properties=cel_message_properties(),
        mandatory=False,
    )

from .config import (
    AmqpConfig,
    AmqpConnectionProfile,
    AmqpGeneral,
    CelAmqpConfig,
    GlobalOptions,
    load_amqp_config,
    load_cel_amqp_config,
)

__all__ = [
    "AmqpConfig",
    "AmqpConnectionProfile",
    "AmqpGeneral",
    "CelAmqpConfig",
    "GlobalOptions",
    "load_amqp_config",
    "load_cel_amqp_config",
]

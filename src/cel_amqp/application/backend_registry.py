"""In-process host event source that fans CEL events out to registered backends."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from cel_amqp.domain.records import CelEventRecord

logger = logging.getLogger(__name__)

CelCallback = Callable[[CelEventRecord], object]


class CelBackendRegistry:
    def __init__(self) -> None:
        self._backends: dict[str, CelCallback] = {}
        self._lock = threading.Lock()

    def register(self, name: str, callback: CelCallback) -> bool:
        if not name:
            logger.warning("Refusing to register CEL backend without a name")
            return False
        with self._lock:
            if name in self._backends:
                logger.warning("CEL backend already registered", extra={"backend": name})
                return False
            self._backends[name] = callback
        return True

    def unregister(self, name: str) -> bool:
        with self._lock:
            return self._backends.pop(name, None) is not None

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._backends)

    def dispatch(self, record: CelEventRecord) -> int:
        """Deliver a record to every backend and return how many accepted it.

        A backend rejects an event by returning False or raising.
        """

        with self._lock:
            backends = list(self._backends.items())

        accepted = 0
        for name, callback in backends:
            try:
                if callback(record) is not False:
                    accepted += 1
            except Exception:  # noqa: BLE001
                logger.exception("CEL backend raised while handling an event", extra={"backend": name})
        return accepted

"""Per-order submit guard.

Order patches are not versioned, so the protection against a double submit
is simply refusing a second submit for an order while the first is still
being processed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from florist.domain.exceptions import SubmitInProgressError

logger = logging.getLogger(__name__)


class SubmitGuard:

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: set[int] = set()

    @contextmanager
    def submitting(self, order_id: int) -> Iterator[None]:
        with self._lock:
            if order_id in self._pending:
                logger.info("Rejected duplicate submit for order #%s", order_id)
                raise SubmitInProgressError(
                    f"Order #{order_id} already has a submit in progress"
                )
            self._pending.add(order_id)
        try:
            yield
        finally:
            with self._lock:
                self._pending.discard(order_id)

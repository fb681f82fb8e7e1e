"""Activity Hub - best-effort fan-out of live activity events.

Listeners are any objects with a ``send(message: dict)`` method; an
``is_open`` attribute, when present, is honoured. Delivery carries no
guarantee: a listener that is closed or raises is dropped silently.

With ``background=True`` publish() only enqueues; a daemon thread drains
the bounded queue, so publishing never blocks the scoring path.
"""

import atexit
import logging
import queue
import threading
from typing import Any, Dict, Optional, Protocol, Set, runtime_checkable

from authshield.common.constants import ActivityConstants
from authshield.data.schemas.alert import ActivityEvent


logger = logging.getLogger(__name__)


@runtime_checkable
class ActivityListener(Protocol):
    def send(self, message: Dict[str, Any]) -> None:
        ...


class ActivityHub:
    """Registry of live listeners plus optional background delivery."""

    def __init__(
        self,
        background: bool = False,
        max_queue_size: int = ActivityConstants.QUEUE_SIZE,
        flush_timeout: float = ActivityConstants.FLUSH_TIMEOUT_SECONDS,
    ):
        self._listeners: Set[ActivityListener] = set()
        self._lock = threading.Lock()
        self.flush_timeout = flush_timeout

        self._queue: Optional[queue.Queue] = None
        self._shutdown_event = threading.Event()
        self._worker: Optional[threading.Thread] = None

        # Statistics
        self._delivered = 0
        self._dropped_events = 0

        if background:
            self._queue = queue.Queue(maxsize=max_queue_size)
            self._worker = threading.Thread(
                target=self._delivery_loop,
                name="ActivityHub",
                daemon=True,
            )
            self._worker.start()
            atexit.register(self.shutdown)

    def subscribe(self, listener: ActivityListener) -> None:
        with self._lock:
            self._listeners.add(listener)

    def unsubscribe(self, listener: ActivityListener) -> None:
        with self._lock:
            self._listeners.discard(listener)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def publish(self, event: ActivityEvent) -> None:
        """Fan an event out to every connected listener.

        Never raises.
        """
        message = event.envelope()
        if self._queue is None or self._shutdown_event.is_set():
            self._deliver(message)
            return
        try:
            self._queue.put_nowait(message)
        except queue.Full:
            with self._lock:
                self._dropped_events += 1
            logger.warning("Activity queue full, dropping event")

    def _deliver(self, message: Dict[str, Any]) -> None:
        with self._lock:
            listeners = list(self._listeners)

        stale = []
        for listener in listeners:
            if getattr(listener, "is_open", True) is False:
                stale.append(listener)
                continue
            try:
                listener.send(message)
            except Exception as e:
                logger.debug(f"Dropping activity listener after send failure: {e}")
                stale.append(listener)

        with self._lock:
            for listener in stale:
                self._listeners.discard(listener)
            self._delivered += 1

    def _delivery_loop(self) -> None:
        while not self._shutdown_event.is_set():
            try:
                message = self._queue.get(timeout=ActivityConstants.QUEUE_GET_TIMEOUT)
            except queue.Empty:
                continue
            try:
                if message is None:
                    break
                self._deliver(message)
            except Exception as e:
                logger.error(f"Unexpected error in activity delivery: {e}")
            finally:
                self._queue.task_done()
        self._drain_queue()

    def _drain_queue(self) -> None:
        while True:
            try:
                message = self._queue.get_nowait()
            except queue.Empty:
                break
            if message is not None:
                self._deliver(message)
            self._queue.task_done()

    def shutdown(self) -> None:
        """Stop background delivery, delivering anything still queued."""
        if self._worker is None or self._shutdown_event.is_set():
            return
        try:
            self._queue.put_nowait(None)
        except queue.Full:
            pass
        self._shutdown_event.set()
        self._worker.join(timeout=self.flush_timeout)
        # Anything the worker left behind is delivered here
        self._drain_queue()

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "listeners": len(self._listeners),
                "events_delivered": self._delivered,
                "events_dropped": self._dropped_events,
            }

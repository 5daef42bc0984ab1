"""Background worker running the outbox relay."""

import asyncio
import threading
from typing import Optional

from app.application.use_cases.relay_outbox_events import RelayOutboxEvents
from app.infrastructure.logging.logger import log_event, logger


class OutboxRelayWorker:
    """Runs the relay periodically on a daemon thread.

    trigger() wakes the worker immediately, e.g. right after a vehicle commit.
    """

    def __init__(self, relay: RelayOutboxEvents, interval_seconds: float = 5.0) -> None:
        """
        Initialize worker.

        Args:
            relay: Relay use case
            interval_seconds: Pause between two runs when not triggered
        """
        self._relay = relay
        self._interval_seconds = interval_seconds
        self._wake_up = threading.Event()
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def trigger(self) -> None:
        """Request an immediate relay run."""
        self._wake_up.set()

    def run_once(self, loop: asyncio.AbstractEventLoop) -> int:
        """
        Run the relay once, logging failures instead of stopping the worker.

        Returns:
            Number of messages published
        """
        try:
            return loop.run_until_complete(self._relay.execute())
        except Exception as e:
            logger.error(f"Outbox relay run failed: {str(e)}")
            return 0

    def _run(self) -> None:
        loop = asyncio.new_event_loop()
        log_event(component="outbox_relay", event="worker_started")
        try:
            while not self._stopped.is_set():
                self._wake_up.clear()
                self.run_once(loop)
                self._wake_up.wait(self._interval_seconds)
        finally:
            loop.close()
            log_event(component="outbox_relay", event="worker_stopped")

    def start(self) -> None:
        """Start the worker thread."""
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="outbox-relay", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 10.0) -> None:
        """Stop the worker thread and wait for the current run to finish."""
        self._stopped.set()
        self._wake_up.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

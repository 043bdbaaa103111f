"""Background heartbeat loop with graceful shutdown."""

from __future__ import annotations

import asyncio
from enum import StrEnum

from .logging import get_logger

logger = get_logger(__name__)


class HeartbeatState(StrEnum):
    """Lifecycle states of a heartbeat service."""

    PENDING = "pending"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class HeartbeatService:
    """Periodic task that logs a tick every interval until asked to stop.

    The loop performs no work of its own; it is the template for periodic
    jobs that need to start with the application and stop with it.
    """

    def __init__(self, *, interval: float = 1.0, name: str = "heartbeat") -> None:
        """Initialize heartbeat with tick interval in seconds."""
        if interval <= 0:
            raise ValueError("Heartbeat interval must be positive")
        self.interval = interval
        self.name = name
        self.state = HeartbeatState.PENDING
        self.ticks = 0
        self._stop_event: asyncio.Event | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        """True while the loop task is alive."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Spawn the loop task on the running event loop."""
        if self._task is not None:
            raise RuntimeError(f"{self.name} already started")

        self._stop_event = asyncio.Event()
        self.state = HeartbeatState.RUNNING
        self._task = asyncio.create_task(self._run(self._stop_event), name=self.name)

    async def stop(self) -> None:
        """Signal the loop to exit and wait until it has."""
        if self._task is None or self._stop_event is None:
            return
        if self.state == HeartbeatState.RUNNING:
            self.state = HeartbeatState.STOPPING
        self._stop_event.set()
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
        finally:
            self._task = None

    async def _run(self, stop_event: asyncio.Event) -> None:
        logger.info("heartbeat.started", service=self.name, interval=self.interval)
        try:
            while not stop_event.is_set():
                self.ticks += 1
                logger.info("heartbeat.tick", service=self.name, tick=self.ticks)
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=self.interval)
                except TimeoutError:
                    continue
            self.state = HeartbeatState.STOPPING
            logger.info("heartbeat.stopping", service=self.name)
        except asyncio.CancelledError:
            logger.info("heartbeat.cancelled", service=self.name)
            raise
        finally:
            self.state = HeartbeatState.STOPPED
            logger.info("heartbeat.stopped", service=self.name, ticks=self.ticks)

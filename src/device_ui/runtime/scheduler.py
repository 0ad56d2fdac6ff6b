"""Background cadence for outbound snapshots."""

from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from device_ui.errors import EncodingOverflow
from device_ui.observability.logging import get_logger
from device_ui.protocol.handler import ProtocolHandler
from device_ui.runtime.transport import Transport

logger = get_logger(__name__)

SNAPSHOT_JOB_ID = "device_ui.snapshot"


class SnapshotScheduler:
    """Emits a full snapshot on a fixed interval."""

    def __init__(
        self,
        handler: ProtocolHandler,
        transport: Transport,
        interval: Optional[float] = None,
    ):
        """Initializes the snapshot scheduler.

        Args:
            handler: Protocol handler that renders the registry.
            transport: Channel the snapshots are written to.
            interval: Seconds between snapshots. Defaults to the handler's
                configured snapshot_interval.
        """
        self.handler = handler
        self.transport = transport
        self.interval = interval or handler.config.snapshot_interval
        self.scheduler = BackgroundScheduler()
        self._started = False

    def start(self):
        """Starts emitting snapshots in the background."""
        if self._started:
            return

        self.scheduler.add_job(
            self.tick,
            IntervalTrigger(seconds=self.interval),
            id=SNAPSHOT_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        self._started = True
        logger.info(f"Snapshot scheduler started (interval {self.interval}s).")

    def stop(self):
        """Stops the background cadence and waits for a running tick."""
        if not self._started:
            return
        self.scheduler.shutdown(wait=True)
        self._started = False
        logger.info("Snapshot scheduler stopped.")

    @property
    def running(self) -> bool:
        return self._started

    def tick(self) -> bool:
        """Builds and writes one snapshot.

        Returns:
            True if a snapshot was written, False if it was dropped
            because it did not fit the outbound buffer.
        """
        try:
            line = self.handler.build_snapshot()
        except EncodingOverflow as e:
            self.handler.metrics.inc("snapshots.overflow")
            logger.error(
                f"Snapshot dropped: {e.detail}",
                extra={"event": e.code, "size": e.size, "capacity": e.capacity},
            )
            return False

        self.transport.write_line(line)
        self.handler.metrics.inc("snapshots.emitted")
        return True

"""Top-level wiring of one device: registry, protocol, transport, cadence."""

from typing import Optional

from ..config import DeviceConfig, build_registry
from ..observability.logging import get_logger
from ..observability.metrics import RuntimeMetrics
from ..protocol.handler import ProtocolHandler
from ..registry.abstract import Registry
from .scheduler import SnapshotScheduler
from .transport import StreamTransport, Transport


logger = get_logger(__name__)


class Device:
    """A running device UI.

    The reader loop handles inbound lines on the calling thread while the
    snapshot scheduler renders on its own thread; the registry serializes
    the two.
    """

    def __init__(
        self,
        registry: Registry,
        transport: Optional[Transport] = None,
        *,
        handler: Optional[ProtocolHandler] = None,
        scheduler: Optional[SnapshotScheduler] = None,
    ) -> None:
        self.registry = registry
        self.transport = transport or StreamTransport()
        self.handler = handler or ProtocolHandler(registry)
        self.scheduler = scheduler or SnapshotScheduler(self.handler, self.transport)

    @classmethod
    def from_config(
        cls, config: DeviceConfig, transport: Optional[Transport] = None
    ) -> "Device":
        """Builds a device from a loaded layout."""
        registry = build_registry(config)
        handler = ProtocolHandler(
            registry, config=config.runtime, metrics=RuntimeMetrics()
        )
        return cls(registry, transport, handler=handler)

    @property
    def metrics(self) -> RuntimeMetrics:
        return self.handler.metrics

    def run(self, *, final_snapshot: bool = True) -> None:
        """Serves the transport until its input ends.

        Args:
            final_snapshot: Whether to emit one last snapshot after the
                input ends, so the renderer sees the final state.
        """
        logger.info(
            f"Device started with {len(self.registry)} components.",
            extra={"components": self.registry.ids()},
        )
        self.scheduler.start()
        try:
            for line in self.transport.lines():
                try:
                    response = self.handler.handle_line(line)
                except Exception as e:
                    self.metrics.inc("messages.failed")
                    logger.exception(f"Error handling inbound line: {str(e)}")
                    continue
                if response is not None:
                    self.transport.write_line(response)
        finally:
            self.scheduler.stop()
            if final_snapshot:
                self.scheduler.tick()
            logger.info(
                "Device stopped.",
                extra={
                    "metrics": self.metrics.summary(),
                    "degraded": self.metrics.degraded,
                },
            )

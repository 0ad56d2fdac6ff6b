import json
from unittest.mock import MagicMock

import pytest

from device_ui.config import RuntimeConfig
from device_ui.models.component import Slider
from device_ui.protocol.handler import ProtocolHandler
from device_ui.registry.in_memory import InMemoryRegistry
from device_ui.runtime.scheduler import SNAPSHOT_JOB_ID, SnapshotScheduler


class TestSnapshotScheduler:
    @pytest.fixture
    def setup(self):
        registry = InMemoryRegistry([Slider(id="s1", min=0, max=10, value=3)])
        handler = ProtocolHandler(registry, config=RuntimeConfig(snapshot_interval=30))
        transport = MagicMock()
        worker = SnapshotScheduler(handler, transport)
        return worker, handler, transport

    def test_interval_from_config(self, setup):
        worker, _, _ = setup
        assert worker.interval == 30

    def test_explicit_interval(self, setup):
        _, handler, transport = setup
        assert SnapshotScheduler(handler, transport, interval=0.5).interval == 0.5

    def test_tick_writes_snapshot(self, setup):
        worker, handler, transport = setup
        assert worker.tick() is True
        transport.write_line.assert_called_once()
        line = transport.write_line.call_args[0][0]
        assert json.loads(line)["components"][0]["value"] == 3
        assert handler.metrics.get("snapshots.emitted") == 1

    def test_tick_reports_overflow(self):
        registry = InMemoryRegistry([Slider(id="s1", min=0, max=10, value=3)])
        handler = ProtocolHandler(
            registry, config=RuntimeConfig(max_message_bytes=16)
        )
        transport = MagicMock()
        worker = SnapshotScheduler(handler, transport)

        assert worker.tick() is False
        transport.write_line.assert_not_called()
        assert handler.metrics.get("snapshots.overflow") == 1
        assert handler.metrics.degraded is True

    def test_start_and_stop(self, setup):
        worker, _, _ = setup
        worker.start()
        try:
            assert worker.running
            assert worker.scheduler.get_job(SNAPSHOT_JOB_ID) is not None
            # Starting twice is a no-op.
            worker.start()
        finally:
            worker.stop()
        assert not worker.running

    def test_stop_without_start(self, setup):
        worker, _, _ = setup
        worker.stop()
        assert not worker.running

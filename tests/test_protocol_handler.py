import json

import pytest

from device_ui.config import RuntimeConfig
from device_ui.errors import EncodingOverflow
from device_ui.models.component import Button, Slider, Window
from device_ui.protocol.handler import ProtocolHandler
from device_ui.registry.in_memory import InMemoryRegistry


@pytest.fixture
def registry():
    return InMemoryRegistry(
        [
            Slider(id="s1", min=0, max=100, value=50),
            Button(id="b1"),
            Window(
                id="w1",
                value=3.14,
                x=10,
                y=10,
                width=50,
                height=30,
                screen_width=128,
                screen_height=64,
            ),
        ]
    )


@pytest.fixture
def handler(registry):
    return ProtocolHandler(registry)


def snapshot_of(handler, component_id):
    components = json.loads(handler.build_snapshot())["components"]
    return next(c for c in components if c["id"] == component_id)


class TestProtocolScenarios:
    def test_slider_round_trip(self, handler):
        assert handler.handle_line('{"update":{"id":"s1","value":150}}') is None
        assert snapshot_of(handler, "s1")["value"] == 100
        assert handler.handle_line('{"update":{"id":"s1","value":-10}}') is None
        assert snapshot_of(handler, "s1")["value"] == 0

    def test_window_clamps_to_screen(self, handler):
        handler.handle_line('{"update":{"id":"w1","x":200,"y":200}}')
        assert snapshot_of(handler, "w1")["position"] == {"x": 78, "y": 34}

    def test_window_single_coordinate_does_not_move(self, handler):
        handler.handle_line('{"update":{"id":"w1","x":0}}')
        assert snapshot_of(handler, "w1")["position"] == {"x": 10, "y": 10}

    def test_malformed_answers_error_and_changes_nothing(self, handler, registry):
        before = registry.render_all()
        assert handler.handle_line("not json") == '{"error":"Invalid JSON"}'
        assert registry.render_all() == before

    def test_update_without_id_answers_error(self, handler):
        assert handler.handle_line('{"update":{"value":3}}') == '{"error":"Invalid JSON"}'

    def test_ignored_message_answers_nothing(self, handler, registry):
        before = registry.render_all()
        assert handler.handle_line('{"ping":true}') is None
        assert registry.render_all() == before

    def test_unknown_id_dropped_silently(self, handler, registry):
        before = registry.render_all()
        assert handler.handle_line('{"update":{"id":"zz","value":3}}') is None
        assert registry.render_all() == before
        assert handler.metrics.get("updates.unknown_id") == 1

    def test_unknown_id_reported_when_enabled(self, registry):
        handler = ProtocolHandler(
            registry, config=RuntimeConfig(report_unknown_ids=True)
        )
        response = handler.handle_line('{"update":{"id":"zz","value":3}}')
        assert json.loads(response) == {"error": "Unknown component", "id": "zz"}


class TestSnapshots:
    def test_snapshot_shape_and_order(self, handler):
        message = json.loads(handler.build_snapshot())
        assert list(message) == ["components"]
        assert [c["id"] for c in message["components"]] == ["s1", "b1", "w1"]
        assert message["components"][2] == {
            "type": "Window",
            "id": "w1",
            "value": 3.14,
            "position": {"x": 10, "y": 10},
            "size": {"width": 50, "height": 30},
        }

    def test_snapshot_is_compact_single_line(self, handler):
        line = handler.build_snapshot()
        assert "\n" not in line
        assert line.startswith('{"components":[{"type":"Slider","id":"s1"')

    def test_sequence_increments(self, handler):
        assert handler.render_snapshot().sequence == 1
        assert handler.render_snapshot().sequence == 2

    def test_overflow_raises_instead_of_truncating(self, registry):
        handler = ProtocolHandler(
            registry, config=RuntimeConfig(max_message_bytes=32)
        )
        with pytest.raises(EncodingOverflow):
            handler.build_snapshot()

    def test_empty_registry(self):
        handler = ProtocolHandler(InMemoryRegistry())
        assert handler.build_snapshot() == '{"components":[]}'


class TestHandlerMetrics:
    def test_counters(self, handler):
        handler.handle_line('{"update":{"id":"s1","value":1}}')
        handler.handle_line("{}")
        handler.handle_line("garbage")
        assert handler.metrics.summary() == {
            "messages.ignored": 1,
            "messages.malformed": 1,
            "messages.received": 3,
            "updates.applied": 1,
        }


class TestHostileInput:
    @pytest.mark.parametrize(
        "line",
        [
            "[" * 100000 + "]" * 100000,
            '{"update":{"id":"w1","value":' + "9" * 5000 + "}}",
        ],
    )
    def test_undecodable_lines_answer_error(self, handler, registry, line):
        before = registry.render_all()
        assert handler.handle_line(line) == '{"error":"Invalid JSON"}'
        assert registry.render_all() == before

    @pytest.mark.parametrize(
        "value", ["9" * 400, "Infinity", "-Infinity", "NaN"]
    )
    def test_unrepresentable_window_value_ignored(self, handler, value):
        assert handler.handle_line('{"update":{"id":"w1","value":' + value + "}}") is None
        assert snapshot_of(handler, "w1")["value"] == 3.14
        assert "null" not in handler.build_snapshot()

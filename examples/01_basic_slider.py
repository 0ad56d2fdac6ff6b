"""Basic example of the device UI protocol.

This example demonstrates how to:
1. Register components in a registry.
2. Feed inbound update lines to the protocol handler.
3. Render the outbound snapshot line.
"""

from device_ui.models.component import Button, Slider
from device_ui.protocol.handler import ProtocolHandler
from device_ui.registry.in_memory import InMemoryRegistry


def run_example():
    # 1. Register the components the device shows
    registry = InMemoryRegistry(
        [
            Slider(id="s1", min=0, max=100, value=50),
            Button(id="b1"),
        ]
    )
    handler = ProtocolHandler(registry)

    print(f"Initial snapshot: {handler.build_snapshot()}")

    # 2. Inbound lines as a remote client would send them
    lines = [
        '{"update": {"id": "s1", "value": 150}}',  # clamped to max
        '{"update": {"id": "b1", "pressed": true}}',
        '{"update": {"id": "nope", "value": 1}}',  # dropped
        '{"hello": "world"}',  # no update, ignored
        "not json",  # answered with an error
    ]
    for line in lines:
        response = handler.handle_line(line)
        print(f"> {line}")
        if response is not None:
            print(f"< {response}")

    # 3. The snapshot the renderer receives on the next tick
    print(f"\nFinal snapshot: {handler.build_snapshot()}")
    print(f"Metrics: {handler.metrics.summary()}")


if __name__ == "__main__":
    run_example()

"""Running a device from a layout file over in-memory streams.

This example demonstrates how to:
1. Load a YAML layout.
2. Run the device loop against a scripted input stream.
3. Observe the window being clamped to the screen.
"""

import io
from pathlib import Path

from device_ui.config import load_device_config
from device_ui.observability.logging import setup_logging
from device_ui.runtime.device import Device
from device_ui.runtime.transport import StreamTransport


LAYOUT = Path(__file__).parent / "layouts" / "demo.yaml"


def run_example():
    setup_logging("WARNING")
    config = load_device_config(LAYOUT)

    inbound = io.StringIO(
        '{"update": {"id": "w1", "x": 200, "y": 200}}\n'
        '{"update": {"id": "w1", "x": -5}}\n'  # x alone does not move
        '{"update": {"id": "w1", "value": 2.71}}\n'
    )
    outbound = io.StringIO()

    device = Device.from_config(config, StreamTransport(inbound, outbound))
    device.run()

    # The last line is the snapshot emitted on shutdown.
    print(outbound.getvalue().splitlines()[-1])


if __name__ == "__main__":
    run_example()

"""Exception types raised by the device UI runtime."""


class DeviceUIError(Exception):
    def __init__(self, code: str, detail: str):
        self.code = code
        self.detail = detail
        super().__init__(detail)


class MalformedMessage(DeviceUIError):
    """An inbound line is not a well-formed message."""

    def __init__(self, detail: str):
        super().__init__("message.malformed", detail)


class UnknownComponentID(DeviceUIError):
    def __init__(self, component_id: str):
        self.component_id = component_id
        super().__init__(
            "component.unknown_id", f"No component with id {component_id!r}"
        )


class DuplicateComponentID(DeviceUIError):
    def __init__(self, component_id: str):
        self.component_id = component_id
        super().__init__(
            "component.duplicate_id",
            f"A component with id {component_id!r} is already registered",
        )


class EncodingOverflow(DeviceUIError):
    """An outbound message does not fit the channel's buffer."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(
            "encoding.overflow",
            f"Encoded message is {size} bytes, buffer holds {capacity}",
        )


class ConfigError(DeviceUIError):
    def __init__(self, detail: str):
        super().__init__("config.invalid", detail)

from typing import Optional, Union

from ..config import RuntimeConfig
from ..models.enums import DispatchOutcome, IntentType
from ..models.intent import InboundIntent
from ..models.messages import (
    INVALID_JSON,
    UNKNOWN_COMPONENT,
    ErrorMessage,
)
from ..models.state_snapshot import StateSnapshot
from ..observability.logging import get_logger
from ..observability.metrics import RuntimeMetrics
from ..registry.abstract import Registry
from .codec import encode_message
from .parser import parse_message


logger = get_logger(__name__)


class ProtocolHandler:
    """
    Routes inbound lines to the registry and renders outbound snapshots.

    The inbound and outbound flows share nothing but the registry, so the
    handler may be driven from a reader loop and a scheduler thread at once.
    """

    def __init__(
        self,
        registry: Registry,
        *,
        config: Optional[RuntimeConfig] = None,
        metrics: Optional[RuntimeMetrics] = None,
    ) -> None:
        self.registry = registry
        self.config = config or RuntimeConfig()
        self.metrics = metrics or RuntimeMetrics()
        self._sequence = 0

    def handle_line(self, raw: Union[str, bytes]) -> Optional[str]:
        """Handles one inbound line.

        Args:
            raw: The line as read from the transport.

        Returns:
            The response line to send back, or None when the line needs
            no answer.
        """
        self.metrics.inc("messages.received")
        intent = parse_message(raw)

        if intent.type == IntentType.IGNORED:
            self.metrics.inc("messages.ignored")
            return None

        if intent.type == IntentType.MALFORMED:
            self.metrics.inc("messages.malformed")
            logger.warning(
                f"Rejected malformed message: {intent.reason}",
                extra={"event": "message.malformed"},
            )
            return encode_message(ErrorMessage(error=INVALID_JSON))

        return self._apply_update(intent)

    def _apply_update(self, intent: InboundIntent) -> Optional[str]:
        outcome = self.registry.dispatch(intent.component_id, intent.patch)

        if outcome == DispatchOutcome.UNKNOWN_ID:
            self.metrics.inc("updates.unknown_id")
            logger.warning(
                f"Dropped update for unknown component {intent.component_id!r}",
                extra={"event": "update.unknown_id", "component_id": intent.component_id},
            )
            if self.config.report_unknown_ids:
                return encode_message(
                    ErrorMessage(error=UNKNOWN_COMPONENT, id=intent.component_id)
                )
            return None

        self.metrics.inc("updates.applied")
        logger.debug(
            f"Applied update to {intent.component_id!r}",
            extra={"component_id": intent.component_id, "patch": intent.patch},
        )
        return None

    def render_snapshot(self) -> StateSnapshot:
        """Renders every component into a new snapshot."""
        self._sequence += 1
        return StateSnapshot(
            sequence=self._sequence, components=self.registry.render_all()
        )

    def build_snapshot(self) -> str:
        """Renders and encodes one outbound snapshot line.

        Raises:
            EncodingOverflow: If the snapshot does not fit the outbound
                buffer. Nothing is truncated.
        """
        snapshot = self.render_snapshot()
        return encode_message(
            snapshot.to_message(), self.config.max_message_bytes
        )

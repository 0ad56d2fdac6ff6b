"""Classification of inbound lines into intents."""

from typing import Union

from ..errors import MalformedMessage
from ..models.intent import InboundIntent
from .codec import decode_line


UPDATE_KEY = "update"
ID_KEY = "id"


def parse_message(raw: Union[str, bytes]) -> InboundIntent:
    """Parses one inbound line into an intent.

    A line without an ``update`` section is a valid no-op. An update
    section must be an object carrying a string ``id``; every other field
    of it becomes the patch.

    Args:
        raw: The inbound line.

    Returns:
        The classified intent. Parsing never raises.
    """
    try:
        document = decode_line(raw)
    except MalformedMessage as e:
        return InboundIntent.malformed(e.detail)

    if document is None:
        return InboundIntent.ignored()
    if not isinstance(document, dict):
        return InboundIntent.malformed("Message is not a JSON object")
    if UPDATE_KEY not in document:
        return InboundIntent.ignored()

    section = document[UPDATE_KEY]
    if not isinstance(section, dict):
        return InboundIntent.malformed("Update section is not an object")

    component_id = section.get(ID_KEY)
    if not isinstance(component_id, str):
        return InboundIntent.malformed("Update section has no string id")

    patch = {k: v for k, v in section.items() if k != ID_KEY}
    return InboundIntent.update(component_id, patch)

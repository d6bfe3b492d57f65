import json
import logging

from i3ipc import Event

logger = logging.getLogger(__name__)

# every name i3ipc can subscribe to, e.g. "window" or "window::focus"
EVENT_TYPES = frozenset(e.value for e in Event)


def is_event_type(name):
    return isinstance(name, str) and name.replace("-", "_") in EVENT_TYPES


def event_payload(event) -> bytes:
    """
    Serialize the raw IPC reply carried by `event` for a child process's stdin.

    Events without raw data (or with data that will not serialize) give an
    empty payload.
    """
    data = getattr(event, "ipc_data", None)
    if data is None:
        return b""
    try:
        return json.dumps(data).encode("utf-8")
    except (TypeError, ValueError) as e:
        logger.debug(f"event payload not forwarded: {e}")
        return b""

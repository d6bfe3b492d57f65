import os
import logging
import toml
from typing import *

from i3watch.errors import ConfigUnavailable, ConfigParseError, HandlerValidationError
from i3watch.event import is_event_type
from i3watch.handler import Handler

logger = logging.getLogger(__name__)

LOCAL_CONFIG_NAMES = ("i3watch.toml", ".i3watch.toml")


def user_config_file():
    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return os.path.join(config_home, "i3watch", "config.toml")


def config_search_path():
    return [*LOCAL_CONFIG_NAMES, user_config_file()]


def read_first(paths):
    """Return (data, path) for the first readable file in `paths`."""
    for path in paths:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            logger.debug(f"skipping config candidate {path}: {e}")
            continue
        return data, path
    raise ConfigUnavailable(paths)


def parse_events(doc) -> Dict[str, List[Handler]]:
    events = doc.get("events", {})
    if not isinstance(events, dict):
        raise ConfigParseError("'events' must be a table")

    parsed: Dict[str, List[Handler]] = {}
    for event_type, fragments in events.items():
        if not is_event_type(event_type):
            raise ConfigParseError(f"events.{event_type}: unknown i3 event type")
        if not isinstance(fragments, list):
            raise ConfigParseError(f"events.{event_type}: must be an array of handlers")

        handlers = []
        for i, fragment in enumerate(fragments):
            try:
                handlers.append(Handler.from_fragment(fragment))
            except HandlerValidationError:
                raise
            except ConfigParseError as e:
                raise ConfigParseError(f"events.{event_type}[{i}]: {e.msg}", e.cause or e) from e
        parsed[event_type] = handlers
    return parsed


class Config:
    def __init__(self, path, events: Dict[str, List[Handler]]):
        self.path = path
        self.events = events


    @classmethod
    def from_bytes(cls, data: bytes, path="<bytes>") -> "Config":
        try:
            doc = toml.loads(data.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise ConfigParseError(f"{path}: not valid UTF-8", e) from e
        except toml.TomlDecodeError as e:
            raise ConfigParseError(f"{path}: {e}", e) from e
        return cls(path, parse_events(doc))


    def listened(self):
        """(event_type, handlers) pairs that need a listener."""
        return [(t, handlers) for t, handlers in self.events.items() if handlers]


    def __repr__(self):
        return f"<Config {self.path}>"


def load_config(path=None) -> Config:
    paths = [path] if path is not None else config_search_path()
    data, found = read_first(paths)
    logger.debug(f"Loading config file {found}")
    return Config.from_bytes(data, found)

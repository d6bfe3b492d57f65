#!/usr/bin/env python3

import queue
import logging
from typing import *

import i3ipc

from i3watch.config import Config, load_config
from i3watch.errors import (
    WatchError,
    ConfigUnavailable,
    ConfigParseError,
    HandlerValidationError,
    IPCUnreachable,
    IPCStreamFault,
    Interrupted,
)
from i3watch.listener import Listener

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def get_version(connect=i3ipc.Connection):
    """Probe the window manager; this is also the check that it is running."""
    try:
        conn = connect()
        version = conn.get_version()
    except Exception as e:
        raise IPCUnreachable(e) from e
    disconnect(conn)
    return version


def disconnect(conn):
    # i3ipc.Connection has no public close for its command socket
    sock = getattr(conn, "_cmd_socket", None)
    if sock is not None:
        sock.close()


class Watcher:
    """
    Runs one listener per configured event type and waits for the first of
    an interrupt or a listener fault.

    Any fault ends the whole watcher: the connections share one window
    manager, so a broken stream is never retried or isolated.
    """

    def __init__(self, config: Config, connect=i3ipc.Connection):
        self.config = config
        self.connect = connect
        self.faults: "queue.Queue[IPCStreamFault]" = queue.Queue()
        self.listeners: List[Listener] = []


    def log_handlers(self):
        for event_type, handlers in self.config.events.items():
            logger.info(f"handlers: {event_type}")
            for handler in handlers:
                logger.info(f"  {handler.describe()}")
        logger.info("---")


    def start(self):
        for event_type, handlers in self.config.listened():
            listener = Listener(event_type, handlers, self.faults, connect=self.connect)
            self.listeners.append(listener)
            listener.start()
        logger.debug(f"===== {len(self.listeners)} listener(s) started =====")


    def wait(self, timeout=None) -> Optional[IPCStreamFault]:
        """
        Block until a listener fails or the process is interrupted.

        Returns the fault, or None after an interrupt. Raises queue.Empty if
        `timeout` runs out first.
        """
        try:
            return self.faults.get(timeout=timeout)
        except KeyboardInterrupt:
            logger.info("exit: SIGINT")
        except Interrupted as e:
            logger.info(f"exit: {e.signame}")
        return None


    def run(self) -> int:
        self.log_handlers()
        self.start()
        fault = self.wait()
        if fault is None:
            return 0
        logger.error(fault)
        return 1

import logging
import threading

import i3ipc

from i3watch.errors import IPCStreamFault

logger = logging.getLogger(__name__)


class StreamClosed(Exception):
    def __str__(self):
        return "event stream closed"


class Listener(threading.Thread):
    """
    Receives the events of one type on a connection of its own and hands each
    one to that type's handlers, in order.

    The thread never restarts: when the stream ends or breaks, the failure is
    posted to `faults` and the listener is done.
    """

    def __init__(self, event_type, handlers, faults, connect=i3ipc.Connection):
        super().__init__(name=f"listener-{event_type}", daemon=True)
        self.event_type = event_type
        self.handlers = handlers
        self.faults = faults
        self.connect = connect


    def run(self):
        try:
            conn = self.connect()
            conn.on(self.event_type, self.on_event)
            logger.debug(f"{self.event_type}: subscribed")
            conn.main()
            cause = StreamClosed()
        except Exception as e:
            cause = e
        self.faults.put(IPCStreamFault(self.event_type, cause))


    def on_event(self, conn, event):
        self.dispatch(event)


    def dispatch(self, event):
        logger.debug(f"{self.event_type}: got event")
        for handler in self.handlers:
            try:
                handler.run(self.event_type, event)
            except Exception:
                logger.exception(f"{self.event_type}: {handler.describe()} failed")

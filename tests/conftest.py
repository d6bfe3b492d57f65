"""
Shared fakes for the i3 IPC collaborator.
"""

import threading
from types import SimpleNamespace

import pytest


class FakeSocket:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConnection:
    """Stands in for i3ipc.Connection; behaviour is scripted per event type."""

    def __init__(self, ipc):
        self.ipc = ipc
        self.subscriptions = []
        self._cmd_socket = FakeSocket()

    def get_version(self):
        return SimpleNamespace(human_readable=self.ipc.version)

    def on(self, event_type, handler):
        self.subscriptions.append((event_type, handler))

    def main(self):
        for event_type, handler in self.subscriptions:
            for event in self.ipc.events.get(event_type, []):
                handler(self, event)
            self.ipc.delivered[event_type].set()
            if event_type in self.ipc.errors:
                raise self.ipc.errors[event_type]
            if event_type in self.ipc.idle:
                self.ipc.release.wait()


class FakeIPC:
    """
    Connection factory.

    events: event type -> events delivered once subscribed
    errors: event type -> exception raised after delivery
    idle: event types whose stream stays open until `release` is set;
    any other stream closes after delivery.
    """

    def __init__(self, events=None, errors=None, idle=(), version="4.23 (2023-10-29)"):
        self.events = events or {}
        self.errors = errors or {}
        self.idle = set(idle)
        self.version = version
        self.release = threading.Event()
        self.delivered = _EventMap()
        self.connections = []

    def __call__(self):
        conn = FakeConnection(self)
        self.connections.append(conn)
        return conn


class _EventMap(dict):
    def __missing__(self, key):
        return self.setdefault(key, threading.Event())


@pytest.fixture
def make_ipc():
    made = []

    def make(**kwargs):
        ipc = FakeIPC(**kwargs)
        made.append(ipc)
        return ipc

    yield make
    for ipc in made:
        ipc.release.set()


class Recorder:
    """A runner-shaped handler that records calls into a shared list."""

    def __init__(self, name, calls, fail=False):
        self.name = name
        self.calls = calls
        self.fail = fail

    def run(self, event_type, event):
        self.calls.append((self.name, event_type, event))
        if self.fail:
            raise RuntimeError(f"{self.name} failed")

    def describe(self):
        return f"Recorder {self.name}"


@pytest.fixture
def calls():
    return []


@pytest.fixture
def recorder(calls):
    def make(name, fail=False):
        return Recorder(name, calls, fail=fail)

    return make

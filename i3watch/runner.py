import abc
import os
import stat
import logging
import subprocess
from dataclasses import dataclass

from i3watch.errors import ConfigParseError, NotADirectory, PathUnavailable
from i3watch.event import event_payload

logger = logging.getLogger(__name__)

EVENT_ENV = "I3WATCH_EVENT"


def _string_field(fragment, key):
    value = fragment[key]
    if not isinstance(value, str):
        raise ConfigParseError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _spawn(event_type, args, event, shell=False):
    """Run one child to completion. Failures are reported, never raised."""
    env = dict(os.environ)
    env[EVENT_ENV] = event_type
    try:
        proc = subprocess.run(args, shell=shell, input=event_payload(event), env=env)
    except OSError as e:
        logger.info(f"{event_type}: failed to start {args}: {e}")
        return
    if proc.returncode != 0:
        logger.info(f"{event_type}: {args} exited with status {proc.returncode}")


class Runner(metaclass=abc.ABCMeta):
    @classmethod
    @abc.abstractmethod
    def decode(cls, fragment: dict) -> "Runner":
        pass

    @abc.abstractmethod
    def execute(self, event_type: str, event):
        pass

    @abc.abstractmethod
    def validate(self):
        pass

    @abc.abstractmethod
    def describe(self) -> str:
        pass


@dataclass(frozen=True)
class CommandRunner(Runner):
    command: str

    @classmethod
    def decode(cls, fragment):
        return cls(_string_field(fragment, "cmd"))


    def execute(self, event_type, event):
        logger.info(f"{event_type}: run command: {self.command}")
        if not self.command.strip():
            return
        _spawn(event_type, self.command, event, shell=True)


    def validate(self):
        pass


    def describe(self):
        return f'CommandRunner "{self.command}"'


@dataclass(frozen=True)
class DirectoryRunner(Runner):
    path: str

    @classmethod
    def decode(cls, fragment):
        return cls(os.path.expanduser(_string_field(fragment, "dir")))


    def scripts(self):
        """Executable regular files directly under `path`, in name order."""
        found = []
        for name in sorted(os.listdir(self.path)):
            script = os.path.join(self.path, name)
            if os.path.isfile(script) and os.access(script, os.X_OK):
                found.append(script)
        return found


    def execute(self, event_type, event):
        logger.info(f"{event_type}: run scripts in: {self.path}")
        try:
            scripts = self.scripts()
        except OSError as e:
            logger.info(f"{event_type}: cannot list {self.path}: {e}")
            return
        for script in scripts:
            logger.debug(f"{event_type}: running {script}")
            _spawn(event_type, [script], event)


    def validate(self):
        try:
            st = os.stat(self.path)
        except (OSError, ValueError) as e:
            raise PathUnavailable(self.path, e) from e
        if not stat.S_ISDIR(st.st_mode):
            raise NotADirectory(self.path)


    def describe(self):
        return f'DirectoryRunner "{self.path}"'

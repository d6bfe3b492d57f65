from typing import *

from i3watch.errors import ConfigParseError
from i3watch.runner import Runner, CommandRunner, DirectoryRunner

# Checked in order: the first key present picks the runner, so a fragment
# carrying both 'cmd' and 'dir' becomes a CommandRunner.
RUNNER_PRECEDENCE: Tuple[Tuple[str, Type[Runner]], ...] = (
    ("cmd", CommandRunner),
    ("dir", DirectoryRunner),
)


class Handler:
    EMPTY_DESCRIPTION = "EmptyHandler"

    __slots__ = ("_runner",)

    def __init__(self, runner: Optional[Runner] = None):
        self._runner = runner


    @classmethod
    def from_fragment(cls, fragment) -> "Handler":
        """
        Decode one handler table from the config.

        A decode or validation failure of the selected runner is raised as is;
        a fragment with no recognised key gives an empty handler.
        """
        if not isinstance(fragment, dict):
            raise ConfigParseError(
                f"handler must be a table, got {type(fragment).__name__}"
            )
        for key, runner_cls in RUNNER_PRECEDENCE:
            if key in fragment:
                runner = runner_cls.decode(fragment)
                runner.validate()
                return cls(runner)
        return cls()


    @property
    def runner(self) -> Optional[Runner]:
        return self._runner


    def is_empty(self) -> bool:
        return self._runner is None


    def run(self, event_type, event):
        if not self.is_empty():
            self._runner.execute(event_type, event)


    def check(self):
        if not self.is_empty():
            self._runner.validate()


    def describe(self) -> str:
        if self.is_empty():
            return self.EMPTY_DESCRIPTION
        return self._runner.describe()


    def __repr__(self):
        return f"Handler({self._runner!r})"

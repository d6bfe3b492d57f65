class WatchError(Exception):
    """Base class for every fatal condition i3watch reports."""


class ConfigUnavailable(WatchError):
    def __init__(self, searched):
        self.searched = list(searched)


    def __str__(self):
        return f"no config file found (searched: {', '.join(self.searched)})"


    def __repr__(self):
        return f"ConfigUnavailable(searched={self.searched})"


class ConfigParseError(WatchError):
    def __init__(self, msg, cause=None):
        self.msg = msg
        self.cause = cause


    def __str__(self):
        return self.msg


    def __repr__(self):
        return f"{type(self).__name__}(msg={self.msg!r}, cause={self.cause!r})"


class HandlerValidationError(ConfigParseError):
    """A configured runner fails its static precondition."""


class NotADirectory(HandlerValidationError):
    def __init__(self, path):
        super().__init__(f"not a directory: {path}")
        self.path = path


class PathUnavailable(HandlerValidationError):
    def __init__(self, path, cause):
        reason = getattr(cause, "strerror", None) or cause
        super().__init__(f"cannot access {path}: {reason}", cause)
        self.path = path


class IPCUnreachable(WatchError):
    def __init__(self, cause):
        self.cause = cause


    def __str__(self):
        return f"cannot reach the window manager: {self.cause}"


    def __repr__(self):
        return f"IPCUnreachable(cause={self.cause!r})"


class IPCStreamFault(WatchError):
    def __init__(self, event_type, cause):
        self.event_type = event_type
        self.cause = cause


    def __str__(self):
        return f"i3 error on {self.event_type} subscription: {self.cause}"


    def __repr__(self):
        return f"IPCStreamFault(event_type={self.event_type!r}, cause={self.cause!r})"


class Interrupted(WatchError):
    def __init__(self, signame):
        self.signame = signame


    def __str__(self):
        return self.signame

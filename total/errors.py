"""Exceptions raised by the Total stores and listener."""


class TotalError(Exception):
    pass


class MalformedPersistedData(TotalError):
    """A persisted JSON file could not be decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidFormat(TotalError):
    """A friend spec is not of the form ``username@ip:port``."""

    def __init__(self, spec: str):
        super().__init__(f"Invalid format: {spec!r}. Use username@ip:port")
        self.spec = spec


class ListenerBindFailure(TotalError):
    def __init__(self, port: int, cause: OSError):
        super().__init__(f"Error starting TCP server on port {port}: {cause}")
        self.port = port
        self.cause = cause

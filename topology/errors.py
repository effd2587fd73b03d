"""Exceptions raised by topology operations."""


class TopologyError(Exception):
    """Base class for topology errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CacheGroupNotFoundError(TopologyError, LookupError):
    """A topology node names a cache group that the catalog does not know."""

    def __init__(self, cachegroup: str):
        super().__init__(
            f"Cache group not found: {cachegroup}",
            {"cachegroup": cachegroup},
        )
        self.cachegroup = cachegroup


class MalformedTopologyError(TopologyError, ValueError):
    """Persisted topology data breaks the node/parent rules."""

    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message, {"problems": problems or [message]})
        self.problems = problems or [message]


class RejectedEdit(TopologyError):
    """An edit was refused; the tree has not been changed."""
    pass


class TopologyClientError(TopologyError):
    """Exception raised when talking to the topology server fails."""
    pass

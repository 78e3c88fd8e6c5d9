"""Error taxonomy shared by the storage gateway, repository and session."""


class FileKeeperError(Exception):
    """Base class for every error raised by filekeeper."""


class InvalidInput(FileKeeperError):
    """Request rejected by validation before it reached the store."""


class NotFound(FileKeeperError):
    """A referenced file name or folder id does not exist."""


class NameCollision(FileKeeperError):
    """A file rename targets a name that is already in use."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A file named {name!r} already exists")


class StorageFailure(FileKeeperError):
    """The embedded store failed while executing an operation."""

    def __init__(self, operation: str, collection: str) -> None:
        self.operation = operation
        self.collection = collection
        super().__init__(f"Storage {operation} on {collection!r} failed")

"""flagmirror exception types."""

from __future__ import annotations


class FlagMirrorErrorCodes:
    """FlagMirrorError code constants."""

    NOT_FOUND: str = "NOT_FOUND"
    ALREADY_EXISTS: str = "ALREADY_EXISTS"
    REMOTE_FETCH_ERROR: str = "REMOTE_FETCH_ERROR"
    STORE_ERROR: str = "STORE_ERROR"
    UPDATE_CONFLICT: str = "UPDATE_CONFLICT"
    CONFIG_ERROR: str = "CONFIG_ERROR"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
    INTERNAL: str = "INTERNAL_ERROR"


class FlagMirrorError(Exception):
    """Base class for flagmirror errors.

    Subclasses identify the error kind. ``wrap`` adds context to the message
    while keeping the kind, so callers can still catch e.g. ``NotFoundError``
    after an operation has wrapped it.
    """

    code: str = FlagMirrorErrorCodes.INTERNAL

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def wrap(self, context: str) -> FlagMirrorError:
        """Return a new error of the same kind with ``context`` prefixed."""
        # Subclass constructors differ, so copy attributes and re-init the base.
        wrapped = self.__class__.__new__(self.__class__)
        wrapped.__dict__.update(self.__dict__)
        FlagMirrorError.__init__(
            wrapped, f"{context}: {self.message}", cause=self, code=self.code
        )
        return wrapped


class NotFoundError(FlagMirrorError):
    """Referenced project or override does not exist."""

    code = FlagMirrorErrorCodes.NOT_FOUND

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


class AlreadyExistsError(FlagMirrorError):
    """Insert collided with an existing key."""

    code = FlagMirrorErrorCodes.ALREADY_EXISTS

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} already exists: {key}")


class RemoteFetchError(FlagMirrorError):
    """A management API or evaluation SDK call failed."""

    code = FlagMirrorErrorCodes.REMOTE_FETCH_ERROR

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class StoreError(FlagMirrorError):
    """A persistence operation failed."""

    code = FlagMirrorErrorCodes.STORE_ERROR


class UpdateConflictError(FlagMirrorError):
    """The store changed no rows on an update. Callers may retry."""

    code = FlagMirrorErrorCodes.UPDATE_CONFLICT

    def __init__(self, project_key: str) -> None:
        self.project_key = project_key
        super().__init__(f"Project not updated: {project_key}")


class ConfigError(FlagMirrorError):
    """Configuration could not be read, parsed or validated."""

    code = FlagMirrorErrorCodes.CONFIG_ERROR


def as_store_error(err: Exception, context: str) -> FlagMirrorError:
    """Wrap a store failure, keeping the kind of flagmirror errors."""
    if isinstance(err, FlagMirrorError):
        return err.wrap(context)
    return StoreError(f"{context}: {err}", cause=err)


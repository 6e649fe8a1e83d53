"""Custom exception hierarchy for split-stream.

Every error that crosses a layer boundary inherits from
:class:`SplitStreamError`.  Raw third-party exceptions (yt-dlp, file
I/O in sinks) are caught in the infrastructure layer and re-raised as a
typed subclass defined here.

Hierarchy
---------
SplitStreamError
├── InvalidSourceError
├── DuplicateVideoError
├── CapacityExceededError
├── StreamNotFoundError
├── AuthRequiredError
├── AlreadyExistsError
├── FavoriteSaveError
├── SessionClosedError
├── MetadataLookupError
├── SinkFailureError
├── EnvironmentError
└── ConfigurationError

:class:`SinkFailureError` is the only member never surfaced to the
user: analytics delivery is best-effort and failures are logged.
"""

from __future__ import annotations


class SplitStreamError(Exception):
    """Base exception for all split-stream errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Stream composition ----------------------------------------------------

class InvalidSourceError(SplitStreamError):
    """Raised when a URL does not resolve to a video identifier."""


class DuplicateVideoError(SplitStreamError):
    """Raised when the video is already present in the collection."""


class CapacityExceededError(SplitStreamError):
    """Raised when the collection already holds ``capacity`` streams."""


class StreamNotFoundError(SplitStreamError):
    """Raised when no stream matches the given handle."""


# --- Identity / favorites --------------------------------------------------

class AuthRequiredError(SplitStreamError):
    """Raised when an action needs a signed-in actor and none is present."""


class AlreadyExistsError(SplitStreamError):
    """Raised when the video is already in the actor's favorites."""


class FavoriteSaveError(SplitStreamError):
    """Raised when the favorites store fails for any other reason."""


# --- Session lifecycle -----------------------------------------------------

class SessionClosedError(SplitStreamError):
    """Raised when a closed session receives a command."""


# --- External collaborators ------------------------------------------------

class MetadataLookupError(SplitStreamError):
    """Raised when a video title cannot be resolved."""


class SinkFailureError(SplitStreamError):
    """Raised by a record sink that could not persist a record."""


class EnvironmentError(SplitStreamError):
    """Raised when a required runtime dependency is not available."""


class ConfigurationError(SplitStreamError):
    """Raised when settings from the environment fail validation."""

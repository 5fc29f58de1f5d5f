"""Error types raised by the Labeleer CLI."""


class LabeleerError(Exception):
    """Base class for expected, user-reportable failures."""


class InvalidLocaleError(LabeleerError, ValueError):
    """Raised when a string cannot be classified as a locale."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid locale format: {raw!r}")
        self.raw = raw


class MalformedLabelFileError(LabeleerError):
    """Raised when a local label file is not valid JSON of the expected shape."""


class UnresolvedFormatError(LabeleerError):
    """Raised when no label file format could be inferred or selected."""


class UnsupportedPublishFormatError(LabeleerError):
    """Raised when publishing a label file whose format cannot be synchronized."""


class RemoteRequestFailed(LabeleerError):
    """Raised when the Labeleer API answers with a non-2xx status or is unreachable."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        reason: str = "",
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class ResolutionCancelled(LabeleerError):
    """Raised when project resolution ends without a usable configuration.

    This is a graceful outcome (the user declined or supplied nothing),
    reported with exit status 0.
    """


class InvalidProjectSetupError(LabeleerError):
    """Raised when ``labeleer.json`` is invalid or cannot be created."""

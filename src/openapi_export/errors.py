"""Exceptions raised by openapi-export."""


class ExportError(Exception):
    """Base class for all openapi-export errors."""


class CaptureFormatError(ExportError):
    """A capture file could not be read or does not match its format."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class UnparseableUrlError(ExportError):
    """A base URL has no recognisable host."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Cannot parse origin from URL: {url!r}")


class ParamNotReplaceableError(ExportError):
    """The literal path segment for a parameter is not in the path."""


class ConverterStateError(ExportError):
    """The aggregator was used out of order."""

"""
Exceptions raised by pedmeta.

Only failures that abort an operation are exceptions. A subject that is
invalid or a model that is unknown is reported through
:class:`pedmeta.matcher.MatchStatus` instead.
"""


class PedMetaError(Exception):
    """Base class for all pedmeta errors."""
    pass


class SourceNotFoundError(PedMetaError, FileNotFoundError):
    """A configured metadata source directory does not exist.

    Aborts the whole rule store build, not just the one source.
    """

    def __init__(self, path):
        self.path = path
        super().__init__(
            f"The metadata source directory {path} does not exist on the filesystem."
        )


class MetadataFileError(PedMetaError):
    """A metadata file could not be read or parsed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read metadata file {path}: {reason}")


class MalformedRecordError(PedMetaError, ValueError):
    """A single model record is structurally invalid and was skipped."""
    pass

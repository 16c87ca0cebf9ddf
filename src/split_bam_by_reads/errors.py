"""Exception hierarchy for BAM splitting.

Every exception takes a single message argument so it can be pickled back
from process-pool workers.
"""


class SplitBamError(Exception):
    """Base class for fatal errors that abort a split run."""


class SourceUnreadable(SplitBamError):
    """A read-name list or the input BAM could not be opened or read."""


class DecodeError(SplitBamError):
    """A record could not be decoded from the input BAM."""


class WriteFailure(SplitBamError):
    """An output BAM could not be created or written."""

class AutarkyFlowError(Exception):
    """Base class for errors raised by autarkyflow."""


class EmptyInputError(AutarkyFlowError, ValueError):
    """Raised when strict totals are requested over zero monthly summaries."""


class IngestError(AutarkyFlowError):
    """Raised when an uploaded CSV file cannot be decoded."""

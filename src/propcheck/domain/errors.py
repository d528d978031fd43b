"""Exception hierarchy for propcheck.

Only contract violations and configuration problems raise. Validation
outcomes are ordinary booleans or :class:`ServiceResult` payloads.
"""

from __future__ import annotations


class PropcheckError(Exception):
    """Base class for all propcheck errors."""


class PropertyNameError(PropcheckError, ValueError):
    """A required property name was None, empty, or whitespace."""


class TargetImportError(PropcheckError, LookupError):
    """A ``module:Class`` target could not be imported or resolved."""


class BatchSizeExceededError(PropcheckError, ValueError):
    """A batch of identifiers exceeded the configured maximum size."""

    def __init__(self, kind: str, size: int, limit: int) -> None:
        super().__init__(f"{kind} batch of {size} exceeds maximum of {limit}")
        self.kind = kind
        self.size = size
        self.limit = limit

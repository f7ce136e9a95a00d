"""Error taxonomy for the comparison service.

Every variant collapses to the same ``{"error": "<message>"}`` envelope on the
wire; ``render`` decides what message each variant contributes.
"""

from __future__ import annotations


class ComparisonError(Exception):
    """Base class for failures that abort a comparison request."""

    kind = "comparison"

    def render(self) -> str:
        return str(self) or "Unknown error"


class ValidationError(ComparisonError):
    """Missing or malformed player identifiers."""

    kind = "validation"


class NotFoundError(ComparisonError):
    """The lookup did not return exactly two players."""

    kind = "not_found"


class StoreError(ComparisonError):
    """Connectivity or query failure in the backing store."""

    kind = "store"

    def render(self) -> str:
        cause = self.__cause__
        if cause is not None and str(cause):
            return str(cause)
        return super().render()


__all__ = ["ComparisonError", "ValidationError", "NotFoundError", "StoreError"]

"""Error taxonomy for Guna Milan scoring.

Every error is deterministic for a given input, so none of them is retried.
``status_code`` is the HTTP status the API layer renders for the error.
"""
from __future__ import annotations

from typing import Any, Optional


class GunaMilanError(Exception):
    code = "GUNA_MILAN_ERROR"
    status_code = 500

    def __init__(self, message: str, *, field: Optional[str] = None, value: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class MissingChartData(GunaMilanError):
    """A chart, or one of its required fields, could not be resolved."""

    code = "MISSING_CHART_DATA"
    status_code = 404

    def __init__(self, message: str, *, profile_id: Optional[str] = None, field: Optional[str] = None) -> None:
        super().__init__(message, field=field)
        self.profile_id = profile_id


class InvalidAttribute(GunaMilanError):
    """An attribute value lies outside its closed set (upstream data defect)."""

    code = "INVALID_ATTRIBUTE"
    status_code = 500


class SelfComparison(GunaMilanError):
    """Both identifiers refer to the same profile."""

    code = "SELF_COMPARISON"
    status_code = 400

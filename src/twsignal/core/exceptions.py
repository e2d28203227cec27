"""Exception classes raised by the analysis engine and its collaborators."""

from typing import Any, Dict, Optional


class TwSignalError(Exception):
    """Base exception for twsignal."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InsufficientDataError(TwSignalError):
    """Series too short (or empty after filtering) to compute every indicator."""

    def __init__(self, code: str, available: int, required: int):
        super().__init__(
            message=(
                f"Insufficient price history for {code}: "
                f"{available} valid points, {required} required"
            ),
            details={"code": code, "available": available, "required": required},
        )
        self.code = code
        self.available = available
        self.required = required


class SourceUnavailableError(TwSignalError):
    """The price source could not produce a series after all retries."""

    def __init__(self, code: str, attempts: int, last_error: Optional[str] = None):
        message = f"No price data available for {code} after {attempts} attempts"
        if last_error:
            message = f"{message}: {last_error}"
        super().__init__(
            message=message,
            details={"code": code, "attempts": attempts, "last_error": last_error},
        )
        self.code = code
        self.attempts = attempts
        self.last_error = last_error


class ComputationError(TwSignalError):
    """Input violated an engine contract (mismatched lengths, bad values)."""


class UnknownSectorError(TwSignalError):
    """Requested sector is not in the catalogue."""

    def __init__(self, sector_id: str):
        super().__init__(
            message=f"Sector '{sector_id}' not found",
            details={"sector_id": sector_id},
        )
        self.sector_id = sector_id

"""Request models for the twsignal API."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

MAX_BATCH_CODES = 200


def _validate_codes(codes: List[str]) -> List[str]:
    cleaned = []
    for code in codes:
        code = code.strip().upper()
        if not code.isalnum():
            raise ValueError(f"Invalid stock code: {code!r}")
        cleaned.append(code)
    return cleaned


class BatchAnalysisRequest(BaseModel):
    """Request model for analysing several stock codes."""

    codes: List[str] = Field(
        ...,
        description="Taiwan stock codes (e.g., 2330, 2454)",
        min_length=1,
        max_length=MAX_BATCH_CODES,
    )

    @field_validator("codes")
    @classmethod
    def validate_codes(cls, v):
        """Validate stock code format."""
        return _validate_codes(v)


class ScanRequest(BaseModel):
    """Request model for a score scan."""

    codes: Optional[List[str]] = Field(
        None, description="Codes to scan; defaults to every listed and OTC stock"
    )
    min_score: Optional[int] = Field(
        None, ge=0, le=20, description="Minimum score to keep"
    )

    @field_validator("codes")
    @classmethod
    def validate_codes(cls, v):
        """Validate stock code format."""
        if v is None:
            return v
        return _validate_codes(v)

"""API request and response models."""

from .requests import BatchAnalysisRequest, ScanRequest
from .responses import (
    ErrorResponse,
    HealthResponse,
    HealthStatus,
    MessageResponse,
    StatusResponse,
    SuccessResponse,
)

__all__ = [
    "BatchAnalysisRequest",
    "ScanRequest",
    "ErrorResponse",
    "HealthResponse",
    "HealthStatus",
    "MessageResponse",
    "StatusResponse",
    "SuccessResponse",
]

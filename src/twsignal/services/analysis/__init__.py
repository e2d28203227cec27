"""Analysis service module."""

from .models import BatchOutcome, ProgressCallback, SectorInfo
from .sectors import SECTORS, get_sector, list_sectors
from .service import AnalysisService

__all__ = [
    "AnalysisService",
    "BatchOutcome",
    "ProgressCallback",
    "SectorInfo",
    "SECTORS",
    "get_sector",
    "list_sectors",
]

"""Data models for the analysis service."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from ...core.models import AnalysisRecord

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class SectorInfo:
    """A named watchlist of stock codes."""

    id: str
    name: str
    codes: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "codes": list(self.codes)}


@dataclass
class BatchOutcome:
    """Result of analysing several codes in one pass."""

    total: int
    records: List[AnalysisRecord] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)  # code -> error message
    completed: int = 0  # attempted codes, successful or not
    aborted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "completed": self.completed,
            "aborted": self.aborted,
            "records": [record.to_dict() for record in self.records],
            "failures": dict(self.failures),
        }

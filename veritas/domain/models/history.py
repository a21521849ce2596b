"""Domain model for saved fact-check reports."""

import time
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .fact_check_result import FactCheckResult


class HistoryItem(BaseModel):
    """A fact-check result saved together with the text that produced it."""

    id: str = Field(..., description="Opaque identifier derived from the creation time")
    timestamp: int = Field(..., description="Creation time in epoch milliseconds")
    input: str = Field(..., description="The checked text")
    result: FactCheckResult = Field(..., description="The report produced for the text")

    class Config:
        """Pydantic model configuration."""
        frozen = True

    @classmethod
    def create(cls, text: str, result: FactCheckResult, now_ms: Optional[int] = None) -> "HistoryItem":
        """Create a history item stamped with the current time."""
        timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
        return cls(id=str(timestamp), timestamp=timestamp, input=text, result=result)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the item to its JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def prepend_capped(items: List[HistoryItem], item: HistoryItem, max_items: int) -> List[HistoryItem]:
    """Put an item at the front of a newest-first history and drop what exceeds the cap."""
    if max_items < 1:
        raise ValueError("History cap must be at least 1")
    return [item, *items][:max_items]

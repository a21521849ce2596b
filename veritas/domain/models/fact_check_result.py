"""Domain model for fact checking results."""

import math
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .claim import ClaimResult
from .source import Source


class FactCheckResult(BaseModel):
    """Structured verdict report produced by one fact check."""

    summary: str = Field(..., description="Overall synthesis of the evidence")
    confidence_score: int = Field(..., description="Overall confidence, nominally 0-100 (not clamped)")
    sources: List[Source] = Field(default_factory=list, description="Model sources followed by grounding-only sources")
    claims: List[ClaimResult] = Field(default_factory=list, description="Claims found in the input")

    class Config:
        """Pydantic model configuration."""
        frozen = True
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("confidence_score", mode="before")
    @classmethod
    def _round_score(cls, value):
        # Models occasionally answer 87.5 for an integer field
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError("Confidence score must be a finite number")
            return round(value)
        return value

    def sources_for(self, claim: ClaimResult) -> List[Source]:
        """Get the sources cited by a claim, skipping indices that point nowhere."""
        return [
            self.sources[index]
            for index in claim.source_indices
            if 0 <= index < len(self.sources)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert FactCheckResult to its camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

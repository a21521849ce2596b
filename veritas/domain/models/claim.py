"""Domain model for claims extracted from checked text."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class Verdict(str, Enum):
    """Possible verification outcomes for a single claim."""

    VERIFIED = "verified"  # Supported by the evidence found
    REFUTED = "refuted"  # Contradicted by the evidence found
    UNCLEAR = "unclear"  # Evidence is missing or inconclusive
    PARTIALLY_TRUE = "partially_true"  # Some aspects hold, others do not


class EvidenceStrength(str, Enum):
    """Coarse support level attached to a claim."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ClaimResult(BaseModel):
    """A factual assertion found in the input, with its verdict."""

    text: str = Field(..., description="The claim as extracted from the input")
    verdict: Verdict = Field(..., description="Verification outcome")
    reasoning: str = Field(..., description="Neutral explanation of the verdict")
    source_indices: List[int] = Field(
        default_factory=list,
        description="Positions in the result's source list; advisory, may be out of range",
    )
    evidence_strength: EvidenceStrength = Field(..., description="How well the evidence supports the verdict")

    class Config:
        """Pydantic model configuration."""
        frozen = True
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "text": "The Earth is approximately 4.54 billion years old.",
                "verdict": "verified",
                "reasoning": "Radiometric dating of meteorites consistently yields this age.",
                "sourceIndices": [0, 2],
                "evidenceStrength": "high",
            }
        }

    @field_validator("verdict", "evidence_strength", mode="before")
    @classmethod
    def _normalize_label(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("source_indices")
    @classmethod
    def _unique_indices(cls, value: List[int]) -> List[int]:
        # Ordered set: keep the first occurrence of each index
        return list(dict.fromkeys(value))

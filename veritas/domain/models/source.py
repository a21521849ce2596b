"""Domain model for cited sources."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class SourceCategory(str, Enum):
    """Kinds of publishers a source can come from."""

    NEWS = "news"
    GOVERNMENT = "government"
    ACADEMIC = "academic"
    NGO = "ngo"
    OTHER = "other"


class Source(BaseModel):
    """A reference cited by a fact-check result."""

    title: str = Field(..., description="Title of the referenced page")
    uri: str = Field(..., description="Location of the source, unique per result (case-insensitive)")
    snippet: Optional[str] = Field(None, description="Relevant excerpt from the source")
    publisher: Optional[str] = Field(None, description="Publishing organisation")
    published_date: Optional[str] = Field(None, description="Free-form publication date")
    category: SourceCategory = Field(SourceCategory.OTHER, description="Publisher category")

    class Config:
        """Pydantic model configuration."""
        frozen = True
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "title": "Global Temperature Record",
                "uri": "https://climate.nasa.gov/vital-signs/global-temperature/",
                "publisher": "NASA",
                "publishedDate": "2024-01-12",
                "category": "government",
            }
        }

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value):
        if value is None:
            return SourceCategory.OTHER
        return value.lower() if isinstance(value, str) else value

    @property
    def uri_key(self) -> str:
        """Key used to compare sources for duplicates."""
        return self.uri.lower()

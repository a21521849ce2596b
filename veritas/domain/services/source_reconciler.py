"""Merging model-declared sources with search-grounding references."""

import logging
from typing import Dict, Iterable, List

from ..models.fact_check_result import FactCheckResult
from ..models.source import Source, SourceCategory
from ..ports.ai_provider import GroundingChunk

logger = logging.getLogger(__name__)

GROUNDING_TITLE_FALLBACK = "External Evidence"
GROUNDING_SNIPPET = "Verified via Google Search grounding."


def grounding_sources(chunks: Iterable[GroundingChunk]) -> List[Source]:
    """Convert grounding references into sources, skipping ones without a URI."""
    sources = []
    for chunk in chunks:
        uri = (chunk.uri or "").strip()
        if not uri:
            continue
        sources.append(
            Source(
                title=(chunk.title or "").strip() or GROUNDING_TITLE_FALLBACK,
                uri=uri,
                snippet=GROUNDING_SNIPPET,
                category=SourceCategory.OTHER,
            )
        )
    return sources


def reconcile_sources(result: FactCheckResult, extra_sources: Iterable[Source]) -> FactCheckResult:
    """Append sources the model did not cite, without duplicating any URI.

    URIs compare case-insensitively. The model's sources keep their order and
    come first; new ones follow in the order given. When the model listed the
    same URI twice, the later copies are dropped and claim indices are moved
    to the surviving entry.

    Args:
        result: Parsed model result
        extra_sources: Sources obtained out of band (search grounding)

    Returns:
        A new FactCheckResult; the input is left untouched
    """
    merged: List[Source] = []
    position_by_uri: Dict[str, int] = {}
    index_map: Dict[int, int] = {}

    for old_index, source in enumerate(result.sources):
        if source.uri_key not in position_by_uri:
            position_by_uri[source.uri_key] = len(merged)
            merged.append(source)
        index_map[old_index] = position_by_uri[source.uri_key]

    model_count = len(merged)
    for source in extra_sources:
        if source.uri_key not in position_by_uri:
            position_by_uri[source.uri_key] = len(merged)
            merged.append(source)

    claims = result.claims
    if model_count != len(result.sources):
        logger.info(f"🔗 Collapsed {len(result.sources) - model_count} duplicate model source(s)")
        claims = [
            claim.model_copy(update={
                "source_indices": list(dict.fromkeys(
                    index_map.get(index, index) for index in claim.source_indices
                ))
            })
            for claim in result.claims
        ]

    added = len(merged) - model_count
    if added:
        logger.info(f"📚 Added {added} grounding source(s) to {model_count} model source(s)")

    return result.model_copy(update={"sources": merged, "claims": claims})

"""Citation strings and plain-text reports for fact-check results."""

from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from ..models.fact_check_result import FactCheckResult
from ..models.source import Source

UNKNOWN_PUBLISHER = "Unknown Publisher"
NO_DATE = "n.d."


class CitationFormat(str, Enum):
    """Supported bibliography styles."""

    APA = "apa"
    MLA = "mla"
    MARKDOWN = "markdown"
    PLAIN = "plain"


def format_citation(source: Source, index: int, fmt: CitationFormat = CitationFormat.PLAIN) -> str:
    """Format one source as a numbered citation.

    Args:
        source: Source to cite
        index: Zero-based position in the result's source list
        fmt: Citation style

    Returns:
        Citation numbered from 1
    """
    number = index + 1
    publisher = source.publisher or UNKNOWN_PUBLISHER
    date = source.published_date or NO_DATE

    if fmt == CitationFormat.APA:
        return f"({number}) {publisher}. ({date}). {source.title}. Retrieved from {source.uri}"
    if fmt == CitationFormat.MLA:
        return f'({number}) "{source.title}." {publisher}, {date}, {source.uri}.'
    if fmt == CitationFormat.MARKDOWN:
        return f"[{number}] [{source.title}]({source.uri}) - {publisher} ({date})"
    return f"[{number}] {source.title}. {publisher} ({date}). {source.uri}"


def format_all(sources: Iterable[Source], fmt: CitationFormat = CitationFormat.PLAIN) -> str:
    """Format every source, one citation per line."""
    return "\n".join(format_citation(source, i, fmt) for i, source in enumerate(sources))


def build_report(result: FactCheckResult, generated_at: Optional[datetime] = None) -> str:
    """Render the full plain-text intelligence report."""
    generated_at = generated_at or datetime.now()
    claims = "\n\n".join(
        f"- CLAIM: {claim.text}\n"
        f"  VERDICT: {claim.verdict.value.upper()}\n"
        f"  REASONING: {claim.reasoning}"
        for claim in result.claims
    )
    sources = "\n".join(f"[{i + 1}] {source.title} ({source.uri})" for i, source in enumerate(result.sources))

    return (
        "VERITAS INTELLECT REPORT\n"
        f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}\n"
        f"Confidence: {result.confidence_score}%\n"
        "\n"
        "SUMMARY:\n"
        f"{result.summary}\n"
        "\n"
        "CLAIMS ANALYSIS:\n"
        f"{claims}\n"
        "\n"
        "SOURCES:\n"
        f"{sources}\n"
    )

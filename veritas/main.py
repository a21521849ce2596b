"""Main script for running Veritas from a terminal."""

import asyncio
import logging
import os
from datetime import datetime

from dotenv import load_dotenv

from .domain.errors import FactCheckError, QUOTA_CATEGORY
from .domain.models.fact_check_result import FactCheckResult
from .domain.services.citation_service import format_all
from .domain.services.fact_checking_service import FactCheckingService
from .domain.services.history_service import DEFAULT_HISTORY_LIMIT, HistoryService
from .infrastructure.ai.gemini_adapter import GeminiAdapter, GeminiConfig
from .infrastructure.dependencies import DEFAULT_HISTORY_PATH
from .infrastructure.storage.json_file_store import JsonFileKeyValueStore


def print_result(result: FactCheckResult) -> None:
    """Print a report the way the web page lays it out."""
    print(f"\nEvidence score: {result.confidence_score}%")
    print(f"\nSummary: {result.summary}")

    print("\nEvidence dossier:")
    for i, claim in enumerate(result.claims, 1):
        print(f"{i}. [{claim.verdict.value.upper()}] ({claim.evidence_strength.value} support) {claim.text}")
        print(f"   {claim.reasoning}")
        cited = [
            str(index + 1)
            for index in claim.source_indices
            if 0 <= index < len(result.sources)
        ]
        if cited:
            print(f"   Sources found: {', '.join(cited)}")

    if result.sources:
        print("\nReference bibliography:")
        print(format_all(result.sources))


def print_history(history: HistoryService, identity: str) -> None:
    items = history.list(identity)
    if not items:
        print("\nNo archive entries found.")
        return
    print(f"\nArchive ({len(items)} saved reports):")
    for item in items:
        day = datetime.fromtimestamp(item.timestamp / 1000).strftime("%b %d")
        print(f"- {day}  {item.result.confidence_score:>3}% EV  {item.input[:80]}")


async def main():
    """Run the evidence discovery terminal."""
    load_dotenv()
    logging.basicConfig(level=os.getenv("VERITAS_LOG_LEVEL", "WARNING"))

    print("Veritas - Evidence discovery with web-grounded Gemini")
    print("----------------------------------------------------")

    identity = ""
    try:
        while not identity:
            identity = input("Display name: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return

    ai_provider = GeminiAdapter(GeminiConfig(model=os.getenv("VERITAS_MODEL", "gemini-2.5-flash")))
    await ai_provider.initialize()

    service = FactCheckingService(ai_provider)
    history = HistoryService(
        JsonFileKeyValueStore(os.getenv("VERITAS_HISTORY_PATH", DEFAULT_HISTORY_PATH)),
        max_items=int(os.getenv("VERITAS_HISTORY_LIMIT", str(DEFAULT_HISTORY_LIMIT))),
    )

    try:
        while True:
            try:
                statement = input("\nEnter a claim to check ('history', 'clear' or 'quit'): ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if statement.lower() in ('quit', 'exit', 'q'):
                break
            if statement.lower() == 'history':
                print_history(history, identity)
                continue
            if statement.lower() == 'clear':
                history.clear(identity)
                print("\nHistory wiped.")
                continue
            if not statement:
                continue

            print("\nScanning evidence...")
            try:
                result = await service.check(statement)
            except FactCheckError as e:
                title = "Quota limit reached" if e.category == QUOTA_CATEGORY else "Analysis failed"
                print(f"\n{title}: {e.user_message}")
                continue

            history.record(identity, statement, result)
            print_result(result)

    finally:
        # Clean up
        await ai_provider.shutdown()


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()

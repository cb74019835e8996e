#!/usr/bin/env python3
"""
AI 提供商诊断工具

Loads a local .env, prints the configuration summary, then runs each
capability once through the reading assistant, plus one Open Library search,
and shows which results came from a live provider.

Usage:
    python scripts/check_providers.py [--title TITLE] [--author AUTHOR]

Examples:
    python scripts/check_providers.py
    python scripts/check_providers.py --title "Moby-Dick" --author "Herman Melville"
"""
import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")

from rich.console import Console
from rich.table import Table

from suitcase.config import AISettings, print_config_summary
from suitcase.services.ai.schemas import ChatTurn
from suitcase.services.ai.selector import build_reading_assistant
from suitcase.services.openlibrary_service import OpenLibraryService


def _preview(value) -> str:
    if isinstance(value, list):
        titles = [getattr(item, "title", None) or getattr(item, "reviewer_name", "") for item in value]
        return f"{len(value)} items: {', '.join(titles)[:80]}"
    if hasattr(value, "reply"):
        return f"{value.reply[:60]} (+{len(value.suggestions)} suggestions)"
    text = str(value).replace("\n", " ")
    return text[:80] + ("..." if len(text) > 80 else "")


async def run_checks(title: str, author: str):
    console = Console()
    settings = AISettings.from_env()
    print_config_summary(settings)

    assistant = build_reading_assistant(settings)
    console.print()
    console.print(
        f"[bold cyan]Active provider:[/bold cyan] {assistant.get_active_provider()} "
        f"([{'green' if assistant.is_live() else 'yellow'}]"
        f"{'live' if assistant.is_live() else 'offline'}[/])"
    )

    history = (ChatTurn(role="user", text="Hi"), ChatTurn(role="model", text="Hello, reader!"))
    checks = [
        ("search_books", assistant.search_books(title)),
        ("consult_concierge", assistant.consult_concierge("Something like this book, please", history)),
        ("get_onboarding_recommendations", assistant.get_onboarding_recommendations(["Sci-Fi"], "relax")),
        ("get_mood_recommendations", assistant.get_mood_recommendations("rainy and reflective")),
        ("generate_reviews", assistant.generate_reviews(title, author)),
        ("chat_about_book", assistant.chat_about_book(title, "Who is the narrator?", history)),
        ("translate_text", assistant.translate_text("Bonjour tout le monde", "English")),
        ("explain_context", assistant.explain_context("Call me Ishmael.", title)),
        ("generate_book_content", assistant.generate_book_content(title, author, 1)),
        ("get_book_summary", assistant.get_book_summary(title)),
        ("get_book_recap", assistant.get_book_recap(title)),
    ]
    checks.append(("openlibrary.search", OpenLibraryService().search(title, limit=5)))

    table = Table(title=f'Capability check: "{title}"')
    table.add_column("Operation", style="cyan")
    table.add_column("Result")
    for name, call in checks:
        result = await call
        table.add_row(name, _preview(result))

    console.print(table)


def main():
    parser = argparse.ArgumentParser(description="检查 AI 提供商配置并试运行全部能力")
    parser.add_argument("--title", default="Moby-Dick", help="测试书名")
    parser.add_argument("--author", default="Herman Melville", help="测试作者")
    args = parser.parse_args()
    asyncio.run(run_checks(args.title, args.author))


if __name__ == "__main__":
    main()

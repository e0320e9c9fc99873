"""CLI interface for Vaultsage - analyze your notes vault from the terminal."""

import argparse
import json
import logging
import sys
from pathlib import Path

from vaultsage.assistant import Colors, VaultAssistant
from vaultsage.assistant.analyze import PatternAnalysis
from vaultsage.assistant.categorize import NoteCategory
from vaultsage.assistant.qa import QAResult
from vaultsage.assistant.report import VaultReport
from vaultsage.assistant.summarize import FolderSummary
from vaultsage.config import get_settings
from vaultsage.errors import VaultError
from vaultsage.vault.categories import VaultCategory

logger = logging.getLogger(__name__)

RULE = "=" * 80

# Models checked by the `models` command
PROBE_MODELS = ["gpt-4o-mini", "gpt-4o", "gpt-4.1-mini", "gpt-5-nano"]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
    )
    # Reduce noise from libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def print_error(message: str) -> None:
    print(f"{Colors.RED}Error: {message}{Colors.RESET}", file=sys.stderr)


def print_json(data: dict | list) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def emit(result, printer, as_json: bool) -> None:
    """Print a result record as JSON or with its terminal printer."""
    if as_json:
        print_json(result.to_dict())
    else:
        printer(result)


def print_category(result: NoteCategory) -> None:
    print(f"\n{Colors.BOLD}Note:{Colors.RESET} {result.title}")
    print(f"{Colors.BOLD}Category:{Colors.RESET} {Colors.CYAN}{result.category}{Colors.RESET}")
    if not result.known:
        print(f"{Colors.YELLOW}(not one of the offered categories){Colors.RESET}")
    print()


def print_summary(result: FolderSummary) -> None:
    print(f"\n{Colors.BOLD}Folder:{Colors.RESET} {Path(result.folder_path).name}")
    analyzed = f"{result.note_count}"
    if result.sampled_count < result.note_count:
        analyzed += f" ({result.sampled_count} sampled)"
    print(f"{Colors.BOLD}Notes analyzed:{Colors.RESET} {analyzed}")
    print(f"\n{Colors.GREEN}Summary:{Colors.RESET}\n{result.summary}")
    if result.themes:
        print(f"\n{Colors.GREEN}Themes:{Colors.RESET} {', '.join(result.themes)}")
    print()


def print_analysis(result: PatternAnalysis) -> None:
    print(f'\n{Colors.BOLD}Pattern Analysis: "{result.keyword}"{Colors.RESET}')
    print(f"Folder: {Path(result.folder_path).name}")
    print(f"\n{Colors.CYAN}Statistics:{Colors.RESET}")
    print(f"   Total mentions: {result.total_mentions}")
    print(f"   Notes containing keyword: {result.notes_with_keyword}/{result.total_notes}")

    if result.first_mention:
        print(f"\n{Colors.CYAN}Timeline:{Colors.RESET}")
        print(f"   First mention: {result.first_mention}")
        print(f"   Last mention: {result.last_mention}")
        print(f"   Peak period: {result.peak_period}")
        print(f"   Trend: {result.trend}")

    if result.examples:
        print(f"\n{Colors.CYAN}Example snippets:{Colors.RESET}")
        for i, ex in enumerate(result.examples, start=1):
            print(f"   {i}. [{ex.date or 'undated'}] {ex.note_title}")
            print(f'      "{ex.snippet[:100]}..."')

    if result.ai_insights:
        print(f"\n{Colors.GREEN}AI Insights:{Colors.RESET}")
        print(f"   {result.ai_insights}")
    print()


def print_answer(result: QAResult) -> None:
    print(f"\n{RULE}")
    print(f"{Colors.BOLD}Question:{Colors.RESET} {result.question}")
    print(RULE)
    print(f"\n{Colors.GREEN}Answer:{Colors.RESET}\n{result.answer}\n")
    print(RULE)
    source_note = " (no keyword matches, used recent notes)" if result.used_fallback else ""
    print(f"Sources used: {result.sources_used} notes{source_note}")
    print(f"Context size: ~{result.context_size_tokens} tokens")
    print(f"{RULE}\n")


def print_report(report: VaultReport) -> None:
    print(f"\n{RULE}")
    print(f"{Colors.BOLD}VAULT REPORT{Colors.RESET}")
    print(RULE)
    print(f"Generated: {report.generated_at.astimezone().strftime('%Y-%m-%d %H:%M')}\n")

    print(f"{Colors.CYAN}STATISTICS{Colors.RESET}")
    print(f"   Total Notes: {report.total_notes}")
    print(f"   Total Folders: {report.total_folders}\n")

    print(f"{Colors.CYAN}NOTES BY FOLDER{Colors.RESET}")
    for folder in report.folder_breakdown:
        print(f"   {folder.name:<25} {folder.note_count} notes ({folder.percentage}%)")

    print(f"\n{Colors.CYAN}RECENT ACTIVITY (Last 12 Months){Colors.RESET}")
    for month in report.monthly_activity[:6]:
        print(f"   {month.month}: {month.note_count} notes")

    print(f"\n{Colors.CYAN}FOLDER SUMMARIES{Colors.RESET}")
    for folder, summary in report.folder_summaries.items():
        print(f"\n   {Colors.BOLD}{folder}:{Colors.RESET}")
        print(f"   {summary}")

    print(f"\n{Colors.CYAN}TOP THEMES{Colors.RESET}")
    for i, theme in enumerate(report.top_themes, start=1):
        print(f"   {i}. {theme}")

    print(f"\n{Colors.CYAN}ORGANIZATION SUGGESTIONS{Colors.RESET}")
    if report.suggestions:
        for suggestion in report.suggestions:
            print(f"   - {suggestion}")
    else:
        print("   - Your vault is well-organized!")
    print(f"\n{RULE}\n")


def print_categories(categories: list[VaultCategory]) -> None:
    print()
    for category in categories:
        print(f"  {Colors.BOLD}{category.name}{Colors.RESET} - {category.description or ''}")
    print()


def ask(prompt: str, default: str | None = None) -> str:
    """Prompt for input, returning the default on empty input."""
    if default:
        print(f"{Colors.DIM}Default: {default}{Colors.RESET}")
    value = input(f"{Colors.BOLD}{Colors.BLUE}{prompt}{Colors.RESET} ").strip()
    return value or (default or "")


def interactive_mode(assistant: VaultAssistant) -> None:
    """Run the interactive menu."""
    print(f"{Colors.GREEN}{Colors.BOLD}Vaultsage - Interactive Mode{Colors.RESET}")
    vault_default = str(assistant.settings.vault_path) if assistant.settings.vault_path else None

    while True:
        print(
            """
What would you like to do?

  1. Categorize a note
  2. Summarize a folder
  3. Analyze keyword patterns
  4. Ask a question about your vault
  5. Generate a vault report
  6. Exit
"""
        )
        try:
            choice = ask("Enter your choice (1-6):")

            if choice == "6" or choice.lower() in ("exit", "quit"):
                print(f"{Colors.DIM}Goodbye!{Colors.RESET}")
                break

            if choice == "1":
                note = ask("Enter note path:")
                print(f"{Colors.DIM}Categorizing note...{Colors.RESET}")
                print_category(assistant.categorize(Path(note)))
            elif choice == "2":
                folder = ask("Enter folder path:", vault_default)
                print(f"{Colors.DIM}Analyzing folder...{Colors.RESET}")
                print_summary(assistant.summarize(Path(folder)))
            elif choice == "3":
                folder = ask("Enter folder path:", vault_default)
                keyword = ask("Enter keyword to analyze:")
                include_ai = ask("Include AI insights? (y/n, default: y):").lower()
                print(f'{Colors.DIM}Analyzing pattern for "{keyword}"...{Colors.RESET}')
                print_analysis(
                    assistant.analyze(Path(folder), keyword, include_ai not in ("n", "no"))
                )
            elif choice == "4":
                vault = ask("Enter vault path:", vault_default)
                question = ask("Enter your question:")
                print(f"{Colors.DIM}Searching vault and analyzing...{Colors.RESET}")
                print_answer(assistant.ask(question, Path(vault)))
            elif choice == "5":
                vault = ask("Enter vault path:", vault_default)
                print(f"{Colors.DIM}Generating vault report (this may take a minute)...{Colors.RESET}")
                print_report(assistant.report(Path(vault)))
            else:
                print(f"{Colors.RED}Invalid choice. Please enter a number from 1 to 6.{Colors.RESET}")

        except KeyboardInterrupt:
            print(f"\n{Colors.DIM}Goodbye!{Colors.RESET}")
            break
        except EOFError:
            print(f"\n{Colors.DIM}Goodbye!{Colors.RESET}")
            break
        except VaultError as e:
            print_error(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultsage",
        description="Categorize, summarize, search and report on a markdown notes vault.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")

    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("categorize", help="Categorize a note")
    p.add_argument("note", type=Path, help="Path to a markdown note")
    p.add_argument("--vault", type=Path, help="Vault whose folders are the categories")
    p.add_argument(
        "--default-categories",
        action="store_true",
        help="Use the built-in categories instead of the vault's folders",
    )

    p = sub.add_parser("summarize", help="Summarize the notes in a folder")
    p.add_argument("folder", type=Path, help="Folder to summarize (not recursive)")

    p = sub.add_parser("analyze", help="Analyze how a keyword is used in a folder")
    p.add_argument("folder", type=Path, help="Folder to search (not recursive)")
    p.add_argument("keyword", help="Keyword to analyze")
    p.add_argument("--no-ai", action="store_true", help="Skip AI insights")

    p = sub.add_parser("ask", help="Ask a question about the vault")
    p.add_argument("question", nargs="+", help="Question text")
    p.add_argument("--vault", type=Path, help="Vault path (defaults to VAULT_PATH)")

    p = sub.add_parser("report", help="Generate a full vault report")
    p.add_argument("--vault", type=Path, help="Vault path (defaults to VAULT_PATH)")

    p = sub.add_parser("categories", help="List vault categories with descriptions")
    p.add_argument("--vault", type=Path, help="Vault path (defaults to VAULT_PATH)")

    sub.add_parser("models", help="Check which OpenAI models respond")

    return parser


def run_command(assistant: VaultAssistant, args: argparse.Namespace) -> None:
    """Execute one subcommand and print its result."""
    if args.command == "categorize":
        result = assistant.categorize(
            args.note, args.vault, use_vault_categories=not args.default_categories
        )
        emit(result, print_category, args.json)

    elif args.command == "summarize":
        result = assistant.summarize(args.folder)
        emit(result, print_summary, args.json)

    elif args.command == "analyze":
        result = assistant.analyze(args.folder, args.keyword, include_ai=not args.no_ai)
        emit(result, print_analysis, args.json)

    elif args.command == "ask":
        result = assistant.ask(" ".join(args.question), args.vault)
        emit(result, print_answer, args.json)

    elif args.command == "report":
        result = assistant.report(args.vault)
        emit(result, print_report, args.json)

    elif args.command == "categories":
        categories = assistant.categories(args.vault)
        if args.json:
            print_json([c.to_dict() for c in categories])
        else:
            print_categories(categories)

    elif args.command == "models":
        for name, error in assistant.client.probe_models(PROBE_MODELS).items():
            if error is None:
                print(f"{Colors.GREEN}✓ {name} works{Colors.RESET}")
            else:
                print(f"{Colors.RED}✗ {name} failed: {error}{Colors.RESET}")


def cli(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    # Load settings
    try:
        settings = get_settings()
    except Exception as e:
        logger.error(f"{Colors.RED}Failed to load settings: {e}{Colors.RESET}")
        logger.error(
            f"{Colors.RED}Check VAULT_PATH and OPENAI_API_KEY in your environment or .env file.{Colors.RESET}"
        )
        sys.exit(1)

    if settings.vault_path:
        logger.debug(f"{Colors.DIM}Vault: {settings.vault_path}{Colors.RESET}")

    assistant = VaultAssistant(settings)

    if args.command is None:
        interactive_mode(assistant)
        return

    try:
        run_command(assistant, args)
    except VaultError as e:
        print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    cli()

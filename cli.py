#!/usr/bin/env python3
"""
Command Line Interface for the TechQuiz question generator.

Shows which provider and model actually answered, and (with --verbose)
every fallback attempt on the way there.

COMMANDS:
- generate mcq|technical: Generate questions and print them
- test-model:             One preflight call against the selected model
- models:                 Show the model catalog in fallback order

The API key is taken from --api-key, or from GEMINI_API_KEY /
GOOGLE_API_KEY / MISTRAL_API_KEY depending on the selected model.
"""
import sys
import json
import argparse
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from configs import VERBOSE, MAX_QUESTIONS_PER_REQUEST, get_default_api_key
from techquiz.llm_router import MODEL_CATALOG, LLMError, resolve_provider
from techquiz.orchestrator import QuestionOrchestrator
from techquiz.utils import setup_logging

console = Console()


# ============================================================
# OUTPUT
# ============================================================

def print_attempts(attempts: List[dict]):
    """Print the fallback trail as a table."""
    if not attempts:
        return

    table = Table(title="Fallback Attempts", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Provider", style="cyan")
    table.add_column("Model")
    table.add_column("Status")
    table.add_column("Reason", style="dim")
    table.add_column("ms", justify="right")

    for a in attempts:
        color = "green" if a["status"] == "success" else "red"
        table.add_row(
            f"{a['attempt']}/{a['max_attempts']}",
            a["provider"],
            a["model"],
            f"[{color}]{a['status']}[/{color}]",
            (a.get("reason") or "")[:80],
            f"{a.get('elapsed_ms', 0):.0f}",
        )
    console.print(table)


def print_mcqs(questions: List[dict]):
    for i, q in enumerate(questions, 1):
        body = [f"[bold]{q['question']}[/bold]", ""]
        for letter, text in q["options"].items():
            marker = "[green]✓[/green]" if letter == q["correct_answer"] else " "
            body.append(f" {marker} {letter}. {text}")
        console.print(Panel(
            "\n".join(body),
            title=f"Q{i} · {q['difficulty']} · {q.get('tech_stack') or q['topic']}",
            border_style="blue",
        ))


def print_technical(questions: List[dict]):
    table = Table(box=box.ROUNDED, show_lines=True)
    table.add_column("#", justify="right")
    table.add_column("Question")
    table.add_column("Difficulty", style="yellow")
    table.add_column("Type", style="dim")
    for i, q in enumerate(questions, 1):
        table.add_row(str(i), q["question"], q["difficulty"], q["question_type"])
    console.print(table)


def print_error(error: Exception):
    if isinstance(error, LLMError):
        where = ""
        if error.provider:
            where = f" ({error.provider.value} - {error.model})"
        console.print(f"[bold red]✗ {error.kind.value}{where}:[/bold red] {error.message}")
        print_attempts(error.attempts)
    else:
        console.print(f"[bold red]✗ {error}[/bold red]")


# ============================================================
# COMMANDS
# ============================================================

def _api_key(args) -> Optional[str]:
    if args.api_key:
        return args.api_key
    provider = resolve_provider(args.model)
    if provider is None:
        return None
    return get_default_api_key(provider.value)


def cmd_models(args) -> int:
    table = Table(title="Model Catalog (fallback order)", box=box.SIMPLE)
    table.add_column("Provider", style="cyan")
    table.add_column("Models")
    for provider, models in MODEL_CATALOG.items():
        table.add_row(provider.value, " → ".join(models))
    console.print(table)
    return 0


def cmd_test_model(args, orchestrator: QuestionOrchestrator) -> int:
    api_key = _api_key(args)
    if not api_key:
        console.print("[bold red]✗ No API key: pass --api-key or set it in .env[/bold red]")
        return 2

    with console.status(f"Testing {args.model}..."):
        result = orchestrator.test_model(args.model, api_key)

    console.print(
        f"[green]✓ {result['provider']} API connection successful[/green] "
        f"[dim]({result['model']}: {result['response'][:60]})[/dim]"
    )
    return 0


def cmd_generate(args, orchestrator: QuestionOrchestrator) -> int:
    api_key = _api_key(args)
    if not api_key:
        console.print("[bold red]✗ No API key: pass --api-key or set it in .env[/bold red]")
        return 2

    with console.status(f"Generating {args.count} {args.kind} question(s)..."):
        if args.kind == "mcq":
            batch = orchestrator.generate_mcqs(
                args.topic, args.difficulty, args.model, api_key,
                count=args.count, tech_stack=args.tech_stack,
            )
        else:
            batch = orchestrator.generate_technical_questions(
                args.topic, args.difficulty, args.model, api_key,
                count=args.count, tech_stack=args.tech_stack,
                question_type=args.question_type,
            )

    if args.json:
        console.print_json(json.dumps(batch.questions))
    elif args.kind == "mcq":
        print_mcqs(batch.questions)
    else:
        print_technical(batch.questions)

    console.print(f"[dim]Answered by {batch.provider} - {batch.model}[/dim]")
    if args.verbose:
        print_attempts(batch.attempts)
    return 0


# ============================================================
# ENTRY POINT
# ============================================================

def _count(value: str) -> int:
    count = int(value)
    if count < 1 or count > MAX_QUESTIONS_PER_REQUEST:
        raise argparse.ArgumentTypeError(
            f"count must be between 1 and {MAX_QUESTIONS_PER_REQUEST}"
        )
    return count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="techquiz",
        description="TechQuiz - generate technical interview questions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  techquiz models
  techquiz test-model --model gemini
  techquiz generate mcq --topic Networking --difficulty Medium --model mistral-small --count 3
  techquiz generate technical --topic Docker --difficulty Hard --model gemini -v
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=VERBOSE,
        help="Show every fallback attempt"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("models", help="Show the model catalog")

    test_parser = subparsers.add_parser("test-model", help="Preflight check for a model and key")
    test_parser.add_argument("-m", "--model", required=True, help="Model selection, e.g. 'gemini'")
    test_parser.add_argument("--api-key", help="Provider API key")

    gen_parser = subparsers.add_parser("generate", help="Generate questions")
    gen_parser.add_argument("kind", choices=["mcq", "technical"])
    gen_parser.add_argument("-t", "--topic", required=True)
    gen_parser.add_argument("-d", "--difficulty", required=True, help="Easy, Medium or Hard")
    gen_parser.add_argument("-m", "--model", required=True, help="Model selection, e.g. 'mistral-large'")
    gen_parser.add_argument("-n", "--count", type=_count, default=1)
    gen_parser.add_argument("--tech-stack", dest="tech_stack")
    gen_parser.add_argument("--question-type", dest="question_type")
    gen_parser.add_argument("--api-key", help="Provider API key")
    gen_parser.add_argument("--json", action="store_true", help="Print raw JSON records")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or ("INFO" if args.verbose else "WARNING"))

    orchestrator = QuestionOrchestrator()
    try:
        if args.command == "models":
            return cmd_models(args)
        if args.command == "test-model":
            return cmd_test_model(args, orchestrator)
        return cmd_generate(args, orchestrator)
    except (LLMError, ValueError) as e:
        print_error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())

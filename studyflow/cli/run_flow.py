"""CLI to run a single study flow against Gemini from a JSON input file."""
import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.json import JSON
from rich.table import Table

from studyflow.tools.analyze_test import analyze_test_results
from studyflow.tools.chat import resolve_question, summarize_conversation
from studyflow.tools.errors import FlowError, InputValidationError
from studyflow.tools.flashcards import generate_flashcard_answer, generate_multiple_flashcards
from studyflow.tools.generate_test import generate_test
from studyflow.tools.postprocess import ScoringPolicy
from studyflow.tools.study_plan import generate_study_plan

console = Console()

FLOWS = {
    "resolve-question": resolve_question,
    "summarize-conversation": summarize_conversation,
    "study-plan": generate_study_plan,
    "generate-test": generate_test,
    "analyze-test": analyze_test_results,
    "flashcard-answer": generate_flashcard_answer,
    "flashcards": generate_multiple_flashcards,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a study flow with a JSON request")
    parser.add_argument("flow", choices=sorted(FLOWS), help="Flow to run")
    parser.add_argument("input", type=Path, help="Path to the JSON request (camelCase keys)")
    parser.add_argument("--output", type=Path, help="Write the JSON result to this file")
    parser.add_argument(
        "--scoring-policy",
        choices=[p.value for p in ScoringPolicy],
        help="Scoring policy for analyze-test (default: TEST_SCORING_POLICY or objective_only)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging (shows prompts and raw model output)")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    # Configure logging
    if args.debug:
        log_level = logging.DEBUG
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif args.verbose:
        log_level = logging.INFO
        log_format = "%(asctime)s - %(levelname)s - %(message)s"
    else:
        log_level = logging.WARNING
        log_format = "%(levelname)s - %(message)s"
    logging.basicConfig(level=log_level, format=log_format, handlers=[logging.StreamHandler(sys.stderr)])

    if not args.input.exists():
        console.print(f"[red]Error: input file not found: {args.input}[/red]")
        return 1
    try:
        request = json.loads(args.input.read_text())
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: {args.input} is not valid JSON: {e}[/red]")
        return 1

    flow = FLOWS[args.flow]
    kwargs = {}
    if args.flow == "analyze-test" and args.scoring_policy:
        kwargs["scoring_policy"] = ScoringPolicy(args.scoring_policy)

    console.print(f"\n[bold cyan]Running {args.flow}...[/bold cyan]\n")
    try:
        result = flow(request, **kwargs)
    except InputValidationError as e:
        table = Table(title="Invalid input")
        table.add_column("Field", style="cyan")
        table.add_column("Problem", style="magenta")
        for err in e.field_errors:
            table.add_row(err.path, err.message)
        console.print(table)
        return 1
    except FlowError as e:
        console.print(f"[red]✗ {type(e).__name__}: {e}[/red]")
        return 1

    payload = result.model_dump_json(by_alias=True, exclude_none=True, indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload)
        console.print(f"✓ [green]Success![/green] Result written to {args.output}")
    else:
        console.print(JSON(payload))
    return 0


if __name__ == "__main__":
    sys.exit(main())

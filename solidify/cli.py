"""Command-line entry point — scan a C# tree and write the SOLID report."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from solidify.config import get_settings
from solidify.graph.workflow import WorkflowServices, run_scan_workflow
from solidify.logging_setup import configure_logging
from solidify.models import ScanResult
from solidify.services.report import RENDERERS, ReportWriteFailure

app = typer.Typer(
    name="solidify",
    help="SOLIDify: flag likely SOLID violations in C# source. Run 'solidify scan PATH'.",
    add_completion=False,
)

EXIT_VIOLATIONS = 1
EXIT_USAGE = 2


def _default_report_path(fmt: str) -> Path:
    path = Path(get_settings().REPORT_PATH)
    return path if fmt == "html" else path.with_suffix(f".{fmt}")


def _print_summary(result: ScanResult) -> None:
    for violation in result.violations:
        typer.echo(
            f"{violation.principle.value} ({violation.principle.full_name}): "
            f"{len(violation.evidences)} finding(s)"
        )
        for evidence in violation.evidences:
            typer.echo(f"  {evidence.file}:{evidence.line}")
    for skipped in result.files_skipped:
        typer.echo(f"Skipped (could not parse): {skipped}", err=True)
    typer.echo(result.verdict)


@app.command()
def scan(
    path: Path = typer.Argument(..., help="C# file or directory to scan"),
    report: Optional[Path] = typer.Option(None, "--report", "-r", help="Report file (default: REPORT_PATH)"),
    fmt: str = typer.Option("html", "--format", "-f", help="Report format: html or json"),
    explain: bool = typer.Option(False, "--explain/--no-explain", help="Ask the LLM to explain each violation"),
    fail_on_violation: bool = typer.Option(
        False, "--fail-on-violation", help="Exit with status 1 when anything is flagged"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every file and finding"),
) -> None:
    """Scan PATH, print a per-principle summary and write the report."""
    configure_logging(level="debug" if verbose else "warning")

    if not path.exists():
        typer.echo(f"Error: path not found: {path}", err=True)
        raise typer.Exit(code=EXIT_USAGE)
    fmt = fmt.lower()
    if fmt not in RENDERERS:
        typer.echo(f"Error: unknown format '{fmt}'. Choose from: {', '.join(RENDERERS)}", err=True)
        raise typer.Exit(code=EXIT_USAGE)
    if explain and not get_settings().OPENAI_API_KEY:
        typer.echo("Warning: OPENAI_API_KEY is not set; explanations will record the failure.", err=True)

    report_path = report or _default_report_path(fmt)
    try:
        state = asyncio.run(
            run_scan_workflow(
                path,
                explain=explain,
                report_path=report_path,
                report_format=fmt,
                services=WorkflowServices(),
            )
        )
    except ReportWriteFailure as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    if state["status"] == "error" or state["result"] is None:
        typer.echo(f"Error: scan failed: {'; '.join(state['errors'])}", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    result = state["result"]
    _print_summary(result)
    typer.echo(f"Report written to {state['report_written']}")

    if fail_on_violation and result.violations:
        raise typer.Exit(code=EXIT_VIOLATIONS)


@app.command()
def rules() -> None:
    """List the principle checkers in execution order with their thresholds."""
    configure_logging(level="warning")
    for checker in WorkflowServices().engine.checkers:
        typer.echo(f"{checker.principle.value:<4} {checker.applies_to.value:<10} {checker.describe()}")


if __name__ == "__main__":
    app()

"""Colorized end-of-run summary and dry-run listing for the terminal."""

from pathlib import Path

import typer

from anode_eval.evaluation.domain.plan import DryRunPlan
from anode_eval.evaluation.domain.results import EvaluationResults

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_BLUE = "\033[34m"
_WHITE = "\033[97m"


def _score_color(score: float) -> str:
    if score >= 80.0:
        return _GREEN
    if score >= 50.0:
        return _YELLOW
    return _RED


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1h 2m', '1m 23.4s' or '5.2s'."""
    hours, rest = divmod(elapsed_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours >= 1:
        return f"{int(hours)}h {int(minutes)}m"
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def print_summary(
    results: EvaluationResults,
    json_path: Path,
    report_path: Path,
    elapsed_seconds: float,
) -> None:
    summary = results.summary

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  anode-eval  ·  Evaluation Complete{_RESET}")
    _rule(color=_CYAN)
    typer.echo("")

    meta_rows: list[tuple[str, str]] = [
        ("Evaluation", results.name),
        ("Eval ID", results.eval_id),
        (
            "Runs",
            f"{summary.completed} completed, {summary.failed} failed"
            f" ({summary.timed_out} timed out)",
        ),
        ("Tests", f"{summary.passed_tests}/{summary.total_tests} passed"),
        ("Pass rate", f"{summary.overall_pass_rate:.2f}%"),
        ("Elapsed", format_elapsed(elapsed_seconds)),
        ("Results JSON", str(json_path)),
        ("Report", str(report_path)),
    ]
    label_w = max(len(label) for label, _ in meta_rows)
    for label, value in meta_rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")

    if not results.agent_scores:
        typer.echo("")
        _rule(color=_CYAN)
        return

    typer.echo("")
    _rule(color=_BLUE)
    typer.echo(f"{_BLUE}{_BOLD}  Agent Rankings{_RESET}")
    typer.echo("")
    agent_w = max(len(s.agent_id) for s in results.agent_scores)
    typer.echo(
        f"  {_DIM}{'#':>2}  {'Agent':<{agent_w}}  {'Score':>7}  {'Tests':>9}  Runs{_RESET}"
    )
    typer.echo(f"  {'─' * (agent_w + 30)}")
    for score in results.agent_scores:
        color = _score_color(score.average_score)
        marker = f"{_BOLD}▲{_RESET}" if score.rank == 1 and len(results.agent_scores) > 1 else " "
        tests = f"{score.passed_tests}/{score.total_tests}"
        typer.echo(
            f"  {score.rank:>2}  {_WHITE}{score.agent_id:<{agent_w}}{_RESET}"
            f"  {color}{score.average_score:>6.2f}%{_RESET}"
            f"  {tests:>9}  {score.completed_runs}/{score.total_runs}{marker}"
        )

    failures = [r for r in results.runs if r.error]
    if failures:
        typer.echo("")
        typer.echo(f"  {_YELLOW}{_BOLD}Failed runs  ({len(failures)} total){_RESET}")
        for run in failures[:10]:
            error = run.error or ""
            short = error[:60] + ("…" if len(error) > 60 else "")
            typer.echo(f"  {_DIM}[{run.prompt_id} · {run.agent_id}]{_RESET} {short}")
        if len(failures) > 10:
            typer.echo(f"  {_DIM}… and {len(failures) - 10} more, see the report{_RESET}")

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo("")


def print_dry_run(plan: DryRunPlan, parallelism: int) -> None:
    typer.echo("")
    typer.echo(f"{_CYAN}{_BOLD}  Dry run: {plan.name}{_RESET}")
    typer.echo(
        f"  {_DIM}{len(plan.runs)} runs, at most {parallelism} at a time{_RESET}"
    )
    typer.echo("")
    for index, planned in enumerate(plan.runs, start=1):
        typer.echo(
            f"  {index:>3}. {_WHITE}{planned.prompt_id}{_RESET} × {planned.agent_id}"
            f"  {_DIM}iterations={planned.iterations}"
            f" timeout={planned.timeout_hours:g}h"
            f" test='{planned.test_command}'{_RESET}"
        )
    typer.echo("")

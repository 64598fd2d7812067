"""CLI entrypoint for anode-eval: typer app with `run`, `init` and `report` commands."""

import asyncio
import sys
import time
from pathlib import Path

import structlog
import typer

from anode_eval.cli.output.summary import print_dry_run, print_summary
from anode_eval.config.domain.config import EvalConfig
from anode_eval.config.domain.sample import sample_config
from anode_eval.config.infrastructure.api_keys import resolve_api_keys
from anode_eval.config.infrastructure.observer import StructlogConfigObserver
from anode_eval.config.infrastructure.yaml_loader import YamlConfigLoader, dump_config
from anode_eval.core.errors import AnodeEvalError
from anode_eval.evaluation.application.runner import EvaluationRunner
from anode_eval.evaluation.domain.observer import EvaluationObserver
from anode_eval.evaluation.domain.results import EvaluationResults
from anode_eval.evaluation.infrastructure.composite_observer import (
    CompositeEvaluationObserver,
)
from anode_eval.evaluation.infrastructure.observer import StructlogEvaluationObserver
from anode_eval.evaluation.infrastructure.progress_observer import (
    ProgressEvaluationObserver,
)
from anode_eval.sandbox.application.lifecycle import SandboxLifecycleManager
from anode_eval.sandbox.infrastructure.local_process import LocalProcessOrchestrator
from anode_eval.sandbox.infrastructure.observer import StructlogSandboxObserver
from anode_eval.storage.domain.report import generate_report
from anode_eval.storage.infrastructure.json_store import load_results

app = typer.Typer(add_completion=False, help="Evaluate coding agents in sandboxes.")


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        # INFO and above; sandbox poll events stay at DEBUG.
        wrapper_class=structlog.make_filtering_bound_logger(20),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


async def _run_evaluation(
    runner: EvaluationRunner,
    output_dir: Path,
    parallelism: int,
    timeout_hours: float,
) -> tuple[EvaluationResults, Path, Path]:
    results = await runner.run(parallelism=parallelism, timeout_hours=timeout_hours)
    json_path, report_path = await runner.save_results(output_dir=output_dir)
    return results, json_path, report_path


def _build_runner(config: EvalConfig, namespace: str, log_format: str) -> EvaluationRunner:
    api_keys = resolve_api_keys(
        config=config.settings.api_keys,
        observer=StructlogConfigObserver(),
    )
    lifecycle = SandboxLifecycleManager(
        orchestrator=LocalProcessOrchestrator(),
        observer=StructlogSandboxObserver(),
    )
    observers: list[EvaluationObserver] = [StructlogEvaluationObserver()]
    if log_format != "json":
        observers.append(ProgressEvaluationObserver())
    return EvaluationRunner(
        config=config,
        lifecycle=lifecycle,
        api_keys=api_keys,
        observer=CompositeEvaluationObserver(observers=observers),
        namespace=namespace,
    )


@app.command()
def run(
    config_path: Path = typer.Argument(..., help="Path to evaluation config YAML"),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for results (defaults to settings.output_dir)",
    ),
    parallelism: int = typer.Option(
        1, "--parallelism", "-p", min=1, help="Maximum concurrent sandboxes"
    ),
    timeout_hours: float = typer.Option(
        6.0, "--timeout-hours", min=0.001, help="Upper bound on every run's timeout"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="List the runs without starting any sandbox"
    ),
    namespace: str = typer.Option(
        "default", "--namespace", help="Namespace label attached to every sandbox"
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Run every (prompt, agent) combination from a YAML config file."""
    try:
        _configure_structlog(log_format=log_format)

        loader = YamlConfigLoader(observer=StructlogConfigObserver())
        config = loader.load(path=config_path)

        if dry_run:
            plan = EvaluationRunner.preview(config=config, timeout_hours=timeout_hours)
            print_dry_run(plan=plan, parallelism=parallelism)
            return

        runner = _build_runner(config=config, namespace=namespace, log_format=log_format)
        started_at = time.monotonic()
        results, json_path, report_path = asyncio.run(
            _run_evaluation(
                runner=runner,
                output_dir=output_dir or config.settings.output_dir,
                parallelism=parallelism,
                timeout_hours=timeout_hours,
            )
        )
        print_summary(
            results=results,
            json_path=json_path,
            report_path=report_path,
            elapsed_seconds=time.monotonic() - started_at,
        )

    except KeyboardInterrupt:
        typer.echo("Evaluation interrupted.")
        sys.exit(1)
    except AnodeEvalError as exc:
        typer.echo(str(exc))
        sys.exit(1)


@app.command()
def init(
    output: Path = typer.Option(
        Path("eval-config.yaml"), "--output", "-o", help="Where to write the config"
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a sample evaluation config to get started."""
    if output.exists() and not force:
        typer.echo(f"Failed to write config: file already exists: {output}")
        sys.exit(1)
    try:
        dump_config(config=sample_config(), path=output)
    except OSError as exc:
        typer.echo(f"Failed to write config: {exc}")
        sys.exit(1)
    typer.echo(f"Sample config written to {output}")


@app.command()
def report(
    results_json: Path = typer.Argument(..., help="Results JSON written by `run`"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the report here instead of stdout"
    ),
) -> None:
    """Re-render the Markdown report for a saved evaluation."""
    try:
        results = load_results(results_json)
    except AnodeEvalError as exc:
        typer.echo(str(exc))
        sys.exit(1)

    markdown = generate_report(results)
    if output is None:
        typer.echo(markdown, nl=False)
        return
    output.write_text(markdown, encoding="utf-8")
    typer.echo(f"Report written to {output}")


if __name__ == "__main__":
    app()

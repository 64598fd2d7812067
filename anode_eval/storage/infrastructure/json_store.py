"""JSON snapshot persistence for EvaluationResults."""

from pathlib import Path

from pydantic import ValidationError

from anode_eval.evaluation.domain.results import EvaluationResults
from anode_eval.storage.domain.report import generate_report
from anode_eval.storage.infrastructure.errors import ResultsLoadError, ResultsSaveError


def snapshot_path(output_dir: Path, eval_id: str) -> Path:
    return output_dir / f"{eval_id}.json"


def report_path(output_dir: Path, eval_id: str) -> Path:
    return output_dir / f"{eval_id}_report.md"


def save_results(results: EvaluationResults, output_dir: Path) -> tuple[Path, Path]:
    """Write ``<eval_id>.json`` and ``<eval_id>_report.md`` under *output_dir*.

    Raises:
        ResultsSaveError: if the directory or either file cannot be written.
    """
    json_file = snapshot_path(output_dir, results.eval_id)
    report_file = report_path(output_dir, results.eval_id)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        json_file.write_text(results.model_dump_json(indent=2), encoding="utf-8")
        report_file.write_text(generate_report(results), encoding="utf-8")
    except OSError as exc:
        raise ResultsSaveError(path=output_dir, reason=str(exc)) from exc
    return json_file, report_file


def load_results(path: Path) -> EvaluationResults:
    """Read a snapshot written by ``save_results``.

    Raises:
        ResultsLoadError: if the file is missing, unreadable or invalid.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ResultsLoadError(path=path, reason="file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ResultsLoadError(path=path, reason=str(exc)) from exc
    try:
        return EvaluationResults.model_validate_json(content)
    except ValidationError as exc:
        raise ResultsLoadError(
            path=path, reason=f"invalid snapshot ({exc.error_count()} errors)"
        ) from exc

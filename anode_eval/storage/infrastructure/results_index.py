"""ResultsIndex: every saved evaluation under a results directory."""

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from anode_eval.evaluation.domain.results import EvaluationResults
from anode_eval.storage.domain.observer import StorageObserver
from anode_eval.storage.infrastructure.errors import ResultsLoadError
from anode_eval.storage.infrastructure.json_store import load_results

_NESTED_RESULTS_FILE = "results.json"


@dataclass(frozen=True)
class StoredResult:
    """One snapshot found on disk."""

    path: Path
    results: EvaluationResults
    loaded_at: datetime


class ResultsIndex:
    """Read-side view of a results directory, newest evaluation first.

    Scans top-level ``*.json`` snapshots, then each immediate subdirectory's
    ``results.json`` followed by its other ``*.json`` files. Each eval_id is
    kept once, first found wins. Files that are not snapshots are skipped.
    """

    def __init__(self, results_dir: Path, observer: StorageObserver) -> None:
        self._results_dir = results_dir
        self._observer = observer
        self._stored: list[StoredResult] = []

    def reload(self) -> list[StoredResult]:
        found: dict[str, StoredResult] = {}
        for path in self._candidate_paths():
            try:
                results = load_results(path)
            except ResultsLoadError as exc:
                self._observer.results_file_skipped(path=path, reason=exc.reason)
                continue
            if results.eval_id not in found:
                found[results.eval_id] = StoredResult(
                    path=path, results=results, loaded_at=datetime.now(UTC)
                )

        self._stored = sorted(
            found.values(), key=lambda s: s.results.started_at, reverse=True
        )
        self._observer.results_index_reloaded(
            results_dir=self._results_dir, num_results=len(self._stored)
        )
        return list(self._stored)

    def list_results(self) -> list[StoredResult]:
        return list(self._stored)

    def get_result(self, eval_id: str) -> StoredResult | None:
        for stored in self._stored:
            if stored.results.eval_id == eval_id:
                return stored
        return None

    def _candidate_paths(self) -> list[Path]:
        if not self._results_dir.is_dir():
            return []
        paths = sorted(self._results_dir.glob("*.json"))
        for subdir in sorted(p for p in self._results_dir.iterdir() if p.is_dir()):
            nested = subdir / _NESTED_RESULTS_FILE
            if nested.is_file():
                paths.append(nested)
            paths.extend(p for p in sorted(subdir.glob("*.json")) if p != nested)
        return paths

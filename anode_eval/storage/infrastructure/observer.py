"""Structlog implementation of the StorageObserver port."""

from pathlib import Path

import structlog


class StructlogStorageObserver:
    """Satisfies the StorageObserver protocol structurally."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def results_file_skipped(self, path: Path, reason: str) -> None:
        self._log.warning("storage.results_file_skipped", path=str(path), reason=reason)

    def results_index_reloaded(self, results_dir: Path, num_results: int) -> None:
        self._log.info(
            "storage.results_index_reloaded",
            results_dir=str(results_dir),
            num_results=num_results,
        )

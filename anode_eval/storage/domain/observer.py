"""Observer port for results storage: defines events in domain language."""

from pathlib import Path
from typing import Protocol


class StorageObserver(Protocol):
    def results_file_skipped(self, path: Path, reason: str) -> None: ...

    def results_index_reloaded(self, results_dir: Path, num_results: int) -> None: ...

"""ProgressEvaluationObserver: renders per-agent Rich progress bars to stderr."""

from __future__ import annotations

import sys

from rich.console import Console, Group
from rich.live import Live
from rich.progress import (
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

_OVERALL = "Overall"

_AGENT_COLORS: list[str] = [
    "cyan",
    "green",
    "yellow",
    "magenta",
    "blue",
]


class _RunCountsColumn(ProgressColumn):
    """Renders done+running/total, plus the failed count when non-zero."""

    def render(self, task: Task) -> Text:
        done = int(task.fields.get("done", 0))
        running = int(task.fields.get("running", 0))
        failed = int(task.fields.get("failed", 0))
        text = Text.assemble(
            (str(done), "bright_green"),
            ("+", "dim white"),
            (str(running), "grey50"),
            ("/", "dim white"),
            (str(int(task.total or 0)), "default"),
        )
        if failed:
            text.append(f" ✗{failed}", style="red")
        return text


class _SandboxBarColumn(ProgressColumn):
    """Three-segment bar: finished runs, runs holding a sandbox, runs waiting."""

    def __init__(self, bar_width: int = 40) -> None:
        super().__init__()
        self.bar_width = bar_width

    def render(self, task: Task) -> Text:
        total = task.total or 0
        done_cells = running_cells = 0
        if total > 0:
            done_cells = int(task.completed / total * self.bar_width)
            running = int(task.fields.get("running", 0))
            running_cells = min(
                int(running / total * self.bar_width),
                self.bar_width - done_cells,
            )
        waiting_cells = self.bar_width - done_cells - running_cells

        bar = Text()
        bar.append("█" * done_cells, style="bright_green")
        bar.append("▒" * running_cells, style="grey50")
        bar.append("░" * waiting_cells, style="dim white")
        return bar


class ProgressEvaluationObserver:
    """Renders one Rich progress row per agent plus an Overall row on stderr.

    Each agent row counts that agent's runs across all prompts. Runs are
    "running" from the moment they hold a sandbox permit until they are
    recorded.

    Pass ``disabled=True`` to keep the counters without any terminal output
    (useful in tests).

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._counts: dict[str, dict[str, int]] = {}
        self._task_ids: dict[str, TaskID] = {}
        self._progress: Progress | None = None
        self._live: Live | None = None

    def counts(self, key: str) -> dict[str, int]:
        """Current done/running/failed/total counters for an agent or ``"Overall"``."""
        return dict(self._counts.get(key, {}))

    def _reset(self) -> None:
        self._counts = {}
        self._task_ids = {}
        self._progress = None
        self._live = None

    def _label(self, name: str, index: int, pad_width: int) -> str:
        if name == _OVERALL:
            return f"[bold]{_OVERALL:<{pad_width}}[/bold]"
        if sys.stderr.isatty():
            color = _AGENT_COLORS[index % len(_AGENT_COLORS)]
            return f"[{color}]{name:<{pad_width}}[/{color}]"
        return f"{name:<{pad_width}}"

    def _bump(self, agent_id: str, field: str, delta: int) -> None:
        for key in (agent_id, _OVERALL):
            counters = self._counts.get(key)
            if counters is None:
                continue
            counters[field] = max(0, counters[field] + delta)
            self._refresh(key)

    def _refresh(self, key: str) -> None:
        if self._disabled or self._progress is None or key not in self._task_ids:
            return
        counters = self._counts[key]
        self._progress.update(
            self._task_ids[key],
            completed=counters["done"],
            done=counters["done"],
            running=counters["running"],
            failed=counters["failed"],
        )

    def evaluation_started(
        self,
        eval_id: str,
        name: str,
        total_runs: int,
        agent_ids: list[str],
        runs_per_agent: int,
        parallelism: int,
    ) -> None:
        self._reset()
        for agent_id in agent_ids:
            self._counts[agent_id] = {
                "done": 0,
                "running": 0,
                "failed": 0,
                "total": runs_per_agent,
            }
        self._counts[_OVERALL] = {"done": 0, "running": 0, "failed": 0, "total": total_runs}

        if self._disabled:
            return

        console = Console(stderr=True)
        pad_width = max(len(key) for key in self._counts)
        self._progress = Progress(
            TextColumn("{task.description}"),
            _SandboxBarColumn(bar_width=40),
            _RunCountsColumn(),
            TimeElapsedColumn(),
            console=console,
            refresh_per_second=4,
            transient=False,
        )
        rows = [_OVERALL, *agent_ids]
        for index, key in enumerate(rows):
            self._task_ids[key] = self._progress.add_task(
                description=self._label(key, index - 1, pad_width),
                total=float(self._counts[key]["total"]),
                done=0,
                running=0,
                failed=0,
            )

        legend = Text.assemble(
            "  Legend:  ",
            ("█", "bright_green"),
            " done  ",
            ("▒", "grey50"),
            " running  ",
            ("░", "dim white"),
            " waiting",
        )
        self._live = Live(
            Group(Text(f"  {name}", style="bold"), self._progress, Text(""), legend),
            console=console,
            refresh_per_second=4,
        )
        self._live.start()

    def evaluation_completed(
        self,
        eval_id: str,
        total_runs: int,
        elapsed_seconds: float,
    ) -> None:
        if self._live is not None:
            self._live.stop()
        self._reset()

    def evaluation_progress(
        self,
        eval_id: str,
        agent_id: str,
        completed: int,
        total: int,
    ) -> None:
        self._bump(agent_id, "done", 1)
        self._bump(agent_id, "running", -1)

    def run_queued(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
    ) -> None:
        pass

    def run_started(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
    ) -> None:
        self._bump(agent_id, "running", 1)

    def run_completed(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
        score: float,
        tests_passed: int,
        tests_total: int,
    ) -> None:
        pass

    def run_failed(
        self,
        eval_id: str,
        run_id: str,
        prompt_id: str,
        agent_id: str,
        reason: str,
    ) -> None:
        self._bump(agent_id, "failed", 1)

    def sandbox_left_running(
        self,
        eval_id: str,
        run_id: str,
        sandbox_name: str,
    ) -> None:
        pass

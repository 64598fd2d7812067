"""Aggregation and ranking over a set of run results."""

import statistics

from anode_eval.evaluation.domain.run import EvalRunResult, RunStatus
from anode_eval.evaluation.domain.scores import AgentScore, DetailedScore, EvalSummary
from anode_eval.sandbox.domain.status import TIMEOUT_REASON

PASS_RATE_WEIGHT = 0.7
COMPLETION_WEIGHT = 0.2
CONSISTENCY_WEIGHT = 0.1


def _percent(part: int, whole: int) -> float:
    return part / whole * 100.0 if whole else 0.0


def compute_agent_scores(runs: list[EvalRunResult]) -> list[AgentScore]:
    """Group runs by agent_id and rank the agents.

    Only completed runs contribute test counts; failed and timed-out runs
    count as failed runs. Agents are ordered by average score, best first,
    with ties broken by agent_id ascending. Ranks are 1..n in that order.
    """
    groups: dict[str, list[EvalRunResult]] = {}
    for run in runs:
        groups.setdefault(run.agent_id, []).append(run)

    unranked: list[AgentScore] = []
    for agent_id, agent_runs in groups.items():
        first = agent_runs[0]
        completed = [r for r in agent_runs if r.status is RunStatus.COMPLETED]
        total_tests = sum(r.test_results.total for r in completed if r.test_results)
        passed_tests = sum(r.test_results.passed for r in completed if r.test_results)
        unranked.append(
            AgentScore(
                agent_id=agent_id,
                agent_tool=first.agent_tool,
                model=first.model,
                total_runs=len(agent_runs),
                completed_runs=len(completed),
                failed_runs=sum(
                    1
                    for r in agent_runs
                    if r.status in (RunStatus.FAILED, RunStatus.TIMEOUT)
                ),
                total_tests=total_tests,
                passed_tests=passed_tests,
                average_score=_percent(passed_tests, total_tests),
                runs=[r.run_id for r in agent_runs],
            )
        )

    ordered = sorted(unranked, key=lambda s: (-s.average_score, s.agent_id))
    return [
        score.model_copy(update={"rank": rank})
        for rank, score in enumerate(ordered, start=1)
    ]


def is_timed_out(run: EvalRunResult) -> bool:
    return run.status is RunStatus.TIMEOUT or (
        run.status is RunStatus.FAILED and run.error == TIMEOUT_REASON
    )


def summarize(runs: list[EvalRunResult], scores: list[AgentScore]) -> EvalSummary:
    """Whole-evaluation counts; ``timed_out`` is a subset of ``failed``.

    *scores* must be ranked; best and worst are its first and last entries.
    """
    total_tests = sum(s.total_tests for s in scores)
    passed_tests = sum(s.passed_tests for s in scores)
    return EvalSummary(
        total_combinations=len(runs),
        completed=sum(1 for r in runs if r.status is RunStatus.COMPLETED),
        failed=sum(1 for r in runs if r.status in (RunStatus.FAILED, RunStatus.TIMEOUT)),
        timed_out=sum(1 for r in runs if is_timed_out(r)),
        total_tests=total_tests,
        passed_tests=passed_tests,
        overall_pass_rate=_percent(passed_tests, total_tests),
        best_agent=scores[0].agent_id if scores else None,
        worst_agent=scores[-1].agent_id if scores else None,
    )


def weighted_score(pass_rate: float, completion_rate: float, consistency: float) -> float:
    return (
        pass_rate * PASS_RATE_WEIGHT
        + completion_rate * COMPLETION_WEIGHT
        + consistency * CONSISTENCY_WEIGHT
    )


def _consistency(scores: list[float]) -> float:
    """100 minus the population stddev of run scores, clamped to 0..100."""
    if len(scores) < 2:
        return 100.0
    return min(max(100.0 - statistics.pstdev(scores), 0.0), 100.0)


def compute_detailed_scores(
    runs: list[EvalRunResult], scores: list[AgentScore]
) -> list[DetailedScore]:
    """One DetailedScore per AgentScore, in ranking order."""
    by_agent: dict[str, list[EvalRunResult]] = {}
    for run in runs:
        by_agent.setdefault(run.agent_id, []).append(run)

    detailed: list[DetailedScore] = []
    for score in scores:
        agent_runs = by_agent.get(score.agent_id, [])
        durations = [
            r.duration_seconds
            for r in agent_runs
            if r.status.is_terminal and r.duration_seconds is not None
        ]
        completed_scores = [
            r.score
            for r in agent_runs
            if r.status is RunStatus.COMPLETED and r.score is not None
        ]
        completion_rate = _percent(score.completed_runs, score.total_runs)
        consistency = _consistency(completed_scores)
        detailed.append(
            DetailedScore(
                agent_id=score.agent_id,
                pass_rate=score.average_score,
                completion_rate=completion_rate,
                avg_run_time_seconds=statistics.mean(durations) if durations else 0.0,
                consistency=consistency,
                weighted_score=weighted_score(
                    score.average_score, completion_rate, consistency
                ),
            )
        )
    return detailed

"""Markdown report rendering for EvaluationResults."""

from anode_eval.evaluation.domain.results import EvaluationResults
from anode_eval.evaluation.domain.scoring import compute_detailed_scores


def generate_report(results: EvaluationResults) -> str:
    """Render *results* as a human-readable Markdown document."""
    summary = results.summary
    lines: list[str] = [
        f"# Evaluation Report: {results.name}",
        "",
        f"Evaluation ID: {results.eval_id}",
        f"Started: {results.started_at.isoformat()}",
    ]
    if results.completed_at is not None:
        lines.append(f"Completed: {results.completed_at.isoformat()}")
    lines += [
        "",
        "## Summary",
        "",
        f"- Total Combinations: {summary.total_combinations}",
        f"- Completed: {summary.completed}",
        f"- Failed: {summary.failed}",
        f"- Timed Out: {summary.timed_out}",
        f"- Total Tests: {summary.total_tests}",
        f"- Passed Tests: {summary.passed_tests}",
        f"- Overall Pass Rate: {summary.overall_pass_rate:.2f}%",
        "",
        "## Agent Rankings",
        "",
        "| Rank | Agent | Model | Score | Tests Passed | Runs |",
        "|------|-------|-------|-------|--------------|------|",
    ]
    for score in results.agent_scores:
        lines.append(
            f"| {score.rank} | {score.agent_tool} | {score.model}"
            f" | {score.average_score:.2f}% | {score.passed_tests}/{score.total_tests}"
            f" | {score.completed_runs}/{score.total_runs} |"
        )

    detailed = compute_detailed_scores(results.runs, results.agent_scores)
    if detailed:
        lines += [
            "",
            "## Detailed Scores",
            "",
            "| Agent | Pass Rate | Completion | Consistency | Avg Run Time | Weighted |",
            "|-------|-----------|------------|-------------|--------------|----------|",
        ]
        for d in detailed:
            lines.append(
                f"| {d.agent_id} | {d.pass_rate:.2f}% | {d.completion_rate:.2f}%"
                f" | {d.consistency:.2f} | {d.avg_run_time_seconds:.1f}s"
                f" | {d.weighted_score:.2f} |"
            )

    lines += ["", "## Individual Run Results", ""]
    for run in results.runs:
        lines.append(f"### {run.prompt_id} - {run.agent_id}")
        lines.append(f"- Status: {run.status.value.title()}")
        if run.score is not None:
            lines.append(f"- Score: {run.score:.2f}%")
        if run.test_results is not None:
            lines.append(
                f"- Tests: {run.test_results.passed}/{run.test_results.total} passed"
            )
        if run.error is not None:
            lines.append(f"- Error: {run.error}")
        lines.append("")

    return "\n".join(lines) + "\n"

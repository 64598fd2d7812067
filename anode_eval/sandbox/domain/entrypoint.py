"""Bash entrypoint executed inside every sandbox.

The script is a contract with the result extractor: whatever the agent
does, the harness output is printed between ``TEST_OUTPUT_START`` and
``TEST_OUTPUT_END`` and followed by one ``EVAL_STATUS`` line.
"""

import shlex

from anode_eval.harness.domain.extractor import (
    STATUS_RECORD_PREFIX,
    STATUS_RECORD_VERSION,
    TEST_OUTPUT_END,
    TEST_OUTPUT_START,
)
from anode_eval.sandbox.domain.job import JobSpec


def build_entrypoint_script(job: JobSpec) -> str:
    tool = job.agent.tool
    run_command = tool.invocation(
        model=job.agent.resolved_model,
        iterations=job.iterations,
        prompt=job.prompt,
    )
    if job.git_repo:
        clone = f'git clone {shlex.quote(job.git_repo)} "$WORKSPACE_DIR"'
    else:
        clone = "echo 'No git repo specified'"
    setup = "\n".join(job.setup_commands) if job.setup_commands else "echo 'No setup commands'"
    test_line = job.test_line()
    announce = shlex.quote(f"Running: {test_line}")

    return f"""#!/bin/bash
set -e

echo "=== ANODE-EVAL Agent Runner ==="
echo "Run ID: $RUN_ID"
echo "Agent: $AGENT_TOOL"
echo "Model: $MODEL"
echo "Iterations: $ITERATIONS"
echo "Timeout: $TIMEOUT_HOURS hours"
echo ""

mkdir -p "$RESULTS_DIR"
echo "starting" > "$RESULTS_DIR/status"

if ! command -v {tool.cli_command} >/dev/null 2>&1; then
    echo "Installing agent CLI..."
    {tool.install_command} || {{ echo "failed" > "$RESULTS_DIR/status"; exit 1; }}
    echo "Agent CLI installed successfully"
fi

echo "Setting up workspace..."
{clone}
cd "$WORKSPACE_DIR"

echo "Running setup commands..."
{setup}

touch "$RESULTS_DIR/heartbeat"
echo "Starting agent..."
echo "running" > "$RESULTS_DIR/status"

(while true; do touch "$RESULTS_DIR/heartbeat"; sleep 30; done) &
HEARTBEAT_PID=$!

set +e
{run_command} 2>&1 | tee "$RESULTS_DIR/agent_output.log"
AGENT_EXIT_CODE=${{PIPESTATUS[0]}}
set -e

kill $HEARTBEAT_PID 2>/dev/null || true

if [ $AGENT_EXIT_CODE -eq 0 ]; then
    echo "agent_completed" > "$RESULTS_DIR/status"
    echo "Agent completed successfully"
else
    echo "agent_failed" > "$RESULTS_DIR/status"
    echo "Agent failed with exit code $AGENT_EXIT_CODE"
fi
echo $AGENT_EXIT_CODE > "$RESULTS_DIR/agent_exit_code"
echo "=== Agent run complete ==="

echo ""
echo "=== ANODE-EVAL Test Runner ==="
echo {announce}
TEST_EXIT_CODE=0
echo "{TEST_OUTPUT_START}"
{test_line} 2>&1 || TEST_EXIT_CODE=$?
echo "{TEST_OUTPUT_END}"

STATUS_RECORD="{{\\"version\\":{STATUS_RECORD_VERSION},\\"agent_exit_code\\":$AGENT_EXIT_CODE,\\"test_exit_code\\":$TEST_EXIT_CODE}}"
echo "$STATUS_RECORD" > "$RESULTS_DIR/status.json"
echo "{STATUS_RECORD_PREFIX}$STATUS_RECORD"
echo "=== Test run complete ==="
"""

"""Harness output parsers: one pure function per test harness grammar."""

import json
import re
from typing import Any, assert_never

from anode_eval.config.domain.harness import (
    CargoHarness,
    CustomHarness,
    GoHarness,
    Harness,
    NpmHarness,
    PytestHarness,
)
from anode_eval.harness.domain.errors import HarnessParseError
from anode_eval.harness.domain.result import TestCaseResult, TestSuiteResult

_NUMBER = re.compile(r"\d+")


def parse_test_output(harness: Harness, output: str) -> TestSuiteResult:
    """Parse *output* with the grammar that matches *harness*.

    Raises:
        HarnessParseError: if the output contradicts itself.
    """
    match harness:
        case CargoHarness():
            return parse_cargo_test_output(output)
        case PytestHarness():
            return parse_pytest_output(output)
        case GoHarness():
            return parse_go_test_output(output)
        case NpmHarness() | CustomHarness():
            return parse_generic_test_output(output)
        case _:
            assert_never(harness)


def parse_cargo_test_output(output: str) -> TestSuiteResult:
    """Parse libtest JSON events, falling back to the plain-text format.

    Only ``ok``/``failed`` events become test cases; ``ignored`` events count
    as skipped. When no such event is found the output is re-read as the
    ``test name ... ok`` text that stable toolchains print.

    Raises:
        HarnessParseError: if an event reports a negative ``exec_time``.
    """
    tests: list[TestCaseResult] = []
    skipped = 0

    for line in output.splitlines():
        event = _json_test_event(line)
        if event is None:
            continue
        kind = event.get("event")
        if kind == "ignored":
            skipped += 1
            continue
        if kind not in ("ok", "failed"):
            continue

        passed = kind == "ok"
        stdout = event.get("stdout") if isinstance(event.get("stdout"), str) else None
        exec_time = event.get("exec_time")
        if isinstance(exec_time, int | float) and exec_time < 0:
            raise HarnessParseError(
                harness="cargo",
                reason=f"test '{event['name']}' reports negative exec_time {exec_time}",
            )
        tests.append(
            TestCaseResult(
                name=event["name"],
                passed=passed,
                duration_ms=int(exec_time * 1000)
                if isinstance(exec_time, int | float)
                else None,
                error=None if passed else stdout,
                stdout=stdout,
            )
        )

    if not tests and skipped == 0:
        return _parse_cargo_plain(output)

    return _suite(tests=tests, skipped=skipped, output=output)


def _json_test_event(line: str) -> dict[str, Any] | None:
    try:
        event = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(event, dict) or event.get("type") != "test":
        return None
    if not isinstance(event.get("name"), str):
        return None
    return event


def _parse_cargo_plain(output: str) -> TestSuiteResult:
    tests: list[TestCaseResult] = []
    for line in output.splitlines():
        if not line.startswith("test "):
            continue
        if " ... ok" in line:
            passed = True
        elif " ... FAILED" in line:
            passed = False
        else:
            continue
        name = line.removeprefix("test ").split(" ... ", 1)[0]
        tests.append(TestCaseResult(name=name, passed=passed))
    return _suite(tests=tests, skipped=0, output=output)


def parse_pytest_output(output: str) -> TestSuiteResult:
    """Parse ``pytest -v`` lines.

    The case name is the last ``::`` segment up to its first whitespace.
    SKIPPED lines are counted but do not produce a case.
    """
    tests: list[TestCaseResult] = []
    skipped = 0

    for line in output.splitlines():
        if "PASSED" in line:
            tests.append(TestCaseResult(name=_pytest_name(line), passed=True))
        elif "FAILED" in line:
            tests.append(
                TestCaseResult(
                    name=_pytest_name(line), passed=False, error="Test failed"
                )
            )
        elif "SKIPPED" in line:
            skipped += 1

    return _suite(tests=tests, skipped=skipped, output=output)


def _pytest_name(line: str) -> str:
    segment = line.split("::")[-1].strip()
    tokens = segment.split()
    return tokens[0] if tokens else segment


def parse_go_test_output(output: str) -> TestSuiteResult:
    """Parse ``go test -v`` result lines (``--- PASS:``, ``--- FAIL:``, ``--- SKIP:``)."""
    tests: list[TestCaseResult] = []
    skipped = 0

    for line in output.splitlines():
        if line.startswith("--- PASS:"):
            tests.append(
                TestCaseResult(name=_go_name(line, "--- PASS:"), passed=True)
            )
        elif line.startswith("--- FAIL:"):
            tests.append(
                TestCaseResult(
                    name=_go_name(line, "--- FAIL:"),
                    passed=False,
                    error="Test failed",
                )
            )
        elif line.startswith("--- SKIP:"):
            skipped += 1

    return _suite(tests=tests, skipped=skipped, output=output)


def _go_name(line: str, prefix: str) -> str:
    tokens = line.removeprefix(prefix).split()
    return tokens[0] if tokens else "unknown"


def parse_generic_test_output(output: str) -> TestSuiteResult:
    """Recover summary counts from the first line that looks like a test summary.

    Recognises ``X passed, Y failed`` (any case) and ``Tests: X, Y[, Z]``
    where the optional third number is the total. A missing total, or one
    smaller than passed plus failed, is replaced by that sum. Produces no
    test cases; when nothing matches every count is zero.
    """
    for line in output.splitlines():
        lowered = line.lower()
        numbers = [int(n) for n in _NUMBER.findall(line)]

        if "passed" in lowered and "failed" in lowered and len(numbers) >= 2:
            passed, failed = numbers[0], numbers[1]
            return TestSuiteResult(
                total=passed + failed,
                passed=passed,
                failed=failed,
                raw_output=output,
            )

        if "tests:" in lowered and numbers:
            passed = numbers[0]
            failed = numbers[1] if len(numbers) > 1 else 0
            total = numbers[2] if len(numbers) > 2 else 0
            return TestSuiteResult(
                total=max(total, passed + failed),
                passed=passed,
                failed=failed,
                raw_output=output,
            )

    return TestSuiteResult(raw_output=output)


def _suite(tests: list[TestCaseResult], skipped: int, output: str) -> TestSuiteResult:
    passed = sum(1 for t in tests if t.passed)
    return TestSuiteResult(
        total=len(tests) + skipped,
        passed=passed,
        failed=len(tests) - passed,
        skipped=skipped,
        tests=tests,
        raw_output=output,
    )

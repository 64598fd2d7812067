"""Pull delimited sections out of raw combined sandbox logs."""

import json

from pydantic import BaseModel, ConfigDict, ValidationError

TEST_OUTPUT_START = "TEST_OUTPUT_START"
TEST_OUTPUT_END = "TEST_OUTPUT_END"
STATUS_RECORD_PREFIX = "EVAL_STATUS "
STATUS_RECORD_VERSION = 1


def extract_between(text: str, start: str, end: str) -> str | None:
    """Return the trimmed text strictly between *start* and the first *end* after it.

    Returns None when *start* is absent or *end* does not occur after it.
    """
    start_idx = text.find(start)
    if start_idx == -1:
        return None
    after_start = start_idx + len(start)
    end_idx = text.find(end, after_start)
    if end_idx == -1:
        return None
    return text[after_start:end_idx].strip()


def extract_test_output(logs: str) -> str | None:
    """Return the harness output the sandbox entrypoint wrapped in markers."""
    return extract_between(logs, TEST_OUTPUT_START, TEST_OUTPUT_END)


class SandboxStatusRecord(BaseModel):
    """Versioned completion record the entrypoint prints after the test run."""

    model_config = ConfigDict(frozen=True)

    version: int
    agent_exit_code: int
    test_exit_code: int | None = None


def extract_status_record(logs: str) -> SandboxStatusRecord | None:
    """Return the last well-formed status record in *logs*, if any.

    Records with an unknown version or invalid JSON are ignored so that an
    older or newer sandbox image never breaks result collection.
    """
    for line in reversed(logs.splitlines()):
        if not line.startswith(STATUS_RECORD_PREFIX):
            continue
        payload = line.removeprefix(STATUS_RECORD_PREFIX)
        try:
            record = SandboxStatusRecord.model_validate(json.loads(payload))
        except (json.JSONDecodeError, ValidationError):
            continue
        if record.version == STATUS_RECORD_VERSION:
            return record
    return None

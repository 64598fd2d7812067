"""Tests for marker and status-record extraction from sandbox logs."""

from anode_eval.harness.domain.extractor import (
    extract_between,
    extract_status_record,
    extract_test_output,
)


class TestExtractBetween:
    def test_returns_trimmed_section(self) -> None:
        assert extract_between("a START  hello \n END b", "START", "END") == "hello"

    def test_missing_start_returns_none(self) -> None:
        assert extract_between("hello END", "START", "END") is None

    def test_missing_end_returns_none(self) -> None:
        assert extract_between("START hello", "START", "END") is None

    def test_end_before_start_returns_none(self) -> None:
        assert extract_between("END x START y", "START", "END") is None

    def test_uses_first_end_after_start(self) -> None:
        assert extract_between("START a END b END", "START", "END") == "a"

    def test_empty_section(self) -> None:
        assert extract_between("STARTEND", "START", "END") == ""


class TestExtractTestOutput:
    def test_extracts_marked_output(self) -> None:
        logs = (
            "agent chatter\n"
            "TEST_OUTPUT_START\n"
            "test it_works ... ok\n"
            "TEST_OUTPUT_END\n"
            "trailing\n"
        )
        assert extract_test_output(logs) == "test it_works ... ok"

    def test_no_markers(self) -> None:
        assert extract_test_output("Agent completed successfully\n") is None


class TestExtractStatusRecord:
    def test_parses_record(self) -> None:
        logs = 'noise\nEVAL_STATUS {"version":1,"agent_exit_code":3,"test_exit_code":101}\n'

        record = extract_status_record(logs)

        assert record is not None
        assert record.agent_exit_code == 3
        assert record.test_exit_code == 101

    def test_last_record_wins(self) -> None:
        logs = (
            'EVAL_STATUS {"version":1,"agent_exit_code":1}\n'
            'EVAL_STATUS {"version":1,"agent_exit_code":0}\n'
        )

        record = extract_status_record(logs)

        assert record is not None
        assert record.agent_exit_code == 0
        assert record.test_exit_code is None

    def test_unknown_version_is_ignored(self) -> None:
        logs = 'EVAL_STATUS {"version":2,"agent_exit_code":0}\n'
        assert extract_status_record(logs) is None

    def test_invalid_json_falls_back_to_earlier_record(self) -> None:
        logs = (
            'EVAL_STATUS {"version":1,"agent_exit_code":4}\n'
            "EVAL_STATUS {not json\n"
        )

        record = extract_status_record(logs)

        assert record is not None
        assert record.agent_exit_code == 4

    def test_missing_field_is_ignored(self) -> None:
        assert extract_status_record('EVAL_STATUS {"version":1}\n') is None

    def test_no_record(self) -> None:
        assert extract_status_record("nothing here") is None

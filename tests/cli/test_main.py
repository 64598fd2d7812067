"""Tests for the anode-eval typer commands."""

from pathlib import Path

from typer.testing import CliRunner

from anode_eval.cli.main import app
from anode_eval.config.domain.sample import sample_config
from anode_eval.config.infrastructure.yaml_loader import YamlConfigLoader
from anode_eval.storage.infrastructure.json_store import save_results
from tests.config.fake_observer import FakeConfigObserver
from tests.storage.results_factory import make_results

FIXTURES = Path(__file__).parent.parent / "fixtures"

runner = CliRunner()


class TestInitCommand:
    def test_writes_loadable_sample_config(self, tmp_path: Path) -> None:
        output = tmp_path / "eval-config.yaml"

        result = runner.invoke(app, ["init", "--output", str(output)])

        assert result.exit_code == 0
        assert f"Sample config written to {output}" in result.output
        loaded = YamlConfigLoader(observer=FakeConfigObserver()).load(output)
        assert loaded == sample_config()

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        output = tmp_path / "eval-config.yaml"
        output.write_text("keep me")

        result = runner.invoke(app, ["init", "--output", str(output)])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert output.read_text() == "keep me"

    def test_force_overwrites(self, tmp_path: Path) -> None:
        output = tmp_path / "eval-config.yaml"
        output.write_text("replace me")

        result = runner.invoke(app, ["init", "--output", str(output), "--force"])

        assert result.exit_code == 0
        assert "Sample Evaluation" in output.read_text()


class TestRunCommand:
    def test_dry_run_lists_every_combination(self) -> None:
        result = runner.invoke(
            app,
            ["run", str(FIXTURES / "valid_config.yaml"), "--dry-run", "-p", "2"],
        )

        assert result.exit_code == 0
        assert "Dry run: rust-kata-eval" in result.output
        assert "4 runs, at most 2 at a time" in result.output
        assert "fizzbuzz" in result.output
        assert "claude-code-claude-opus-4-5-20251101" in result.output
        assert "test='cargo test --features std'" in result.output
        assert "timeout=1.5h" in result.output

    def test_dry_run_applies_timeout_cap(self) -> None:
        result = runner.invoke(
            app,
            [
                "run",
                str(FIXTURES / "valid_config.yaml"),
                "--dry-run",
                "--timeout-hours",
                "1",
            ],
        )

        assert result.exit_code == 0
        assert "timeout=2h" not in result.output
        assert "timeout=1h" in result.output

    def test_missing_config_exits_with_error(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["run", str(tmp_path / "missing.yaml"), "--dry-run"])

        assert result.exit_code == 1
        assert "Failed to load config" in result.output

    def test_invalid_config_exits_with_error(self) -> None:
        result = runner.invoke(
            app, ["run", str(FIXTURES / "invalid_harness.yaml"), "--dry-run"]
        )

        assert result.exit_code == 1
        assert "Failed to validate config" in result.output

    def test_rejects_unknown_log_format(self) -> None:
        result = runner.invoke(
            app,
            ["run", str(FIXTURES / "valid_config.yaml"), "--dry-run", "--log-format", "xml"],
        )

        assert result.exit_code == 1
        assert "Invalid log format" in result.output

    def test_rejects_zero_parallelism(self) -> None:
        result = runner.invoke(
            app, ["run", str(FIXTURES / "valid_config.yaml"), "--dry-run", "-p", "0"]
        )

        assert result.exit_code != 0


class TestReportCommand:
    def test_prints_report(self, tmp_path: Path) -> None:
        json_path, _ = save_results(make_results(), tmp_path)

        result = runner.invoke(app, ["report", str(json_path)])

        assert result.exit_code == 0
        assert result.output.startswith("# Evaluation Report: katas")

    def test_writes_report_to_file(self, tmp_path: Path) -> None:
        json_path, _ = save_results(make_results(), tmp_path)
        output = tmp_path / "again.md"

        result = runner.invoke(app, ["report", str(json_path), "--output", str(output)])

        assert result.exit_code == 0
        assert output.read_text().startswith("# Evaluation Report: katas")

    def test_missing_results_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["report", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "Failed to load results" in result.output

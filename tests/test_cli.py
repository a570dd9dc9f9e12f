# tests/test_cli.py
"""Tests for the AUTOPROMPT CLI."""

from __future__ import annotations

import json

import pytest
import yaml
from click.testing import CliRunner

NUMBERED = "1. Build a login page\n2. Build a signup page\n3. Build a dashboard page"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestRootGroup:
    def test_version(self, runner):
        from autoprompt import __version__
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("extract", "optimize", "analyze", "queue", "usage", "config"):
            assert name in result.output

    def test_subcommand_writes_session_log(self, runner, isolated_home):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["extract", "--text", NUMBERED, "--json"])
        assert result.exit_code == 0, result.output
        assert list((isolated_home / "logs").glob("autoprompt_*.log"))


class TestExtractCommand:
    def test_text_json_output(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["extract", "--text", NUMBERED, "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [p["content"] for p in data["prompts"]] == [
            "Build a login page",
            "Build a signup page",
            "Build a dashboard page",
        ]
        assert data["_autoprompt"]["pipeline"] == "extract"
        assert data["report"]["prompt_count"] == 3

    def test_document_table_output(self, runner, tmp_path):
        from autoprompt.cli import cli

        doc = tmp_path / "ideas.md"
        doc.write_text("Write a story about a dragon.\n\n\nWrite a poem about the sea.", encoding="utf-8")
        result = runner.invoke(cli, ["extract", "--document", str(doc)])
        assert result.exit_code == 0, result.output
        assert "Write a story about a dragon." in result.output
        assert "2 prompts" in result.output

    def test_stdin(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["extract", "--document", "-", "--json"], input=NUMBERED)
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)["prompts"]) == 3

    def test_stdin_is_read_as_utf8(self, runner):
        from autoprompt.cli import cli

        text = "Écris une histoire sur un dragon.\n\n\nÉcris un poème sur la mer."
        result = runner.invoke(cli, ["extract", "--json"], input=text.encode("utf-8"))
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["prompts"][0]["content"] == "Écris une histoire sur un dragon."
        assert data["_autoprompt"]["document"]["source"] == "<stdin>"

    def test_unknown_platform_is_rejected(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["extract", "--text", NUMBERED, "--platform", "notepad.exe"])
        assert result.exit_code == 2
        assert "notepad.exe" in result.output

    def test_empty_input_reports_nothing_found(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["extract", "--text", "Short"])
        assert result.exit_code == 0
        assert "No prompts found" in result.output

    def test_conflicting_sources(self, runner, tmp_path):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["extract", "--text", "x", "--dir", str(tmp_path)])
        assert result.exit_code != 0
        assert "only one of" in result.output

    def test_unsupported_document(self, runner, tmp_path):
        from autoprompt.cli import cli

        doc = tmp_path / "scan.pdf"
        doc.write_bytes(b"%PDF")
        result = runner.invoke(cli, ["extract", "--document", str(doc)])
        assert result.exit_code == 1
        assert "Unsupported file type" in result.output

    def test_optimize_and_tailor(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(
            cli,
            ["extract", "--text", "a landing page for my bakery", "--optimize", "--tailor",
             "--platform", "bolt.new", "--json"],
        )
        assert result.exit_code == 0, result.output
        prompt = json.loads(result.output)["prompts"][0]
        assert prompt["content"].startswith("Please a landing page for my bakery\n\n")
        assert prompt["content"].endswith("production-ready.")
        assert prompt["original_prompt"] == "a landing page for my bakery"

    def test_dedupe(self, runner):
        from autoprompt.cli import cli

        text = "1. Build a login page\n2. Build a login page!\n3. Build a dashboard page"
        result = runner.invoke(cli, ["extract", "--text", text, "--dedupe", "--json"])
        data = json.loads(result.output)
        assert [p["position"] for p in data["prompts"]] == [0, 1]

    def test_yaml_output_file(self, runner, tmp_path):
        from autoprompt.cli import cli

        out = tmp_path / "out.yaml"
        result = runner.invoke(cli, ["extract", "--text", NUMBERED, "-o", str(out)])
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(out.read_text(encoding="utf-8"))
        assert len(data["prompts"]) == 3

    def test_output_without_suffix_is_json(self, runner, tmp_path):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["extract", "--text", NUMBERED, "-o", str(tmp_path / "result")])
        assert result.exit_code == 0, result.output
        assert json.loads((tmp_path / "result.json").read_text())["platform"] == "lovable.dev"

    def test_truncation(self, runner, tmp_path, monkeypatch):
        from autoprompt.cli import cli

        monkeypatch.setenv("AUTOPROMPT_CHARACTER_LIMIT", "40")
        out = tmp_path / "out.json"
        result = runner.invoke(cli, ["extract", "--text", NUMBERED, "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "truncated" in result.output
        data = json.loads(out.read_text())
        assert data["_autoprompt"]["document"]["truncated"] is True
        assert data["_autoprompt"]["document"]["characters"] == 40

    def test_quota_is_recorded(self, runner, isolated_home):
        from autoprompt.cli import cli

        runner.invoke(cli, ["extract", "--text", NUMBERED, "--json"])
        usage = json.loads((isolated_home / "usage.json").read_text())
        counters = next(iter(usage["periods"].values()))
        assert counters["batch_extraction_chars"] == len(NUMBERED)
        assert counters["batch_extractions_per_month"] == 1

    def test_quota_exceeded(self, runner, monkeypatch):
        from autoprompt.cli import cli

        monkeypatch.setenv("AUTOPROMPT_QUOTA_BATCH_EXTRACTION_CHARS", "10")
        result = runner.invoke(cli, ["extract", "--text", NUMBERED])
        assert result.exit_code == 1
        assert "Usage limit reached" in result.output

    def test_quota_not_enforced(self, runner, monkeypatch, isolated_home):
        from autoprompt.cli import cli

        monkeypatch.setenv("AUTOPROMPT_QUOTA_BATCH_EXTRACTION_CHARS", "10")
        monkeypatch.setenv("AUTOPROMPT_ENFORCE_QUOTA", "false")
        result = runner.invoke(cli, ["extract", "--text", NUMBERED, "--json"])
        assert result.exit_code == 0, result.output
        assert not (isolated_home / "usage.json").exists()


class TestExtractBatch:
    def test_directory_batch_with_exports(self, runner, tmp_path):
        from autoprompt.cli import cli

        src = tmp_path / "docs"
        src.mkdir()
        (src / "a.txt").write_text(NUMBERED, encoding="utf-8")
        (src / "b.md").write_text("Write a story about a dragon.\n\n\nWrite a poem about the sea.", encoding="utf-8")
        out = tmp_path / "out"

        result = runner.invoke(
            cli,
            ["extract", "--dir", str(src), "--output-dir", str(out), "--format", "csv", "--format", "jsonl"],
        )
        assert result.exit_code == 0, result.output
        assert (out / "a.json").exists()
        assert (out / "b.json").exists()
        lines = (out / "prompts.jsonl").read_text(encoding="utf-8").strip().split("\n")
        assert len(lines) == 5
        assert (out / "prompts.csv").exists()
        assert "2/2 succeeded" in result.output

    def test_batch_resume(self, runner, tmp_path):
        from autoprompt.cli import cli

        src = tmp_path / "docs"
        src.mkdir()
        (src / "a.txt").write_text(NUMBERED, encoding="utf-8")
        out = tmp_path / "out"
        args = ["extract", "--dir", str(src), "--output-dir", str(out), "--resume"]

        assert runner.invoke(cli, args).exit_code == 0
        assert (out / ".checkpoints" / "resume.json").exists()
        result = runner.invoke(cli, args)
        assert result.exit_code == 0, result.output
        assert "1 skipped" in result.output

    def test_batch_quota_failure_is_per_file(self, runner, tmp_path, monkeypatch):
        from autoprompt.cli import cli

        monkeypatch.setenv("AUTOPROMPT_QUOTA_BATCH_EXTRACTION_CHARS", "10")
        src = tmp_path / "docs"
        src.mkdir()
        (src / "a.txt").write_text(NUMBERED, encoding="utf-8")
        result = runner.invoke(cli, ["extract", "--dir", str(src), "--output-dir", str(tmp_path / "out")])
        assert result.exit_code == 0, result.output
        assert "1 failed" in result.output

    def test_batch_queue(self, runner, tmp_path):
        from autoprompt.cli import cli
        from autoprompt.jobs import LocalExecutionQueue

        src = tmp_path / "docs"
        src.mkdir()
        (src / "a.txt").write_text(NUMBERED, encoding="utf-8")
        result = runner.invoke(
            cli, ["extract", "--dir", str(src), "--output-dir", str(tmp_path / "out"), "--queue", "cursor"]
        )
        assert result.exit_code == 0, result.output
        jobs = LocalExecutionQueue.from_config().list_jobs()
        assert len(jobs) == 3
        assert {j.batch_id for j in jobs} == {"docs"}

    def test_parallel_batch_respects_char_quota(self, runner, tmp_path, monkeypatch):
        from autoprompt.cli import cli
        from autoprompt.usage import UsageLedger

        monkeypatch.setenv("AUTOPROMPT_QUOTA_BATCH_EXTRACTION_CHARS", "100")
        src = tmp_path / "docs"
        src.mkdir()
        for i in range(4):
            (src / f"doc{i}.txt").write_text(NUMBERED, encoding="utf-8")
        result = runner.invoke(
            cli, ["extract", "--dir", str(src), "--output-dir", str(tmp_path / "out"), "--workers", "4"]
        )
        assert result.exit_code == 0, result.output
        assert "1/4 succeeded" in result.output
        assert "3 failed" in result.output
        assert "QuotaExceededError" in result.output
        assert "✗" in result.output
        assert UsageLedger.from_config().usage_for("batch_extraction_chars") == len(NUMBERED)
        assert len(list((tmp_path / "out").glob("doc*.json"))) == 1

    @pytest.mark.parametrize("flag", [["--json"], ["--output", "out.json"]])
    def test_single_file_outputs_rejected_with_dir(self, runner, tmp_path, flag):
        from autoprompt.cli import cli

        src = tmp_path / "docs"
        src.mkdir()
        (src / "a.txt").write_text(NUMBERED, encoding="utf-8")
        result = runner.invoke(cli, ["extract", "--dir", str(src), *flag])
        assert result.exit_code == 2
        assert "--output-dir" in result.output
        assert not (src / "autoprompt_output").exists()


class TestOptimizeCommand:
    def test_adds_please(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["optimize", "a landing page for my bakery"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[0] == "Please a landing page for my bakery"

    def test_counts_against_quota(self, runner, monkeypatch):
        from autoprompt.cli import cli

        monkeypatch.setenv("AUTOPROMPT_QUOTA_AI_OPTIMIZATIONS_PER_MONTH", "1")
        assert runner.invoke(cli, ["optimize", "build a form"]).exit_code == 0
        result = runner.invoke(cli, ["optimize", "build a form"])
        assert result.exit_code == 1
        assert "Usage limit reached" in result.output

    def test_platform_guidance_and_choices(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["optimize", "build a todo app", "--platform", "bolt.new"])
        assert result.exit_code == 0, result.output
        assert "production-ready." in result.output
        bad = runner.invoke(cli, ["optimize", "build a todo app", "--platform", "bolt"])
        assert bad.exit_code == 2

    def test_suggestions(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["optimize", "make something", "--suggest"])
        assert result.exit_code == 0
        assert "Be more specific" in result.output


class TestAnalyzeCommand:
    def test_json(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["analyze", "--text", NUMBERED, "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["analysis"]["estimated_prompt_count"] == 3
        assert data["report"]["prompt_count"] == 3

    def test_table(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["analyze", "--text", NUMBERED])
        assert result.exit_code == 0, result.output
        assert "EXTRACTION" in result.output


class TestQueueCommands:
    def _queue_one(self, runner):
        from autoprompt.cli import cli
        from autoprompt.jobs import LocalExecutionQueue

        runner.invoke(cli, ["extract", "--text", "Build a login page", "--queue", "cursor"])
        return LocalExecutionQueue.from_config().list_jobs()[0]

    def test_empty_list(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["queue", "list"])
        assert result.exit_code == 0
        assert "Queue is empty" in result.output

    def test_list_shows_job(self, runner):
        from autoprompt.cli import cli

        job = self._queue_one(runner)
        result = runner.invoke(cli, ["queue", "list"])
        assert result.exit_code == 0
        assert job.id in result.output
        assert "cursor" in result.output

    def test_run_next_completes(self, runner):
        from autoprompt.cli import cli
        from autoprompt.jobs import JobStatus, LocalExecutionQueue

        job = self._queue_one(runner)
        result = runner.invoke(cli, ["queue", "run-next"])
        assert result.exit_code == 0, result.output
        assert "Build a login page" in result.output
        assert LocalExecutionQueue.from_config().get(job.id).status is JobStatus.COMPLETED

    def test_run_next_fail_then_retry(self, runner):
        from autoprompt.cli import cli
        from autoprompt.jobs import JobStatus, LocalExecutionQueue

        job = self._queue_one(runner)
        runner.invoke(cli, ["queue", "run-next", "--fail", "tool offline"])
        assert LocalExecutionQueue.from_config().get(job.id).status is JobStatus.FAILED

        result = runner.invoke(cli, ["queue", "retry", job.id])
        assert result.exit_code == 0, result.output
        assert LocalExecutionQueue.from_config().get(job.id).status is JobStatus.PENDING

    def test_cancel_completed_is_rejected(self, runner):
        from autoprompt.cli import cli

        job = self._queue_one(runner)
        runner.invoke(cli, ["queue", "run-next"])
        result = runner.invoke(cli, ["queue", "cancel", job.id])
        assert result.exit_code == 1
        assert "cannot be cancelled" in result.output

    def test_remove_unknown(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["queue", "remove", "nope"])
        assert result.exit_code == 1
        assert "No queued job" in result.output

    def test_remove(self, runner):
        from autoprompt.cli import cli
        from autoprompt.jobs import LocalExecutionQueue

        job = self._queue_one(runner)
        assert runner.invoke(cli, ["queue", "remove", job.id]).exit_code == 0
        assert len(LocalExecutionQueue.from_config()) == 0


class TestUsageAndConfig:
    def test_usage_show(self, runner):
        from autoprompt.cli import cli

        runner.invoke(cli, ["extract", "--text", NUMBERED, "--json"])
        result = runner.invoke(cli, ["usage", "show"])
        assert result.exit_code == 0, result.output
        assert "batch_extraction_chars" in result.output

    def test_config_show(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert "character_limit" in result.output
        assert "lovable.dev" in result.output

    def test_config_set(self, runner, monkeypatch, isolated_home):
        from autoprompt.cli import cli
        from autoprompt.config import get_config

        monkeypatch.setenv("AUTOPROMPT_DEFAULT_PLATFORM", "lovable.dev")
        result = runner.invoke(cli, ["config", "set", "default_platform", "bolt.new"])
        assert result.exit_code == 0, result.output
        assert "AUTOPROMPT_DEFAULT_PLATFORM=bolt.new" in (isolated_home / ".env").read_text()
        assert get_config().default_platform == "bolt.new"

    def test_config_set_unknown_key(self, runner):
        from autoprompt.cli import cli

        result = runner.invoke(cli, ["config", "set", "bogus", "1"])
        assert result.exit_code == 1
        assert "Unknown config key" in result.output

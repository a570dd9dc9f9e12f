# autoprompt/cli.py
"""
AUTOPROMPT CLI -- Click commands with a Rich terminal UI.

Provides the ``autoprompt`` console entry-point declared in pyproject.toml as
``autoprompt.cli:cli``.  Commands call into the library modules:

- extract:  extract_prompts -- single document, --text, stdin, or batch via --dir
- optimize: optimize_prompt / optimize_for_platform on one prompt
- analyze:  analyze_text + validate_extraction report
- queue:    LocalExecutionQueue management (list, run-next, cancel, retry, remove)
- usage:    UsageLedger display
- config:   AutopromptConfig display and persistent updates
"""

from __future__ import annotations

import io
import json
import logging
import os
import re
import time
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

import click
import yaml
from rich.console import Console
from rich.markup import escape as _esc

from . import __version__
from . import cli_theme as theme
from .config import get_config
from .errors import AutopromptError
from .extraction.optimizer import PLATFORMS

console = Console()
logger = logging.getLogger(__name__)


def _print_version(
    ctx: click.Context,
    _param: click.Parameter,
    value: bool,
) -> None:
    if not value or ctx.resilient_parsing:
        return
    theme.print_version(__version__, console)
    ctx.exit()


# ---------------------------------------------------------------------------
# Styled Click help
# ---------------------------------------------------------------------------


def _render_styled_help(plain: str, width: int = 80) -> str:
    """Re-render Click help with the sakura/slate palette + 2-space indent."""
    buf = io.StringIO()
    rc = Console(file=buf, force_terminal=True, width=width + 4, highlight=False)
    section: str | None = None

    for line in plain.splitlines():
        stripped = line.strip()
        if not stripped:
            rc.print()
            continue

        if line == stripped:
            if stripped.startswith("Usage:"):
                rest = stripped[6:].strip()
                rc.print(
                    f"  [bold {theme.SAKURA}]Usage:[/bold {theme.SAKURA}]"
                    f" [{theme.SLATE}]{_esc(rest)}[/{theme.SLATE}]"
                )
                section = None
                continue

            bare = stripped.rstrip(":")
            if bare in ("Options", "Commands", "Arguments"):
                rc.print(f"  [bold {theme.SAKURA}]{stripped}[/bold {theme.SAKURA}]")
                section = bare.lower()
                continue

        if section == "commands":
            m = re.match(r"^(\s+)(\S+)(\s{2,})(.+)$", line)
            if m:
                ind, name, gap, desc = m.groups()
                rc.print(
                    f"  {ind}[bold {theme.SAKURA}]{_esc(name)}[/bold {theme.SAKURA}]"
                    f"{gap}[{theme.MUTED}]{_esc(desc)}[/{theme.MUTED}]"
                )
                continue

        if section == "options":
            m = re.match(r"^(\s+)(-.+?)(\s{2,})(.+)$", line)
            if m:
                ind, flags, gap, desc = m.groups()
                rc.print(
                    f"  {ind}[{theme.SLATE}]{_esc(flags)}[/{theme.SLATE}]"
                    f"{gap}[{theme.MUTED}]{_esc(desc)}[/{theme.MUTED}]"
                )
                continue

        if section:
            rc.print(f"  [{theme.MUTED}]{_esc(line)}[/{theme.MUTED}]")
        else:
            rc.print(f"  [{theme.MUTED}]{_esc(stripped)}[/{theme.MUTED}]")

    return buf.getvalue()


class AutopromptGroup(click.Group):
    """Click group with styled help output."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        if ctx.parent is None:
            theme.print_banner(__version__, console)
        tmp = click.HelpFormatter(width=formatter.width)
        super().format_help(ctx, tmp)
        formatter.write(_render_styled_help(tmp.getvalue(), formatter.width or 80))

    def group(self, *args, **kwargs):
        kwargs.setdefault("cls", AutopromptGroup)
        return super().group(*args, **kwargs)

    def command(self, *args, **kwargs):
        kwargs.setdefault("cls", AutopromptCommand)
        return super().command(*args, **kwargs)


class AutopromptCommand(click.Command):
    """Click command with styled help output."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        tmp = click.HelpFormatter(width=formatter.width)
        super().format_help(ctx, tmp)
        formatter.write(_render_styled_help(tmp.getvalue(), formatter.width or 80))


def _fail(exc: AutopromptError) -> click.ClickException:
    """Log the detailed error and return the user-facing ClickException."""
    logger.error("%s: %s", exc.category.value, exc)
    return click.ClickException(exc.user_message)


def _write_output(output: Path, data: dict[str, Any]) -> Path:
    """Write *data* as YAML for .yaml/.yml paths, JSON otherwise."""
    suffix = output.suffix.lower()
    if not suffix:
        output = output.with_suffix(".json")
    output.parent.mkdir(parents=True, exist_ok=True)
    if suffix in (".yaml", ".yml"):
        output.write_text(
            yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
    else:
        output.write_text(json.dumps(data, indent=2, default=str, ensure_ascii=False), encoding="utf-8")
    return output


# ---------------------------------------------------------------------------
# Main CLI group
# ---------------------------------------------------------------------------


@click.group(invoke_without_command=True, cls=AutopromptGroup)
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False), default=None, help="Session log level (default: AUTOPROMPT_LOG_LEVEL or INFO).")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """AUTOPROMPT -- extract, optimise, and queue prompts from freeform text."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return
    from .utils.logging import setup_logging

    setup_logging(level=log_level)


# ---------------------------------------------------------------------------
# extract
# ---------------------------------------------------------------------------


def _build_payload(
    text: str,
    *,
    platform: str,
    optimize: bool,
    tailor: bool,
    dedupe: bool,
    document: dict[str, Any],
) -> tuple[dict[str, Any], list]:
    """Run extraction plus optional post-processing; return (payload, prompts)."""
    from .envelope import build_envelope
    from .extraction import (
        extract_prompts,
        optimize_for_platform,
        optimize_prompt,
        remove_duplicates,
        validate_extraction,
    )
    from .extraction.extractor import total_tokens

    t0 = time.perf_counter()
    prompts = extract_prompts(text)
    if dedupe:
        prompts = remove_duplicates(prompts)
    if optimize:
        prompts = [p.with_content(optimize_prompt(p.content)) for p in prompts]
    if tailor:
        prompts = [p.with_content(optimize_for_platform(p.content, platform)) for p in prompts]
    duration = time.perf_counter() - t0

    report = validate_extraction(prompts)
    payload = {
        "platform": platform,
        "prompts": [p.to_dict() for p in prompts],
        "report": asdict(report),
        "_autoprompt": build_envelope(
            pipeline="extract",
            duration_s=round(duration, 4),
            tokens={"estimated": total_tokens(prompts)},
            document=document,
            quota={"batch_extraction_chars": len(text)},
        ),
    }
    return payload, prompts


def _read_source(document: Optional[Path], text: Optional[str]) -> tuple[str, str]:
    """Return (text, source label) for --text, --document, or stdin ('-')."""
    if text is not None:
        return text, "<text>"
    if document is None or str(document) == "-":
        with click.open_file("-", encoding="utf-8") as fh:
            return fh.read(), "<stdin>"

    from .documents.loader import load_document

    try:
        doc = load_document(document)
    except AutopromptError as exc:
        raise _fail(exc)
    if doc.decode_errors:
        console.print(theme.warn(f"{doc.name} is not valid UTF-8; undecodable bytes were replaced"))
    return doc.text, doc.name


def _truncate(text: str, limit: int) -> tuple[str, bool]:
    if len(text) <= limit:
        return text, False
    logger.warning("Input truncated from %d to %d characters", len(text), limit)
    return text[:limit], True


def _render_prompts(prompts: list, console: Console) -> None:
    t = theme.make_table()
    t.add_column("#", justify="right", style=theme.MUTED)
    t.add_column("Prompt")
    t.add_column("Tokens", justify="right")
    for p in prompts:
        preview = p.content if len(p.content) <= 120 else p.content[:117] + "..."
        t.add_row(str(p.position), _esc(preview), str(p.estimated_tokens))
    console.print(t)


def _queue_prompts(prompts: list, tool: str, batch_id: str, priority: int) -> int:
    from .jobs import LocalExecutionQueue

    queue = LocalExecutionQueue.from_config()
    for p in prompts:
        queue.queue_execution(tool, {"prompt": p.content, "position": p.position}, batch_id=batch_id, priority=priority)
    return len(prompts)


def _extract_batch(
    directory: Path,
    output_dir: Optional[Path],
    formats: tuple[str, ...],
    workers: Optional[int],
    resume: bool,
    queue_tool: Optional[str] = None,
    priority: int = 0,
    **options: Any,
) -> None:
    from .batch import BatchProcessor, discover_documents
    from .documents.loader import load_document
    from .export.tabular import export_rows, prompt_rows
    from .extraction.models import ExtractedPrompt
    from .usage import UsageLedger

    cfg = get_config()
    output_dir_path = output_dir or directory / "autoprompt_output"
    effective_formats = formats if formats else tuple(cfg.default_export_formats)

    processor = BatchProcessor(
        workers=workers or cfg.batch_workers,
        checkpoint_every=cfg.checkpoint_every,
        ledger=UsageLedger.from_config() if cfg.enforce_quota else None,
    )

    theme.section("Batch Extraction", console, "01")
    t = theme.make_kv_table()
    t.add_row("Input", str(directory))
    t.add_row("Output", str(output_dir_path))
    t.add_row("Workers", str(processor.workers))
    t.add_row("Formats", ", ".join(effective_formats))
    t.add_row("Resume", theme.badge("Yes") if resume else "No")
    console.print(t)

    def load_fn(path: Path) -> str:
        text, _ = _truncate(load_document(path).text, cfg.character_limit)
        return text

    def process_fn(text: str) -> dict[str, Any]:
        payload, _ = _build_payload(text, document={"characters": len(text)}, **options)
        return payload

    resume_id = "resume" if resume else None
    checkpoint_dir = output_dir_path / ".checkpoints" if resume else None

    with theme.progress(len(discover_documents(directory)), "documents", console) as advance:
        result = processor.process_directory(
            input_dir=directory,
            output_dir=output_dir_path,
            process_fn=process_fn,
            resume_id=resume_id,
            checkpoint_dir=checkpoint_dir,
            load_fn=load_fn,
            on_progress=lambda name, success: advance(),
        )

    console.print(theme.ok(
        f"Batch complete -- {result['succeeded']}/{result['total']} succeeded, {result['prompts']} prompts"
    ))
    if result["skipped"]:
        console.print(theme.info(f"{result['skipped']} skipped (already processed)"))
    if result["failed"]:
        console.print(theme.warn(f"{result['failed']} failed"))
        for err in result["errors"]:
            console.print(theme.err(f"{err['file']}: {_esc(err['error'])}"))

    rows: list[dict[str, Any]] = []
    all_prompts: list[ExtractedPrompt] = []
    for json_path in sorted(output_dir_path.glob("*.json")):
        data = json.loads(json_path.read_text(encoding="utf-8"))
        prompts = [ExtractedPrompt(**p) for p in data.get("prompts", [])]
        all_prompts.extend(prompts)
        rows.extend(prompt_rows(prompts, source=json_path.stem))

    for path in export_rows(rows, output_dir_path, "prompts", [f for f in effective_formats if f != "json"]):
        console.print(theme.ok(f"Exported {path}"))

    if queue_tool:
        n = _queue_prompts(all_prompts, queue_tool, directory.name, priority)
        console.print(theme.ok(f"Queued {n} prompts for {queue_tool}"))


@cli.command()
@click.option("--document", type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path), default=None, help="Text or Markdown file to extract from ('-' for stdin).")
@click.option("--text", type=str, default=None, help="Extract from this text instead of a file.")
@click.option("--dir", "directory", type=click.Path(exists=True, file_okay=False, path_type=Path), default=None, help="Directory of text files to process (batch mode).")
@click.option("--platform", type=click.Choice(PLATFORMS), default=None, help="Target platform (default: config default_platform).")
@click.option("--optimize", "do_optimize", is_flag=True, default=False, help="Rewrite each prompt with the rule-based optimizer.")
@click.option("--tailor", is_flag=True, default=False, help="Append platform-specific guidance to each prompt.")
@click.option("--dedupe", is_flag=True, default=False, help="Drop duplicate and near-duplicate prompts.")
@click.option("--queue", "queue_tool", type=str, default=None, help="Queue every extracted prompt for this local tool.")
@click.option("--priority", type=int, default=0, show_default=True, help="Priority for queued jobs.")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None, help="Save output to file (.json or .yaml/.yml).")
@click.option("--output-dir", type=click.Path(path_type=Path), default=None, help="Output directory for batch results (used with --dir).")
@click.option("--format", "formats", type=click.Choice(["json", "jsonl", "csv", "parquet"], case_sensitive=False), multiple=True, help="Export format(s) for batch results.")
@click.option("--workers", type=int, default=None, help="Parallel workers for batch processing.")
@click.option("--resume", is_flag=True, default=False, help="Resume batch processing from last checkpoint.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full result as JSON instead of a table.")
def extract(
    document: Optional[Path],
    text: Optional[str],
    directory: Optional[Path],
    platform: Optional[str],
    do_optimize: bool,
    tailor: bool,
    dedupe: bool,
    queue_tool: Optional[str],
    priority: int,
    output: Optional[Path],
    output_dir: Optional[Path],
    formats: tuple[str, ...],
    workers: Optional[int],
    resume: bool,
    as_json: bool,
) -> None:
    """Split text into discrete prompts.

    \b
    Examples:
      autoprompt extract --document notes.md
      autoprompt extract --text "1. Build a login page\\n2. Build a dashboard"
      cat chat.txt | autoprompt extract --document - --json
      autoprompt extract --dir batch/ --format csv --format jsonl
    """
    from .utils.logging import log_extraction_complete, log_extraction_start, log_text_content

    sources = [s for s in (document, text, directory) if s is not None]
    if len(sources) > 1:
        raise click.UsageError("Use only one of --document, --text, or --dir.")

    cfg = get_config()
    platform = platform or cfg.default_platform
    options = {
        "platform": platform,
        "optimize": do_optimize,
        "tailor": tailor,
        "dedupe": dedupe,
    }

    if directory is not None:
        if output is not None or as_json:
            raise click.UsageError("--output and --json cannot be used with --dir; use --output-dir.")
        _extract_batch(
            directory, output_dir, formats, workers, resume,
            queue_tool=queue_tool, priority=priority, **options,
        )
        return

    raw, source = _read_source(document, text)
    body, truncated = _truncate(raw, cfg.character_limit)
    if truncated:
        console.print(theme.warn(f"Input truncated to {cfg.character_limit:,} characters"))

    log_extraction_start(logger, source, len(body), platform)
    log_text_content(logger, source, body)

    ledger = None
    if cfg.enforce_quota:
        from .usage import UsageLedger

        ledger = UsageLedger.from_config()
        try:
            ledger.consume("batch_extraction_chars", len(body))
        except AutopromptError as exc:
            raise _fail(exc)

    payload, prompts = _build_payload(
        body, document={"source": source, "characters": len(body), "truncated": truncated}, **options
    )
    envelope = payload["_autoprompt"]
    log_extraction_complete(logger, source, len(prompts), envelope["tokens"]["estimated"], envelope["duration_s"])

    if ledger is not None:
        ledger.increment_usage("batch_extractions_per_month", 1)

    if queue_tool and prompts:
        n = _queue_prompts(prompts, queue_tool, source, priority)
        console.print(theme.ok(f"Queued {n} prompts for {queue_tool}"))

    if output is not None:
        saved = _write_output(output, payload)
        console.print(theme.ok(f"Saved to {saved}"))

    if as_json:
        click.echo(json.dumps(payload, indent=2, default=str, ensure_ascii=False))
        return

    theme.section("Extracted Prompts", console, "01")
    if not prompts:
        console.print(theme.warn("No prompts found"))
        return
    _render_prompts(prompts, console)
    report = payload["report"]
    console.print(theme.info(
        f"{len(prompts)} prompts · {envelope['tokens']['estimated']} estimated tokens · quality {report['overall_quality']}"
    ))
    for issue in report["issues"]:
        console.print(theme.warn(issue))


# ---------------------------------------------------------------------------
# optimize
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("prompt")
@click.option("--platform", type=click.Choice(PLATFORMS), default=None, help="Also append guidance for this platform.")
@click.option("--suggest", is_flag=True, default=False, help="Show improvement suggestions.")
def optimize(prompt: str, platform: Optional[str], suggest: bool) -> None:
    """Rewrite a single prompt with the rule-based optimizer.

    \b
    Examples:
      autoprompt optimize "a landing page for my bakery"
      autoprompt optimize "build a todo app" --platform bolt.new
    """
    from .extraction import generate_suggestions, optimize_for_platform, optimize_prompt

    if get_config().enforce_quota:
        from .usage import UsageLedger

        try:
            UsageLedger.from_config().consume("ai_optimizations_per_month")
        except AutopromptError as exc:
            raise _fail(exc)

    result = optimize_prompt(prompt)
    if platform:
        result = optimize_for_platform(result, platform)
    click.echo(result)

    if suggest:
        for hint in generate_suggestions(prompt):
            console.print(theme.info(hint))


# ---------------------------------------------------------------------------
# analyze
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--document", type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path), default=None, help="Text or Markdown file ('-' for stdin).")
@click.option("--text", type=str, default=None, help="Analyse this text instead of a file.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the analysis as JSON.")
def analyze(document: Optional[Path], text: Optional[str], as_json: bool) -> None:
    """Report text statistics and the expected extraction quality."""
    from .extraction import analyze_text, assess_prompt, extract_prompts, validate_extraction

    body, source = _read_source(document, text)
    analysis = analyze_text(body)
    prompts = extract_prompts(body)
    report = validate_extraction(prompts)

    if as_json:
        click.echo(json.dumps({"analysis": asdict(analysis), "report": asdict(report)}, indent=2))
        return

    theme.section("Text", console, "01")
    t = theme.make_kv_table()
    t.add_row("source", source)
    t.add_row("characters", f"{analysis.character_count:,}")
    t.add_row("words", f"{analysis.word_count:,}")
    t.add_row("paragraphs", str(analysis.paragraph_count))
    t.add_row("sentences", str(analysis.sentence_count))
    t.add_row("complexity", theme.badge(analysis.complexity.upper()))
    t.add_row("estimated prompts", str(analysis.estimated_prompt_count))
    console.print(t)

    theme.section("Extraction", console, "02")
    t = theme.make_kv_table()
    t.add_row("prompts", str(report.prompt_count))
    t.add_row("tokens", str(report.total_tokens))
    t.add_row("quality", f"{report.overall_quality} ({report.average_quality_score:.2f})")
    console.print(t)
    for issue in report.issues:
        console.print(theme.warn(issue))
    for rec in report.recommendations:
        console.print(theme.info(rec))

    weakest = sorted(((assess_prompt(p), p) for p in prompts), key=lambda pair: pair[0].score)[:3]
    if weakest:
        theme.section("Weakest Prompts", console, "03")
        for assessment, p in weakest:
            console.print(f"  [bold]#{p.position}[/bold] {_esc(p.content[:80])} [dim]({assessment.score:.2f})[/dim]")
            for hint in assessment.suggestions[:2]:
                console.print(theme.info(hint))


# ---------------------------------------------------------------------------
# queue (group)
# ---------------------------------------------------------------------------


@cli.group()
def queue() -> None:
    """Manage the local execution queue."""


@queue.command("list")
@click.option("--status", type=click.Choice(["pending", "running", "completed", "failed", "cancelled"]), default=None, help="Only show jobs in this status.")
def queue_list(status: Optional[str]) -> None:
    """List queued jobs, newest first."""
    from .jobs import LocalExecutionQueue

    q = LocalExecutionQueue.from_config()
    jobs = q.list_jobs(status)
    if not jobs:
        console.print(theme.info("Queue is empty"))
        return
    t = theme.make_table()
    t.add_column("ID", style=theme.MUTED, no_wrap=True)
    t.add_column("Tool")
    t.add_column("Status")
    t.add_column("Priority", justify="right")
    t.add_column("Batch")
    t.add_column("Error")
    for job in jobs:
        t.add_row(
            job.id,
            job.tool_target,
            theme.badge(job.status.value, job.status.value),
            str(job.priority),
            _esc(job.batch_id or ""),
            _esc(job.error_message or ""),
        )
    console.print(t)


@queue.command("run-next")
@click.option("--fail", "fail_message", type=str, default=None, help="Mark the job failed with this message instead of completed.")
def queue_run_next(fail_message: Optional[str]) -> None:
    """Claim the next pending job, print its data, and close it."""
    from .jobs import LocalExecutionQueue

    q = LocalExecutionQueue.from_config()
    job = q.next_pending()
    if job is None:
        console.print(theme.info("No pending jobs"))
        return
    try:
        q.start(job.id)
        click.echo(json.dumps(job.execution_data, indent=2, default=str, ensure_ascii=False))
        if fail_message:
            q.fail(job.id, fail_message)
            console.print(theme.warn(f"Job {job.id} failed"))
        else:
            q.complete(job.id)
            console.print(theme.ok(f"Job {job.id} completed"))
    except AutopromptError as exc:
        raise _fail(exc)


def _queue_action(action: str, job_id: str) -> None:
    from .jobs import LocalExecutionQueue

    q = LocalExecutionQueue.from_config()
    try:
        getattr(q, action)(job_id)
    except AutopromptError as exc:
        raise _fail(exc)


@queue.command("cancel")
@click.argument("job_id")
def queue_cancel(job_id: str) -> None:
    """Cancel a pending or running job."""
    _queue_action("cancel", job_id)
    console.print(theme.ok(f"Cancelled {job_id}"))


@queue.command("retry")
@click.argument("job_id")
def queue_retry(job_id: str) -> None:
    """Put a failed or cancelled job back to pending."""
    _queue_action("retry", job_id)
    console.print(theme.ok(f"Queued {job_id} for retry"))


@queue.command("remove")
@click.argument("job_id")
def queue_remove(job_id: str) -> None:
    """Delete a job from the queue."""
    _queue_action("delete", job_id)
    console.print(theme.ok(f"Removed {job_id}"))


# ---------------------------------------------------------------------------
# usage (group)
# ---------------------------------------------------------------------------


@cli.group()
def usage() -> None:
    """Inspect monthly usage quotas."""


@usage.command("show")
def usage_show() -> None:
    """Show this month's usage per quota type."""
    from .usage import UsageLedger

    ledger = UsageLedger.from_config()
    theme.section(f"Usage · {ledger.period}", console, "01", uppercase=False)
    t = theme.make_table()
    t.add_column("Quota")
    t.add_column("Used", justify="right")
    t.add_column("Limit", justify="right")
    t.add_column("Remaining", justify="right")
    for quota_type, row in ledger.snapshot().items():
        remaining = str(row["remaining"])
        if row["remaining"] == 0:
            remaining = theme.badge("0", "error")
        t.add_row(quota_type, f"{row['used']:,}", f"{row['limit']:,}", remaining)
    console.print(t)
    if not get_config().enforce_quota:
        console.print(theme.warn("Quota enforcement is disabled"))


# ---------------------------------------------------------------------------
# config (group)
# ---------------------------------------------------------------------------


@cli.group()
def config() -> None:
    """View and update AUTOPROMPT configuration."""


@config.command("show")
def config_show() -> None:
    """Show current configuration.

    \b
    Examples:
      autoprompt config show
    """
    cfg = get_config()
    dump = cfg.model_dump()

    theme.section("Extraction", console, "01")
    t = theme.make_kv_table()
    t.add_row("character_limit", f"{dump['character_limit']:,}")
    t.add_row("default_platform", dump["default_platform"])
    console.print(t)

    theme.section("Processing", console, "02")
    t = theme.make_kv_table()
    t.add_row("batch_workers", str(dump["batch_workers"]))
    t.add_row("checkpoint_every", str(dump["checkpoint_every"]))
    t.add_row("export_formats", ", ".join(dump["default_export_formats"]))
    console.print(t)

    theme.section("Quotas", console, "03")
    t = theme.make_kv_table()
    t.add_row("enforce_quota", str(dump["enforce_quota"]))
    for quota_type, limit in cfg.quota_limits.items():
        t.add_row(quota_type, f"{limit:,}")
    console.print(t)

    theme.section("Paths", console, "04")
    t = theme.make_kv_table()
    t.add_row("home_dir", str(dump["home_dir"]))
    t.add_row("log_dir", str(cfg.log_dir))
    t.add_row("checkpoint_dir", str(cfg.checkpoint_dir))
    t.add_row("queue_path", str(cfg.queue_path))
    t.add_row("usage_path", str(cfg.usage_path))
    console.print(t)
    console.print()


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set a configuration value persistently.

    Writes to <home_dir>/.env which is loaded on startup.
    Also sets the value in the current process environment.

    \b
    Examples:
      autoprompt config set default_platform bolt.new
      autoprompt config set quota_batch_extraction_chars 1000000
    """
    cfg = get_config()
    env_var = f"AUTOPROMPT_{key.upper()}"

    known_fields = set(type(cfg).model_fields.keys())
    if key.lower() not in known_fields:
        raise click.ClickException(
            f"Unknown config key {key!r}. Known keys: {', '.join(sorted(known_fields))}"
        )

    env_file = cfg.home_dir / ".env"
    cfg.home_dir.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_file.exists():
        for line in env_file.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, _, v = line.partition("=")
                existing[k.strip()] = v.strip()

    existing[env_var] = value
    lines = [f"{k}={v}" for k, v in sorted(existing.items())]
    env_file.write_text("\n".join(lines) + "\n", encoding="utf-8")

    os.environ[env_var] = value
    get_config.cache_clear()

    console.print(theme.ok(f"Set {key} = {value}"))
    console.print(theme.info(f"Saved to {env_file}"))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

"""CLI entry point: python -m pageshape [FILE|-] --url URL [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from pageshape.engine import extract
from pageshape.items import ExtractedRecord
from pageshape.profiles import config_from_profile, load_profile
from pageshape.settings import DEFAULT_CONFIG
from pageshape.templates import default_registry

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pageshape",
        description=(
            "Extract structured fields and Markdown from a saved HTML page.\n"
            "Detects the page shape (product, article, recipe, ...) and falls back\n"
            "to readability and a generic heuristic when nothing matches."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", nargs="?", default="-", metavar="FILE",
                        help="HTML file to read, or '-' for stdin (default: -)")
    parser.add_argument("--url", default="", metavar="URL",
                        help="Source URL of the page (used for detection and links)")
    parser.add_argument("--template", default=None, metavar="NAME",
                        help="Use this template instead of auto-detection")
    parser.add_argument("--profile", default=None, metavar="YAML",
                        help="YAML profile with per-domain overrides")
    parser.add_argument("--format", choices=["markdown", "json"], default="markdown",
                        help="Output format (default: markdown)")
    parser.add_argument("--out", default=None, metavar="DIR",
                        help="Write the Markdown under DIR/<host>/<path>.md instead of stdout")
    parser.add_argument("--scores", action="store_true", default=False,
                        help="Print the per-template detection scores to stderr")
    parser.add_argument("--list-templates", action="store_true", default=False,
                        help="List the built-in templates and exit")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _print_templates(console: Console) -> None:
    tbl = Table(
        title="[bold cyan]Built-in templates[/bold cyan]",
        box=box.SIMPLE_HEAVY,
        show_lines=False,
    )
    tbl.add_column("#", style="dim", justify="right", width=3, no_wrap=True)
    tbl.add_column("Name", style="cyan", no_wrap=True)
    tbl.add_column("Fields", justify="right", width=6, no_wrap=True)
    tbl.add_column("Description", style="green")
    for i, template in enumerate(default_registry(), 1):
        tbl.add_row(str(i), template.name, str(len(template.schema)), template.description)
    console.print(tbl)


def _print_scores(console: Console, record: ExtractedRecord) -> None:
    tbl = Table(
        title=(
            f"[bold]{record.template}[/bold] via {record.stage} "
            f"(confidence {record.confidence:.2f})"
        ),
        box=box.SIMPLE_HEAVY,
    )
    tbl.add_column("Template", style="cyan", no_wrap=True)
    tbl.add_column("Score", justify="right", width=7, no_wrap=True)
    for name, score in sorted(record.scores.items(), key=lambda kv: kv[1], reverse=True):
        style = "bold green" if name == record.template else ""
        tbl.add_row(name, f"{score:.3f}", style=style)
    console.print(tbl)
    if record.errors:
        for name, message in record.errors.items():
            console.print(f"  [yellow]{name}[/yellow]: {message}")


def _read_html(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    stdout = Console()
    stderr = Console(stderr=True)

    if args.list_templates:
        _print_templates(stdout)
        return 0

    try:
        html = _read_html(args.file)
    except OSError as exc:
        print(f"ERROR: cannot read {args.file}: {exc}", file=sys.stderr)
        return 1

    config = DEFAULT_CONFIG
    template = args.template
    if args.profile:
        try:
            settings = config_from_profile(load_profile(args.profile, args.url))
        except (OSError, ValueError) as exc:
            print(f"ERROR: invalid profile {args.profile}: {exc}", file=sys.stderr)
            return 1
        config = settings.config
        template = template or settings.template

    record = extract(html, args.url, template=template, config=config)

    if args.scores:
        _print_scores(stderr, record)

    if args.format == "json":
        output = json.dumps(record.model_dump(), indent=2, ensure_ascii=False, default=str)
    else:
        output = record.content_markdown

    if args.out:
        publishable = record.to_publishable()
        target = Path(args.out) / publishable["path"]
        if args.format == "json":
            target = target.with_suffix(".json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(output if output.endswith("\n") else output + "\n", encoding="utf-8")
        stderr.print(f"Wrote [green]{target}[/green]")
        return 0

    sys.stdout.write(output if output.endswith("\n") else output + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

# structurizr_site/cli.py
from __future__ import annotations

import argparse
import logging
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .constants import PLANTUML_CMD_DEFAULT
from .errors import OutputPathCollisionError, WorkspaceParseError
from .io import load_workspace
from .log import configure_logging
from .model.context import GeneratorContext
from .site import generate_site
from .svg import PlantUmlSvgRenderer
from .validate import ValidateConfig, validate_workspace
from .workspace import Workspace

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_WARNINGS = 1
EXIT_FATAL = 2


@dataclass(frozen=True)
class SiteConfig:
    workspace: Path
    out_dir: Path
    plantuml: tuple[str, ...] = (PLANTUML_CMD_DEFAULT,)
    jobs: int = 1
    strict: bool = False
    site_title: str = ""
    verbose: bool = False
    ignore: frozenset[str] = frozenset()
    escalate: frozenset[str] = frozenset()
    warn_on_empty_views: bool = True


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def parse_args(argv: Optional[Sequence[str]] = None) -> SiteConfig:
    parser = argparse.ArgumentParser(
        prog="structurizr-site",
        description="Generate a static documentation site from a Structurizr workspace.",
    )
    parser.add_argument(
        "--workspace",
        "-w",
        type=Path,
        required=True,
        help="Structurizr workspace export (workspace.json / .yaml) or a directory holding one",
    )
    parser.add_argument(
        "--out-dir",
        "-o",
        type=Path,
        default=Path("build/site"),
        help="Output directory for the generated site",
    )
    parser.add_argument(
        "--plantuml",
        type=str,
        default=PLANTUML_CMD_DEFAULT,
        help="Command used to run PlantUML (e.g. 'java -jar plantuml.jar')",
    )
    parser.add_argument(
        "--jobs",
        "-j",
        type=_positive_int,
        default=1,
        help="Number of pages generated concurrently",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=(
            "Fail on validation warnings and exit non-zero when any page had to be "
            "replaced by a diagnostic placeholder. Errors always fail."
        ),
    )
    parser.add_argument(
        "--site-title",
        type=str,
        default="",
        help="Title shown in the page header (default: workspace name)",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="CODE",
        help="Drop validation issues with this code (repeatable)",
    )
    parser.add_argument(
        "--escalate",
        action="append",
        default=[],
        metavar="CODE",
        help="Treat the validation warning with this code as an error (repeatable)",
    )
    parser.add_argument(
        "--allow-empty-views",
        action="store_true",
        help="Do not warn about views that list no elements",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")

    args = parser.parse_args(argv)
    return SiteConfig(
        workspace=args.workspace,
        out_dir=args.out_dir,
        plantuml=tuple(shlex.split(args.plantuml)),
        jobs=args.jobs,
        strict=args.strict,
        site_title=args.site_title,
        verbose=args.verbose,
        ignore=frozenset(args.ignore),
        escalate=frozenset(args.escalate),
        warn_on_empty_views=not args.allow_empty_views,
    )


def run(cfg: SiteConfig) -> int:
    """Generate the site described by `cfg`; returns the process exit code."""
    try:
        data = load_workspace(cfg.workspace)
    except WorkspaceParseError as e:
        log.error("%s", e)
        return EXIT_FATAL

    validation = ValidateConfig(
        ignore=set(cfg.ignore),
        escalate=set(cfg.escalate),
        warn_on_empty_views=cfg.warn_on_empty_views,
    )
    errors, warnings = validate_workspace(data, validation)
    for warning in warnings:
        log.warning("%s", warning)

    if errors or (cfg.strict and warnings):
        for error in errors:
            log.error("%s", error)
        return EXIT_FATAL

    ctx = GeneratorContext(
        workspace=Workspace.from_dict(data),
        renderer=PlantUmlSvgRenderer(cfg.plantuml),
        site_title=cfg.site_title,
    )

    try:
        summary = generate_site(ctx, cfg.out_dir, jobs=cfg.jobs)
    except OutputPathCollisionError as e:
        log.error("%s", e)
        return EXIT_FATAL

    if summary.skipped:
        log.warning("%d page(s) replaced by a diagnostic placeholder:", len(summary.skipped))
        for skipped in summary.skipped:
            log.warning("  %s: %s", skipped.path, skipped.reason)

    if cfg.strict and summary.warning_count:
        return EXIT_WARNINGS
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    cfg = parse_args(argv)
    configure_logging(cfg.verbose)
    raise SystemExit(run(cfg))

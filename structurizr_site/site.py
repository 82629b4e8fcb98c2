# structurizr_site/site.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .assets import STYLESHEET_CSS
from .constants import STYLESHEET
from .errors import OutputPathCollisionError, RenderError
from .model.context import GeneratorContext
from .model.kinds import CONTAINER_PAGE_KINDS, SYSTEM_PAGE_KINDS, WORKSPACE_PAGE_KINDS, PageKind
from .model.pages import build_diagnostic_page, build_page
from .model.urls import output_path, page_url, puml_path
from .plantuml import export_view
from .views.pages import render_diagnostic_page, render_page
from .workspace import Element, ViewDefinition, Workspace
from .writer import OutputWriter

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageJob:
    kind: PageKind
    system: Optional[Element] = None
    container: Optional[Element] = None

    @property
    def path(self) -> str:
        return output_path(page_url(self.kind, self.system, self.container))

    @property
    def label(self) -> str:
        if self.system is None:
            return self.kind.name
        if self.container is not None:
            return f"{self.kind.name} of container {self.container.name!r} in {self.system.name!r}"
        return f"{self.kind.name} of software system {self.system.name!r}"


@dataclass(frozen=True)
class PageResult:
    job: PageJob
    html: str
    visible: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class SkippedPage:
    path: str
    reason: str


@dataclass
class GenerationSummary:
    pages: int = 0
    redirects: int = 0
    skipped: list[SkippedPage] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return len(self.skipped) + len(self.warnings)


def plan_pages(workspace: Workspace) -> list[PageJob]:
    """Every entity x page kind combination, in a stable order."""
    jobs = [PageJob(kind) for kind in WORKSPACE_PAGE_KINDS]
    for system in workspace.internal_software_systems:
        jobs.extend(PageJob(kind, system) for kind in SYSTEM_PAGE_KINDS)
        for container in workspace.containers_of(system):
            jobs.extend(PageJob(kind, system, container) for kind in CONTAINER_PAGE_KINDS)
    return jobs


def _preflight(jobs: list[PageJob], views: tuple[ViewDefinition, ...]) -> None:
    """Fail before anything is written when two outputs share a path."""
    seen: dict[str, str] = {STYLESHEET: "the stylesheet"}
    planned = [(job.path, job.label) for job in jobs]
    planned += [(puml_path(view.key), f"PlantUML source of view {view.key!r}") for view in views]
    for path, label in planned:
        if path in seen:
            raise OutputPathCollisionError(
                f"{label} and {seen[path]} both map to {path!r}; "
                "rename one of them"
            )
        seen[path] = label


def _generate_page(ctx: GeneratorContext, job: PageJob) -> PageResult:
    try:
        page = build_page(ctx, job.kind, job.system, job.container)
    except RenderError as e:
        placeholder = build_diagnostic_page(ctx, job.kind, job.system, job.container)
        return PageResult(job, render_diagnostic_page(placeholder, str(e)), visible=True, error=str(e))
    return PageResult(job, render_page(page), visible=page.visible)


def _write_puml_sources(ctx: GeneratorContext, writer: OutputWriter, summary: GenerationSummary) -> None:
    ws = ctx.workspace
    for view in ws.views:
        try:
            source = export_view(ws, view)
        except RenderError as e:
            summary.warnings.append(str(e))
            log.warning("skipping PlantUML source for view %r: %s", view.key, e)
            continue
        writer.write(puml_path(view.key), source, owner=f"view {view.key!r}")


def generate_site(ctx: GeneratorContext, out_dir: Path, *, jobs: int = 1) -> GenerationSummary:
    """Render every page of the site into `out_dir`.

    Pages are built and rendered on `jobs` threads; files are written in plan
    order from the calling thread.
    """
    summary = GenerationSummary()
    planned = plan_pages(ctx.workspace)
    _preflight(planned, ctx.workspace.views)

    if jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="page") as executor:
            results = list(executor.map(lambda job: _generate_page(ctx, job), planned))
    else:
        results = [_generate_page(ctx, job) for job in planned]

    writer = OutputWriter(out_dir)
    writer.write(STYLESHEET, STYLESHEET_CSS, owner="stylesheet")
    _write_puml_sources(ctx, writer, summary)

    for result in results:
        writer.write(result.job.path, result.html, owner=result.job.label)
        if result.error is not None:
            summary.skipped.append(SkippedPage(result.job.path, result.error))
            log.warning("%s: %s; wrote diagnostic placeholder", result.job.path, result.error)
        elif result.visible:
            summary.pages += 1
        else:
            summary.redirects += 1
            log.debug("%s: nothing to show, wrote redirect", result.job.path)

    log.info(
        "generated %d page(s), %d redirect(s), %d skipped into %s",
        summary.pages,
        summary.redirects,
        len(summary.skipped),
        out_dir,
    )
    return summary

from __future__ import annotations

from html import escape

from ..model.kinds import PageKind
from ..model.pages import Breadcrumb, NavLink, PageViewModel


def _breadcrumbs_html(crumbs: tuple[Breadcrumb, ...]) -> str:
    parts: list[str] = []
    for crumb in crumbs:
        if crumb.href is None:
            parts.append(f'<li class="is-active"><span>{escape(crumb.title)}</span></li>')
        else:
            parts.append(f'<li><a href="{escape(crumb.href)}">{escape(crumb.title)}</a></li>')
    return f'<nav class="breadcrumb"><ul>{"".join(parts)}</ul></nav>'


def _nav_list(links: tuple[NavLink, ...], css_class: str) -> str:
    if not links:
        return ""
    items = []
    for link in links:
        cls = ' class="is-active"' if link.active else ""
        items.append(f'<li{cls}><a href="{escape(link.href)}">{escape(link.title)}</a></li>')
    return f'<ul class="{css_class}">{"".join(items)}</ul>'


def page_head(page: PageViewModel, extra: str = "") -> str:
    primary, secondary = page.theme
    theme = ""
    if primary or secondary:
        theme = f"<style>:root {{ --primary: {escape(primary)}; --secondary: {escape(secondary)}; }}</style>"
    return (
        "<head>"
        '<meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        f"<title>{escape(page.title)} | {escape(page.site_title)}</title>"
        f'<link rel="stylesheet" href="{escape(page.stylesheet_href)}">'
        f"{theme}{extra}"
        "</head>"
    )


def page_shell(page: PageViewModel, body_html: str) -> str:
    """Wrap page content in the shared layout: menu, breadcrumbs and tab bar."""
    if page.container is not None:
        heading = page.container.name
    elif page.system is not None:
        heading = page.system.name
    elif page.kind is PageKind.WORKSPACE_HOME:
        heading = page.site_title
    else:
        heading = page.kind.label
    header = f'<h1 class="title">{escape(heading)}</h1>'

    return f"""<!DOCTYPE html>
<html lang="en">
{page_head(page)}
<body>
<header class="topbar"><span class="brand">{escape(page.site_title)}</span></header>
<div class="layout">
<aside class="menu">{_nav_list(page.menu, "menu-list")}</aside>
<main class="content">
{_breadcrumbs_html(page.breadcrumbs)}
{header}
{_nav_list(page.tabs, "tabs")}
<article>
{body_html}
</article>
</main>
</div>
</body>
</html>
"""


def redirect_up_page(page: PageViewModel) -> str:
    """Minimal document sending the browser to the nearest ancestor page."""
    target = escape(page.parent_href or "./")
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta http-equiv="refresh" content="0; url={target}">
<link rel="canonical" href="{target}">
<title>{escape(page.title)}</title>
</head>
<body><p>Nothing to show here; continue to <a href="{target}">{target}</a>.</p></body>
</html>
"""

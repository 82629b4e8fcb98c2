from __future__ import annotations

from html import escape

from ..model.diagram import DiagramIndexViewModel, DiagramViewModel


def diagram_index(index: DiagramIndexViewModel) -> str:
    if not index.visible:
        return ""
    items = "".join(
        f'<li><a href="#{escape(entry.anchor)}">{escape(entry.title)}</a></li>' for entry in index.entries
    )
    return f'<nav class="diagram-index"><p class="label">Diagrams</p><ol>{items}</ol></nav>'


def diagram(model: DiagramViewModel) -> str:
    description = f'<p class="description">{escape(model.description)}</p>' if model.description else ""
    return (
        f'<section class="diagram" id="{escape(model.anchor)}">'
        f"<h2>{escape(model.title)}</h2>"
        f'<figure class="svg-container">{model.svg}</figure>'
        f"{description}"
        f'<p class="downloads"><a href="{escape(model.puml_href)}" download>PlantUML source</a></p>'
        "</section>"
    )

import subprocess

from structurizr_site import markup
from structurizr_site.markup import literal_html, render_markup


def test_markdown_renders_to_html():
    html = render_markup("# Title\n\nSome **bold** text.\n\n| a | b |\n|---|---|\n| 1 | 2 |")
    assert "<strong>bold</strong>" in html
    assert "<table>" in html
    assert 'id="title"' in html


def test_blank_text_renders_nothing():
    assert render_markup("") == ""
    assert render_markup("  \n\t") == ""


def test_asciidoc_without_asciidoctor_falls_back_to_literal(monkeypatch, caplog):
    def missing(*args, **kwargs):
        raise FileNotFoundError("asciidoctor")

    monkeypatch.setattr(markup.subprocess, "run", missing)
    html = render_markup("= Title\n\n<b>raw</b>", "AsciiDoc")

    assert html == literal_html("= Title\n\n<b>raw</b>")
    assert "&lt;b&gt;raw&lt;/b&gt;" in html
    assert "AsciiDoc conversion failed" in caplog.text


def test_asciidoc_uses_asciidoctor_output(monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        seen["input"] = kwargs["input"]
        return subprocess.CompletedProcess(cmd, 0, stdout=b"<div class=\"paragraph\"><p>hi</p></div>", stderr=b"")

    monkeypatch.setattr(markup.subprocess, "run", fake_run)
    html = render_markup("hi", "AsciiDoc")

    assert html == '<div class="paragraph"><p>hi</p></div>'
    assert seen["cmd"][0] == "asciidoctor"
    assert "--embedded" in seen["cmd"]
    assert seen["input"] == b"hi"


def test_asciidoctor_failure_falls_back_to_literal(monkeypatch):
    def failing(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, stdout=b"", stderr=b"boom")

    monkeypatch.setattr(markup.subprocess, "run", failing)
    assert render_markup("text", "asciidoc") == '<pre class="literal">text</pre>'


def test_markdown_failure_falls_back_to_literal(monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("extension exploded")

    monkeypatch.setattr(markup.markdown, "markdown", broken)
    assert render_markup("a < b") == '<pre class="literal">a &lt; b</pre>'

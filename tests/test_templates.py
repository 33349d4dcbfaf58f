import pytest

from mdpress.errors import BuildError
from mdpress.templates import TemplateEngine, TemplateLoadError, TemplateRenderError

PAGE_TEMPLATE = (
    "<html><head><title>{{ title }}</title>"
    "{% if css %}<style>{{ css | safe }}</style>{% endif %}"
    "</head><body>{{ content | safe }}</body></html>"
)


def test_render_escapes_title_and_keeps_raw_content():
    engine = TemplateEngine(PAGE_TEMPLATE)
    rendered = engine.render(
        {"content": "<h1>Hi</h1>", "title": "Tom & <Jerry>", "description": ""}
    )
    assert "<title>Tom &amp; &lt;Jerry&gt;</title>" in rendered
    assert "<body><h1>Hi</h1></body>" in rendered


def test_css_block_is_conditional():
    engine = TemplateEngine(PAGE_TEMPLATE)
    without = engine.render({"content": "", "title": "T"})
    assert "<style>" not in without

    with_css = engine.render({"content": "", "title": "T", "css": "a > b { x: y; }"})
    assert "<style>a > b { x: y; }</style>" in with_css


def test_missing_variables_render_empty():
    engine = TemplateEngine("[{{ description }}]")
    assert engine.render({}) == "[]"


def test_render_error_is_wrapped():
    engine = TemplateEngine("{{ title() }}")
    with pytest.raises(TemplateRenderError) as excinfo:
        engine.render({})
    assert excinfo.value.message.startswith("Undefined variable")

    engine = TemplateEngine("{{ title.upper() }}")
    assert engine.render({"title": "abc"}) == "ABC"


def test_from_file_loads_template(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<p>{{ title }}</p>\n", encoding="utf-8")
    engine = TemplateEngine.from_file(path)
    assert engine.name == "page.html"
    assert engine.render({"title": "T"}) == "<p>T</p>\n"


def test_from_file_missing_or_invalid(tmp_path):
    with pytest.raises(TemplateLoadError) as excinfo:
        TemplateEngine.from_file(tmp_path / "missing.html")
    assert isinstance(excinfo.value, BuildError)
    assert excinfo.value.source_path == tmp_path / "missing.html"

    broken = tmp_path / "broken.html"
    broken.write_text("{% if title %}never closed", encoding="utf-8")
    with pytest.raises(TemplateLoadError) as excinfo:
        TemplateEngine.from_file(broken)
    assert "Template syntax error" in excinfo.value.message


def test_python_errors_in_expressions_are_wrapped():
    engine = TemplateEngine("{{ title + 1 }}")
    with pytest.raises(TemplateRenderError) as excinfo:
        engine.render({"title": "T"})
    assert isinstance(excinfo.value.original_error, TypeError)
    assert excinfo.value.message.startswith("TypeError:")

    engine = TemplateEngine("{{ 10 / (title | length - 3) }}")
    with pytest.raises(TemplateRenderError) as excinfo:
        engine.render({"title": "Bad"})
    assert isinstance(excinfo.value.original_error, ZeroDivisionError)
    assert engine.render({"title": "Good one"}) == "2.0"

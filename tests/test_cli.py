from click.testing import CliRunner

from mdpress import __version__
from mdpress.build import BuildResult, PageResult, PageStage
from mdpress.cli import cli

TEMPLATE = (
    "<html><head><title>{{ title }}</title>"
    "{% if css %}<style>{{ css | safe }}</style>{% endif %}"
    "</head><body>{{ content | safe }}</body></html>"
)


def create_project(root):
    (root / "content" / "docs").mkdir(parents=True)
    (root / "content" / "index.md").write_text(
        "---\ntitle: Home\n---\n# Welcome", encoding="utf-8"
    )
    (root / "content" / "docs" / "guide.md").write_text("# Guide", encoding="utf-8")
    (root / "page.html").write_text(TEMPLATE, encoding="utf-8")
    (root / "style.css").write_text("h1 { margin: 0; }", encoding="utf-8")
    (root / "mdpress.yaml").write_text(
        "source_dir: content\n"
        "output_dir: public\n"
        "template_file: page.html\n"
        "css_file: style.css\n",
        encoding="utf-8",
    )


def test_cli_build_generates_site(monkeypatch, tmp_path):
    create_project(tmp_path)
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["build"], catch_exceptions=False)
    assert result.exit_code == 0
    assert result.stdout == f"Site generated in {tmp_path / 'public'}\n"
    assert "Processing Markdown file:" in result.stderr

    assert "<title>Home</title>" in (tmp_path / "public" / "index.html").read_text(
        encoding="utf-8"
    )
    assert (tmp_path / "public" / "docs" / "guide.html").exists()
    assert (tmp_path / "public" / "style.css").read_text(encoding="utf-8") == (
        "h1 { margin: 0; }"
    )


def test_cli_build_reports_skipped_documents(monkeypatch, tmp_path):
    create_project(tmp_path)
    (tmp_path / "content" / "broken.md").write_text(
        "---\ntitle: A\ntitle: B\n---\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["build"])
    assert result.exit_code == 0
    assert "1 document(s) skipped:" in result.stderr
    assert "broken.md: failed at front-matter-split" in result.stderr
    assert not (tmp_path / "public" / "broken.html").exists()


def test_cli_build_missing_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["build"])
    assert result.exit_code == 1
    assert "Build failed:" in result.stderr
    assert "mdpress.yaml" in result.stderr
    assert result.stdout == ""


def test_cli_build_missing_template(monkeypatch, tmp_path):
    create_project(tmp_path)
    (tmp_path / "page.html").unlink()
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["build"])
    assert result.exit_code == 1
    assert "Failed to read template file" in result.stderr
    assert not (tmp_path / "public").exists()


def test_cli_build_uses_build_project(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    calls = {}

    def fake_build_project(root):
        calls["root"] = root
        return BuildResult(
            output_dir=root / "out",
            pages=[PageResult(source_path=root / "a.md", stage=PageStage.WRITTEN)],
        )

    monkeypatch.setattr("mdpress.build.build_project", fake_build_project)
    result = CliRunner().invoke(cli, ["build"], catch_exceptions=False)
    assert result.exit_code == 0
    assert calls["root"] == tmp_path
    assert "skipped" not in result.stderr


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_module_main_entrypoint():
    from mdpress.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import mdpress.cli as cli_mod

    called = {}

    def fake_cli():
        called["ran"] = True

    monkeypatch.setattr(cli_mod, "cli", fake_cli)
    cli_mod.main()
    assert called["ran"]

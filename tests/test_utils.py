import os
from pathlib import Path

import pytest
import yaml

from mdpress import utils


def test_load_yaml_rejects_duplicate_keys():
    assert utils.load_yaml("title: A\ndescription: B\n") == {
        "title": "A",
        "description": "B",
    }
    assert utils.load_yaml("") is None

    with pytest.raises(yaml.YAMLError) as excinfo:
        utils.load_yaml("title: One\ntitle: Two\n")
    assert "duplicate key 'title'" in str(excinfo.value)

    # nested mappings are checked too
    with pytest.raises(yaml.YAMLError):
        utils.load_yaml("outer:\n  a: 1\n  a: 2\n")


def test_load_yaml_allows_merge_keys():
    text = "base: &b\n  a: 1\nchild:\n  <<: *b\n  c: 2\n"
    assert utils.load_yaml(text)["child"] == {"a": 1, "c": 2}


def test_replace_suffix_keeps_parents():
    assert utils.replace_suffix(Path("a/b/c.md"), ".html") == Path("a/b/c.html")
    assert utils.replace_suffix(Path("index.md"), ".html") == Path("index.html")


def test_atomic_write_text_overwrites(tmp_path):
    target = tmp_path / "page.html"
    target.write_text("old", encoding="utf-8")
    utils.atomic_write_text(target, "<p>new</p>")
    assert target.read_text(encoding="utf-8") == "<p>new</p>"
    assert oct(target.stat().st_mode & 0o777) == oct(0o644)
    assert [p.name for p in tmp_path.iterdir()] == ["page.html"]


def test_atomic_write_text_leaves_no_partial_file(monkeypatch, tmp_path):
    target = tmp_path / "page.html"
    target.write_text("old", encoding="utf-8")

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(utils.os, "replace", fail_replace)
    with pytest.raises(OSError):
        utils.atomic_write_text(target, "new")
    assert target.read_text(encoding="utf-8") == "old"
    assert sorted(os.listdir(tmp_path)) == ["page.html"]

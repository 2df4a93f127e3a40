"""Tests for the html template example in the examples/ directory."""

from __future__ import annotations

import importlib.util
import pathlib
import sys

import pytest

from definekit import Definer
from definekit.errors import LoaderRejectedError

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent.parent
EXAMPLE_DIR = PROJECT_ROOT / "examples" / "templates"


def _load_example_module(name: str):
    """Load a module from examples/templates, making its siblings importable."""
    if str(EXAMPLE_DIR) not in sys.path:
        sys.path.insert(0, str(EXAMPLE_DIR))
    full_path = EXAMPLE_DIR / f"{name}.py"
    spec = importlib.util.spec_from_file_location(name, str(full_path))
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


class TestFileLoader:
    def test_defines_module_per_file(self, tmp_path: pathlib.Path) -> None:
        (tmp_path / "nav.html").write_text("<nav/>")
        mod = _load_example_module("file_loader")
        define = Definer()
        define.config(load=mod.make_file_loader(tmp_path, define))
        define("nav", ["/nav.html"])

        assert define(["nav"], lambda nav: nav) == "<nav/>"

    def test_missing_file_rejects(self, tmp_path: pathlib.Path) -> None:
        mod = _load_example_module("file_loader")
        define = Definer()
        define.config(load=mod.make_file_loader(tmp_path, define))

        with pytest.raises(LoaderRejectedError) as exc_info:
            define(["/absent.html"], lambda: None)
        assert "/absent.html" in exc_info.value.reason


class TestPage:
    def test_build_page(self) -> None:
        mod = _load_example_module("page")
        page = mod.build_page()
        assert "<h1>definekit demo</h1>" in page
        assert "built with definekit" in page

"""Tests for PathResolver alias substitution and base-path prefixing."""

from __future__ import annotations

import pytest

from definekit.config import Config
from definekit.errors import ConfigError
from definekit.paths import PathResolver, is_absolute_path


def _resolver(**options) -> PathResolver:
    return PathResolver(Config(options))


class TestIsAbsolutePath:
    @pytest.mark.parametrize("path", ["/abs/file.js", "http://host/file.js", "https://host/file.js"])
    def test_absolute(self, path: str) -> None:
        assert is_absolute_path(path)

    @pytest.mark.parametrize("path", ["file.js", "scripts/file.js", "./file.js"])
    def test_relative(self, path: str) -> None:
        assert not is_absolute_path(path)


class TestResolve:
    def test_absolute_path_passthrough(self) -> None:
        resolver = _resolver(base_path="/base/", alias={"abs": "/elsewhere/"})
        assert resolver.resolve("/abs/file.js") == "/abs/file.js"
        assert resolver.resolve("http://host/file.js") == "http://host/file.js"

    def test_base_path_prefixed(self) -> None:
        assert _resolver(base_path="/baseUrl/").resolve("testurl.js") == "/baseUrl/testurl.js"

    def test_no_separator_inserted(self) -> None:
        assert _resolver(base_path="/base").resolve("file.js") == "/basefile.js"

    def test_absolute_alias_skips_base_path(self) -> None:
        resolver = _resolver(base_path="/base/", alias={"app": "/path/to/app/"})
        assert resolver.resolve("app/x.js") == "/path/to/app/x.js"

    def test_relative_alias_gets_base_path(self) -> None:
        resolver = _resolver(base_path="/path/to/base/", alias={"scripts": "path/to/scripts/"})
        assert resolver.resolve("scripts/y.js") == "/path/to/base/path/to/scripts/y.js"

    def test_alias_without_trailing_separator(self) -> None:
        resolver = _resolver(alias={"lib": "/vendor/lib"})
        assert resolver.resolve("lib/z.js") == "/vendor/lib/z.js"

    def test_chained_aliases(self) -> None:
        resolver = _resolver(base_path="/base/", alias={"app": "src/app/", "src": "/srv/src/"})
        assert resolver.resolve("app/main.js") == "/srv/src/app/main.js"

    def test_alias_only_matches_first_segment(self) -> None:
        resolver = _resolver(base_path="/base/", alias={"app": "/app/"})
        assert resolver.resolve("lib/app/x.js") == "/base/lib/app/x.js"

    def test_documented_examples(self) -> None:
        resolver = _resolver(
            base_path="/path/to/base/",
            alias={"app": "/path/to/app/", "scripts": "path/to/scripts/", "css": "path/to/css/"},
        )
        assert resolver.resolve("app/appscript.js") == "/path/to/app/appscript.js"
        assert resolver.resolve("scripts/myscript.js") == "/path/to/base/path/to/scripts/myscript.js"
        assert resolver.resolve("css/mycss.css") == "/path/to/base/path/to/css/mycss.css"
        assert resolver.resolve("/some/other/file.htm") == "/some/other/file.htm"
        assert resolver.resolve("another/file.js") == "/path/to/base/another/file.js"

    def test_config_updates_apply_immediately(self) -> None:
        config = Config({"base_path": "/one/"})
        resolver = PathResolver(config)
        assert resolver.resolve("a.js") == "/one/a.js"
        config.update(base_path="/two/")
        assert resolver.resolve("a.js") == "/two/a.js"

    def test_alias_cycle_raises(self) -> None:
        resolver = _resolver(alias={"a": "b/x", "b": "a/y"})
        with pytest.raises(ConfigError) as exc_info:
            resolver.resolve("a/file.js")
        assert "a -> b -> a" in str(exc_info.value)

"""Tests for define() argument classification."""

from __future__ import annotations

import pytest

from definekit.calls import (
    Anonymous,
    AsyncPlaceholder,
    Bulk,
    Delete,
    NamedNoDeps,
    NamedWithDeps,
    classify_call,
)
from definekit.errors import InvalidCallError


def _factory(*deps):
    return deps


class TestClassifyCall:
    def test_named_without_dependencies(self) -> None:
        assert classify_call("mod", {"v": 1}) == NamedNoDeps(name="mod", factory={"v": 1})

    def test_named_with_dependencies(self) -> None:
        call = classify_call("mod", ("a", "b.js"), _factory)
        assert call == NamedWithDeps(name="mod", dependencies=["a", "b.js"], factory=_factory)

    def test_async_placeholder(self) -> None:
        assert classify_call("mod", ["/mod.js"]) == AsyncPlaceholder(name="mod", dependencies=["/mod.js"])

    def test_delete_two_arguments(self) -> None:
        assert classify_call("mod", None) == Delete(name="mod")

    def test_delete_three_arguments(self) -> None:
        assert classify_call("mod", ["a"], None) == Delete(name="mod")

    def test_anonymous(self) -> None:
        assert classify_call(["a", "b"], _factory) == Anonymous(dependencies=["a", "b"], factory=_factory)

    def test_bulk(self) -> None:
        entries = {"config": {"base_path": "/"}, "mod": 1}
        call = classify_call(entries)
        assert isinstance(call, Bulk)
        assert call.entries is entries

    def test_falsy_value_is_still_a_factory(self) -> None:
        assert classify_call("zero", 0) == NamedNoDeps(name="zero", factory=0)


class TestInvalidCalls:
    @pytest.mark.parametrize(
        "args",
        [
            (),
            ("only-a-name",),
            (42, "value"),
            (["a"],),
            ("mod", "not-a-list", _factory),
            ("mod", ["a"], _factory, "extra"),
            ({"a": 1}, "extra"),
        ],
    )
    def test_rejected(self, args: tuple) -> None:
        with pytest.raises(InvalidCallError):
            classify_call(*args)

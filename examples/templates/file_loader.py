"""Example loader: serve .html resources from a local directory.

Each fetched file defines a module named after its stem whose value is the
file's text, the way a fetched script would call define() on itself.
"""

from __future__ import annotations

import pathlib
from typing import Any, Callable

from definekit import Definer


def make_file_loader(root: str | pathlib.Path, definer: Definer) -> Callable[..., None]:
    """Return a load function reading resolved paths relative to ``root``."""
    root_path = pathlib.Path(root)

    def load(paths: list[str], on_success: Callable[..., None], on_failure: Callable[..., Any]) -> None:
        for path in paths:
            file_path = root_path / path.lstrip("/")
            try:
                text = file_path.read_text(encoding="utf-8")
            except OSError as exc:
                on_failure(f"{path}: {exc.strerror}")
                return
            declaration = definer.lookup(file_path.stem)
            if declaration is None or declaration.is_placeholder:
                definer(file_path.stem, text)
        on_success(paths)

    return load

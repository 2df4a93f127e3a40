"""Compose a page from html partials fetched through the file loader."""

from __future__ import annotations

import pathlib

from definekit import Definer

from file_loader import make_file_loader

STATIC_DIR = pathlib.Path(__file__).resolve().parent / "static"


def build_page(definer: Definer | None = None) -> str:
    define = definer or Definer()
    define.config(
        base_path="/",
        alias={"partials": "/partials/"},
        load=make_file_loader(STATIC_DIR, define),
    )

    define("header", ["partials/header.html"])
    define("footer", ["partials/footer.html"])
    define("title", "definekit demo")
    define("layout", ["header", "footer", "title"], lambda header, footer, title: (header, footer, title))

    def render(layout: tuple[str, str, str]) -> str:
        header, footer, title = layout
        return header.replace("{title}", title) + footer

    return define(["layout"], render)


if __name__ == "__main__":
    print(build_page())

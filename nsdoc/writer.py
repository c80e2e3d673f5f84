"""Persists rendered pages and bundled assets to the output directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Dict, List, Sequence

from .logging import get_logger, timed
from .pages import PageAssembler

ASSET_PATHS: tuple[str, ...] = ("css/default.css", "js/page_effects.js")


@dataclass
class WriteResult:
    """Files produced by one rendering pass."""

    output_dir: Path
    pages: List[Path] = field(default_factory=list)
    assets: List[Path] = field(default_factory=list)


class DocWriter:
    """Output sink: writes every page an assembler produces, plus static assets."""

    def __init__(self, assets: Sequence[str] = ASSET_PATHS) -> None:
        self.assets = tuple(assets)
        self.logger = get_logger("writer")

    def write(self, assembler: PageAssembler, output_dir: Path) -> WriteResult:
        # Nothing touches output_dir until every page has rendered.
        with timed(self.logger, "Rendering pages"):
            pages = assembler.render_pages()

        output_dir = output_dir.expanduser()
        output_dir.mkdir(parents=True, exist_ok=True)
        result = WriteResult(output_dir=output_dir)
        result.assets.extend(self.copy_assets(output_dir))
        result.pages.extend(self.write_pages(pages, output_dir))

        self.logger.info(
            "Wrote %d pages and %d assets to %s",
            len(result.pages),
            len(result.assets),
            output_dir,
        )
        return result

    def write_pages(self, pages: Dict[str, str], output_dir: Path) -> List[Path]:
        written: List[Path] = []
        for filename, html in pages.items():
            target = output_dir / filename
            target.write_text(html, encoding="utf-8")
            self.logger.debug("Wrote %s", target)
            written.append(target)
        return written

    def copy_assets(self, output_dir: Path) -> List[Path]:
        bundle = resources.files("nsdoc") / "resources"
        copied: List[Path] = []
        for relative in self.assets:
            source = bundle.joinpath(*relative.split("/"))
            target = output_dir / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(source.read_bytes())
            copied.append(target)
        return copied


__all__ = ["ASSET_PATHS", "DocWriter", "WriteResult"]

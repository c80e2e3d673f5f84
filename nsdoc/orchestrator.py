"""Pipeline orchestration: metadata + config in, HTML documentation out."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Set

from .config import NsdocConfig, load_config
from .formatting import DocFormatRegistry, UnknownDocFormatError, default_registry, resolve_format
from .hierarchy import build_hierarchy
from .loader import ApiMetadata, load_metadata
from .logging import get_logger
from .models import Project, Var
from .pages import PageAssembler
from .writer import DocWriter


@dataclass
class BuildOutcome:
    """Result of a documentation build."""

    output_dir: Path
    pages: List[Path]
    namespaces: int


class Orchestrator:
    """Coordinates loading, validation, rendering and writing."""

    def __init__(
        self,
        registry: DocFormatRegistry | None = None,
        writer: DocWriter | None = None,
        metadata_loader: Callable[[Path], ApiMetadata] = load_metadata,
    ) -> None:
        self._registry = registry
        self.writer = writer or DocWriter()
        self.metadata_loader = metadata_loader
        self.logger = get_logger("orchestrator")

    @property
    def registry(self) -> DocFormatRegistry:
        if self._registry is None:
            self._registry = default_registry()
        return self._registry

    def run_build(
        self,
        metadata_path: str | Path,
        *,
        config_path: str | Path | None = None,
        output_dir: str | Path | None = None,
    ) -> BuildOutcome:
        """Render documentation for the metadata at ``metadata_path``."""
        metadata_file = Path(metadata_path).expanduser().resolve()
        self.logger.info("Starting build for %s", metadata_file)

        config = load_config(Path(config_path) if config_path is not None else Path.cwd())
        metadata = self.metadata_loader(metadata_file)
        target = Path(output_dir).expanduser() if output_dir is not None else config.resolved_output_dir()
        project = self.build_project(metadata, config, target)
        self.logger.debug("Project %s has %d namespaces", project.name, len(project.namespaces))

        self.check_doc_formats(project)

        hierarchy = build_hierarchy(project.namespaces)
        assembler = PageAssembler(
            project,
            self.registry,
            hierarchy=hierarchy,
            templates_dir=config.templates_dir,
        )
        result = self.writer.write(assembler, target)
        return BuildOutcome(
            output_dir=result.output_dir,
            pages=result.pages,
            namespaces=len(project.namespaces),
        )

    @staticmethod
    def build_project(metadata: ApiMetadata, config: NsdocConfig, output_dir: Path) -> Project:
        """Merge extracted metadata with configuration; config values win."""
        overrides = config.project
        name = overrides.name or metadata.name
        if not name:
            name = config.root.name or "project"
        return Project(
            name=name,
            version=overrides.version or metadata.version or "",
            description=overrides.description or metadata.description or "",
            output_dir=str(output_dir),
            doc_format=config.doc_format,
            src_dir_uri=config.source.dir_uri,
            src_uri_mapping=tuple(config.source.uri_mapping),
            src_linenum_anchor_prefix=config.source.linenum_anchor_prefix,
            namespaces=metadata.namespaces,
        )

    def check_doc_formats(self, project: Project) -> None:
        """Fail before writing anything if any doc uses an unregistered format."""
        missing: Set[str] = set()
        for tag in self._used_formats(project):
            if tag not in self.registry:
                missing.add(tag)
        if missing:
            first = sorted(missing)[0]
            raise UnknownDocFormatError(first, self.registry.tags())

    @staticmethod
    def _used_formats(project: Project) -> Iterator[str]:
        def walk(var: Var) -> Iterator[Var]:
            yield var
            yield from var.members

        for namespace in project.namespaces:
            yield resolve_format(project, namespace)
            for public in namespace.publics:
                for var in walk(public):
                    yield resolve_format(project, var)

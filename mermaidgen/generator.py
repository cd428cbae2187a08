"""Pipeline orchestration: discover, parse, walk, accumulate, render, write."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from .config import MermaidGenConfig, load_config
from .diagram import ClassDiagram, EmitterOptions, walk
from .discovery import SourceScanner
from .logging import get_logger
from .models import SourceFile
from .output import emit
from .parsers import ParseError, SourceParser, discover_parsers, parser_for


@dataclass
class GenerationResult:
    """Outcome of one generation run."""

    diagram: ClassDiagram
    files: List[SourceFile]
    failures: List[ParseError] = field(default_factory=list)

    def render(self) -> str:
        return self.diagram.render()


class DiagramGenerator:
    """Coordinates one diagram generation run over a source directory."""

    def __init__(
        self,
        scanner: SourceScanner | None = None,
        parsers: Optional[Iterable[SourceParser]] = None,
        options: EmitterOptions | None = None,
        jobs: int | None = None,
    ) -> None:
        self._scanner_override = scanner
        self._parser_overrides = list(parsers) if parsers is not None else None
        self._options_override = options
        self._jobs_override = jobs
        self.logger = get_logger("generator")

    def generate(self, root: str | Path, *, title: str | None = None) -> GenerationResult:
        """Build the diagram for every parseable file under ``root``.

        A file that fails to parse is logged and contributes no statements; the rest
        of the run carries on.
        """
        root_path = Path(root).expanduser().resolve()
        self.logger.info("Generating class diagram for %s", root_path)
        config = load_config(root_path)
        parsers = self._resolve_parsers(config)
        options = self._resolve_options(config)

        scanner = self._scanner_override or SourceScanner(parsers)
        manifest = scanner.scan(root_path, exclude_paths=config.exclude_paths)
        self.logger.debug("Discovered %d source files", len(manifest.files))

        diagram = ClassDiagram(title=title or config.title or root_path.name or "Module")
        failures: List[ParseError] = []
        failures_lock = threading.Lock()

        def _process(source: SourceFile) -> None:
            path = root_path / source.path
            parser = parser_for(path, parsers)
            if parser is None:
                return
            try:
                tree = parser.parse(path)
            except ParseError as exc:
                self.logger.warning("Skipping %s: %s", source.path, exc.reason)
                with failures_lock:
                    failures.append(exc)
                return
            added = diagram.extend(walk(tree, options=options))
            self.logger.debug("%s contributed %d new statements", source.path, added)

        jobs = self._resolve_jobs(config)
        if jobs <= 1 or len(manifest.files) <= 1:
            for source in manifest.files:
                _process(source)
        else:
            with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="mermaidgen") as pool:
                # list() re-raises anything unexpected from a worker.
                list(pool.map(_process, manifest.files))

        failures.sort(key=lambda failure: str(failure.path))
        self.logger.info(
            "Collected %d statements from %d files (%d skipped)",
            len(diagram),
            len(manifest.files) - len(failures),
            len(failures),
        )
        return GenerationResult(diagram=diagram, files=manifest.files, failures=failures)

    def run(
        self,
        root: str | Path,
        output: str | Path | None = None,
        *,
        title: str | None = None,
        stream: TextIO | None = None,
    ) -> GenerationResult:
        """Generate the diagram and write it to ``output`` (stdout when omitted)."""
        result = self.generate(root, title=title)
        destination = Path(output).expanduser() if output is not None else None
        emit(result.render(), destination, stream=stream)
        if destination is not None:
            self.logger.info("Diagram written to %s", destination)
        return result

    def _resolve_parsers(self, config: MermaidGenConfig) -> List[SourceParser]:
        if self._parser_overrides is not None:
            return self._parser_overrides
        enabled = config.parsers.enabled or None
        return discover_parsers(enabled, config=config)

    def _resolve_options(self, config: MermaidGenConfig) -> EmitterOptions:
        if self._options_override is not None:
            return self._options_override
        return EmitterOptions(
            include_notes=config.diagram.notes,
            include_cases=config.diagram.enum_cases,
        )

    def _resolve_jobs(self, config: MermaidGenConfig) -> int:
        if self._jobs_override is not None:
            return max(1, self._jobs_override)
        return config.jobs or 1


__all__ = ["DiagramGenerator", "GenerationResult"]

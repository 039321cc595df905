"""Analysis Engine — runs every checker over every source file of a target.

Usage:
    engine = AnalysisEngine()
    result = engine.scan("path/to/solution")
    for violation in result.violations:
        ...
"""

import time
from pathlib import Path
from typing import Optional, Union

import structlog

from solidify.checkers.base import BasePrincipleChecker
from solidify.checkers.dip import DIPChecker
from solidify.checkers.isp import ISPChecker
from solidify.checkers.lsp import LSPChecker
from solidify.checkers.ocp import OCPChecker
from solidify.checkers.srp import SRPChecker
from solidify.checkers.store import ViolationStore
from solidify.config import Settings, get_settings
from solidify.models import ScanResult
from solidify.source.csharp import CSharpReader, SourceParseError, SourceUnit
from solidify.source.loader import discover_sources

logger = structlog.get_logger()


class AnalysisEngine:
    """Orchestrates the checkers over parsed source units.

    Design principles:
        - Deterministic: files in sorted order, checkers in a fixed order
        - Isolated runs: a fresh ViolationStore per scan
        - Resilient: unreadable files and crashing checkers are logged and skipped
    """

    def __init__(
        self,
        checkers: Optional[list[BasePrincipleChecker]] = None,
        reader: Optional[CSharpReader] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.checkers = checkers if checkers is not None else self._default_checkers(self.settings)
        self.reader = reader or CSharpReader()

    @staticmethod
    def _default_checkers(settings: Settings) -> list[BasePrincipleChecker]:
        """Create the default checker chain in execution order."""
        return [
            SRPChecker(
                max_methods=settings.SRP_MAX_METHODS,
                max_properties=settings.SRP_MAX_PROPERTIES,
                logging_receivers=settings.LOGGING_RECEIVERS,
            ),
            OCPChecker(),
            LSPChecker(),
            ISPChecker(
                max_members=settings.ISP_MAX_MEMBERS,
                max_categories=settings.ISP_MAX_CATEGORIES,
            ),
            DIPChecker(),
        ]

    def analyze_unit(self, unit: SourceUnit, store: ViolationStore) -> dict[str, int]:
        """Run every checker over one unit. Returns findings per checker."""
        findings: dict[str, int] = {}
        for checker in self.checkers:
            try:
                findings[checker.name] = checker.run(unit, store)
            except Exception as e:
                # One broken checker must not stop the others
                logger.error(
                    "checker_failed",
                    checker=checker.name,
                    file=unit.path,
                    error=str(e),
                )
                findings[checker.name] = 0
        return findings

    def analyze_source(self, text: str, path: str, store: ViolationStore) -> bool:
        """Parse and check one in-memory source. Returns False if it could not be parsed."""
        try:
            unit = self.reader.read(text, path)
        except SourceParseError as e:
            logger.warning("source_parse_failed", file=path, line=e.line, error=e.message)
            return False
        self.analyze_unit(unit, store)
        return True

    def scan(self, target: Union[str, Path], store: Optional[ViolationStore] = None) -> ScanResult:
        """Scan a file or directory tree and aggregate the findings.

        Raises:
            FileNotFoundError: if ``target`` does not exist.
        """
        start_time = time.perf_counter()
        store = store if store is not None else ViolationStore()

        files = discover_sources(target, self.settings.SOURCE_PATTERN, self.settings.EXCLUDE_DIRS)
        scanned = 0
        skipped: list[str] = []

        for path in files:
            try:
                unit = self.reader.read_file(path)
            except SourceParseError as e:
                logger.warning("source_parse_failed", file=str(path), line=e.line, error=e.message)
                skipped.append(path.as_posix())
                continue

            findings = self.analyze_unit(unit, store)
            scanned += 1
            logger.debug(
                "file_scanned",
                file=unit.path,
                declarations=len(unit.declarations),
                findings=findings,
            )

        duration = (time.perf_counter() - start_time) * 1000
        result = ScanResult.build(
            target=str(target),
            violations=store.violations(),
            files_scanned=scanned,
            files_skipped=skipped,
            duration_ms=duration,
        )

        logger.info(
            "scan_complete",
            target=str(target),
            files_scanned=scanned,
            files_skipped=len(skipped),
            summary=result.summary,
            duration_ms=result.duration_ms,
        )

        return result

    def add_checker(self, checker: BasePrincipleChecker) -> None:
        """Add a custom checker to the chain."""
        self.checkers.append(checker)

    def remove_checker(self, checker_name: str) -> None:
        """Remove a checker by name."""
        self.checkers = [c for c in self.checkers if c.name != checker_name]

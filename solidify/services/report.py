"""Report sink — renders violations to a document and writes it to disk.

Write failures are fatal to the caller and surface as ReportWriteFailure.
"""

import html
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

import structlog

from solidify.models import Violation

logger = structlog.get_logger()


class ReportWriteFailure(Exception):
    """The report could not be written to its destination."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write report to {path}: {reason}")


class ReportRenderer(ABC):
    """Turns a list of violations into the text of a report."""

    format: str = ""

    @abstractmethod
    def render(self, violations: list[Violation]) -> str:
        ...


_STYLE = """
            body { font-family: Arial, sans-serif; margin: 20px; background-color: #f0f0f0; }
            h1 { color: #333; }
            h2 { color: #555; }
            ul { list-style-type: none; padding: 0; }
            li { background: #fff; margin: 10px 0; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }
            .file-name { font-weight: bold; }
            .line-number { color: #888; }
            .code { font-family: 'Courier New', Courier, monospace; background: #f4f4f4; padding: 5px; display: block; white-space: pre-wrap; }
            .gpt-response { margin-top: 10px; padding: 10px; background: #e8e8e8; border-left: 5px solid #ccc; }
"""


class HtmlReportRenderer(ReportRenderer):
    """The "SOLID Metrics Report" page. Every interpolated value is escaped."""

    format = "html"

    def render(self, violations: list[Violation]) -> str:
        parts = [
            "<html>\n  <head>\n    <meta charset='utf-8'>\n"
            f"    <title>SOLID Metrics Report</title>\n    <style>{_STYLE}    </style>\n"
            "  </head>\n  <body>\n    <h1>SOLID Metrics Report</h1>\n"
        ]

        if not violations:
            parts.append("    <h2>Congratulations, No SOLID Violations Suspected.</h2>\n")

        for violation in violations:
            parts.append(f"    <h2>{html.escape(violation.principle.value)}</h2>\n    <ul>\n")
            for evidence in violation.evidences:
                parts.append(
                    "      <li>\n"
                    f"        <span class='file-name'>{html.escape(evidence.file)}</span>\n"
                    f"        <span class='line-number'>(Line {evidence.line})</span>:\n"
                    f"        <span class='code'>{html.escape(evidence.snippet)}</span>\n"
                    "      </li>\n"
                )
            parts.append("    </ul>\n")
            parts.append(
                "    <div class='gpt-response'>\n"
                "      <strong>Explanation:</strong>\n"
                "      <pre style='white-space: pre-wrap;'>"
                f"{html.escape(violation.explanation or '')}</pre>\n"
                "    </div>\n"
            )

        parts.append("  </body>\n</html>\n")
        return "".join(parts)


class JsonReportRenderer(ReportRenderer):
    """Machine-readable report: the violations as a JSON document."""

    format = "json"

    def render(self, violations: list[Violation]) -> str:
        document = {
            "title": "SOLID Metrics Report",
            "violations": [v.model_dump(mode="json") for v in violations],
        }
        return json.dumps(document, indent=2)


RENDERERS: dict[str, type[ReportRenderer]] = {
    HtmlReportRenderer.format: HtmlReportRenderer,
    JsonReportRenderer.format: JsonReportRenderer,
}


def get_renderer(fmt: str) -> ReportRenderer:
    """Look up a renderer by format name.

    Raises:
        ValueError: for an unknown format.
    """
    try:
        return RENDERERS[fmt.lower()]()
    except KeyError:
        raise ValueError(f"Unknown report format '{fmt}'. Choose from: {', '.join(RENDERERS)}") from None


def write_report(
    violations: list[Violation],
    path: Union[str, Path],
    renderer: ReportRenderer,
) -> Path:
    """Render and write the report. Returns the path written."""
    target = Path(path)
    document = renderer.render(violations)
    try:
        target.write_text(document, encoding="utf-8")
    except OSError as e:
        logger.error("report_write_failed", path=str(target), error=str(e))
        raise ReportWriteFailure(str(target), str(e)) from e

    logger.info("report_written", path=str(target), format=renderer.format, violations=len(violations))
    return target

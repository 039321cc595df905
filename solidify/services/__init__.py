from solidify.services.explanation import ExplanationStep, failure_payload
from solidify.services.report import (
    HtmlReportRenderer,
    JsonReportRenderer,
    ReportRenderer,
    ReportWriteFailure,
    get_renderer,
    write_report,
)

__all__ = [
    "ExplanationStep",
    "failure_payload",
    "HtmlReportRenderer",
    "JsonReportRenderer",
    "ReportRenderer",
    "ReportWriteFailure",
    "get_renderer",
    "write_report",
]

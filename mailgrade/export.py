"""
Report Export / Import

Serializes a document and its latest analysis into the JSON
export format, and reads such files back. The exported score is
the weight of the rules that passed out of the weight of all
rules evaluated, not the penalty score shown in the report.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union

from mailgrade.config import settings
from mailgrade.engine import AnalysisReport
from mailgrade.schemas.report import ExportedAnalysis, ExportedResult, ReportExport


def _timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_export(
    html: str, report: AnalysisReport, now: Optional[datetime] = None,
) -> ReportExport:
    results = [
        ExportedResult(
            id=r.id,
            passed=r.passed,
            message=r.message,
            level=r.level,
            weight=r.weight,
            category=r.category,
            fix=r.fix,
            has_auto_fix=r.has_auto_fix,
        )
        for r in report.results
    ]
    return ReportExport(
        html=html,
        analysis=ExportedAnalysis(
            score=sum(r.weight for r in report.results if r.passed),
            total_score=sum(r.weight for r in report.results),
            results=results,
            timestamp=_timestamp(now),
            analysis_time=report.analysis_time,
        ),
    )


def export_report(
    html: str, report: AnalysisReport, now: Optional[datetime] = None,
) -> str:
    """Return the export document as JSON text."""
    return build_export(html, report, now).model_dump_json(
        by_alias=True, indent=settings.EXPORT_INDENT or None,
    )


def import_report(data: Union[str, bytes]) -> ReportExport:
    """
    Parse an exported document.

    Raises pydantic.ValidationError when the document does not match
    the export format.
    """
    return ReportExport.model_validate_json(data)

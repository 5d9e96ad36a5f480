"""
Export Schemas — Analysis Report Document

Pydantic models for the exported analysis file. Field names on the
wire ("totalScore", "analysisTime", "hasAutoFix") are fixed so older
exports stay importable. Whole-number weights and scores stay
integers on the wire.
"""

from __future__ import annotations

from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class ExportedResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    passed: bool
    message: str
    level: str
    weight: Union[int, float]
    category: str
    fix: Optional[str] = None
    has_auto_fix: bool = Field(False, alias="hasAutoFix")


class ExportedAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    score: Union[int, float] = Field(..., description="Sum of the weights of passed rules.")
    total_score: Union[int, float] = Field(..., alias="totalScore",
                                           description="Sum of the weights of all evaluated rules.")
    results: list[ExportedResult]
    timestamp: str = Field(..., description="ISO-8601 UTC time of export.")
    analysis_time: float = Field(..., alias="analysisTime",
                                 description="Duration of the analysis pass in ms.")


class ReportExport(BaseModel):
    """Top-level exported document."""
    html: str
    analysis: ExportedAnalysis

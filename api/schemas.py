"""Pydantic request/response models for the Report Summary API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SummaryRequest(BaseModel):
    # Raw documents as stored; coerced by the record parser.
    reports: list[Any] = Field(default_factory=list)
    projects: list[Any] = Field(default_factory=list)
    selected_project_id: str | None = None


class ProjectReportsRequest(BaseModel):
    project: dict[str, Any]
    reports: list[Any] = Field(default_factory=list)


class Figures(BaseModel):
    laborCost: float
    materialsCost: float
    totalCost: float
    invoicedAmount: float
    totalIncome: float
    officialHours: float
    workerHours: float
    extraBudget: float
    extraCost: float
    count: int


class WeekSummary(Figures):
    key: str
    weekNumber: int
    year: int
    weekLabel: str


class ProjectSummary(Figures):
    projectId: str
    type: str
    client: str
    budgetAmount: float


class BudgetSummary(BaseModel):
    budgetAmount: float
    invoicedTotal: float
    remainingBudget: float
    progressPercentage: float
    isOverBudget: bool
    totalExtraWorkIncome: float
    totalBudgetWithExtras: float


class ExtraWorkSummary(BaseModel):
    totalExtraBudget: float
    totalExtraLaborCost: float
    totalExtraMaterials: float
    totalExtraCost: float
    totalExtra: float
    extraWorkCount: int
    extraWorkReportIds: list[str]


class SummaryResponse(BaseModel):
    success: bool
    totals: dict[str, Any] | None = None
    byWeek: list[WeekSummary] | None = None
    byProject: list[ProjectSummary] | None = None
    warnings: list[str] | None = None
    error_type: str | None = None
    errors: list[str] | None = None


class BudgetResponse(BaseModel):
    success: bool
    budget: BudgetSummary | None = None
    error_type: str | None = None
    errors: list[str] | None = None


class ExtraWorkResponse(BaseModel):
    success: bool
    extra_work: ExtraWorkSummary | None = None
    error_type: str | None = None
    errors: list[str] | None = None

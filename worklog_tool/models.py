"""Canonical data model for work reports and their financial summaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from worklog_tool.coercion import ZERO, to_bool, to_decimal


class ProjectType(Enum):
    HOURLY = "hourly"
    FIXED = "fixed"


class ExtraWorkType(Enum):
    ADDITIONAL_BUDGET = "additional_budget"
    HOURLY = "hourly"


class ReportMode(Enum):
    """How a report contributes money, resolved from its project and flags."""
    HOURLY_NORMAL = "hourly_normal"
    FIXED_NORMAL = "fixed_normal"
    EXTRA_BUDGET = "extra_budget"
    EXTRA_HOURLY = "extra_hourly"


def _project_type(value: object) -> ProjectType:
    if isinstance(value, ProjectType):
        return value
    try:
        return ProjectType(value)
    except ValueError:
        return ProjectType.HOURLY


def _extra_work_type(value: object) -> Optional[ExtraWorkType]:
    if isinstance(value, ExtraWorkType):
        return value
    try:
        return ExtraWorkType(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class Project:
    """Billing terms of one project. Read-only to the engine."""
    id: str
    type: ProjectType = ProjectType.HOURLY
    official_price: Decimal = ZERO
    worker_price: Decimal = ZERO
    budget_amount: Decimal = ZERO
    allow_extra_work: bool = False
    name: str = ""
    client: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", _project_type(self.type))
        for name in ("official_price", "worker_price", "budget_amount"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        object.__setattr__(self, "allow_extra_work", to_bool(self.allow_extra_work))

    @property
    def is_fixed(self) -> bool:
        return self.type == ProjectType.FIXED


@dataclass(frozen=True)
class LaborEntry:
    """Clock times ("HH:MM") for the official and the worker on one day."""
    official_entry: Optional[str] = None
    official_exit: Optional[str] = None
    worker_entry: Optional[str] = None
    worker_exit: Optional[str] = None


@dataclass(frozen=True)
class MaterialItem:
    description: str = ""
    cost: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "cost", to_decimal(self.cost))
        if self.description is None:
            object.__setattr__(self, "description", "")


@dataclass(frozen=True)
class Report:
    """One daily work report as stored by the report forms."""
    id: str
    project_id: str
    report_date: Optional[date] = None
    week_number: int = 0
    labor: Optional[LaborEntry] = None
    materials: tuple[MaterialItem, ...] = ()
    invoiced_amount: Decimal = ZERO
    is_extra_work: bool = False
    extra_work_type: Optional[ExtraWorkType] = None
    extra_budget_amount: Decimal = ZERO
    total_cost: Optional[Decimal] = None
    extra_work_type_raw: Optional[str] = None

    def __post_init__(self) -> None:
        if self.extra_work_type_raw is None and self.extra_work_type is not None:
            raw = self.extra_work_type
            object.__setattr__(
                self, "extra_work_type_raw",
                raw.value if isinstance(raw, ExtraWorkType) else str(raw),
            )
        object.__setattr__(self, "extra_work_type", _extra_work_type(self.extra_work_type))
        object.__setattr__(self, "week_number", int(to_decimal(self.week_number)))
        object.__setattr__(self, "materials", tuple(self.materials or ()))
        object.__setattr__(self, "invoiced_amount", to_decimal(self.invoiced_amount))
        object.__setattr__(self, "extra_budget_amount", to_decimal(self.extra_budget_amount))
        object.__setattr__(self, "is_extra_work", to_bool(self.is_extra_work))
        if self.total_cost is not None:
            object.__setattr__(self, "total_cost", to_decimal(self.total_cost))

    @property
    def year(self) -> int:
        return self.report_date.year if self.report_date else 0


# ---------------------------------------------------------------------------
# Derived results (recomputed on every call, never persisted)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LaborCalc:
    official_hours: Decimal = ZERO
    worker_hours: Decimal = ZERO
    official_cost: Decimal = ZERO
    worker_cost: Decimal = ZERO

    @property
    def total_hours(self) -> Decimal:
        return self.official_hours + self.worker_hours

    @property
    def total_labor_cost(self) -> Decimal:
        return self.official_cost + self.worker_cost


@dataclass(frozen=True)
class MaterialsCalc:
    total_materials_cost: Decimal = ZERO
    material_items: tuple[MaterialItem, ...] = ()


@dataclass(frozen=True)
class BudgetCalc:
    budget_amount: Decimal = ZERO
    invoiced_total: Decimal = ZERO
    remaining_budget: Decimal = ZERO
    progress_percentage: Decimal = ZERO
    is_over_budget: bool = False
    # Informational only; remaining/progress track the contracted scope.
    extra_work_income: Decimal = ZERO

    @property
    def total_budget_with_extras(self) -> Decimal:
        return self.budget_amount + self.extra_work_income


@dataclass(frozen=True)
class ExtraWorkCalc:
    total_extra_budget: Decimal = ZERO
    total_extra_labor_cost: Decimal = ZERO
    total_extra_materials: Decimal = ZERO
    total_extra_cost: Decimal = ZERO
    extra_work_count: int = 0
    extra_work_reports: tuple[Report, ...] = ()

    @property
    def total_extra(self) -> Decimal:
        return self.total_extra_budget + self.total_extra_cost


@dataclass(frozen=True)
class Contribution:
    """Additive money/hours facts of one or more reports."""
    labor_cost: Decimal = ZERO
    materials_cost: Decimal = ZERO
    invoiced_amount: Decimal = ZERO
    total_income: Decimal = ZERO
    official_hours: Decimal = ZERO
    worker_hours: Decimal = ZERO
    extra_budget: Decimal = ZERO
    extra_cost: Decimal = ZERO
    extra_official_hours: Decimal = ZERO
    extra_worker_hours: Decimal = ZERO
    count: int = 0
    extra_work_count: int = 0

    def __add__(self, other: Contribution) -> Contribution:
        return Contribution(
            labor_cost=self.labor_cost + other.labor_cost,
            materials_cost=self.materials_cost + other.materials_cost,
            invoiced_amount=self.invoiced_amount + other.invoiced_amount,
            total_income=self.total_income + other.total_income,
            official_hours=self.official_hours + other.official_hours,
            worker_hours=self.worker_hours + other.worker_hours,
            extra_budget=self.extra_budget + other.extra_budget,
            extra_cost=self.extra_cost + other.extra_cost,
            extra_official_hours=self.extra_official_hours + other.extra_official_hours,
            extra_worker_hours=self.extra_worker_hours + other.extra_worker_hours,
            count=self.count + other.count,
            extra_work_count=self.extra_work_count + other.extra_work_count,
        )

    @property
    def total_cost(self) -> Decimal:
        return self.labor_cost + self.materials_cost

    @property
    def total_hours(self) -> Decimal:
        return self.official_hours + self.worker_hours


@dataclass(frozen=True)
class WeekBucket:
    year: int
    week_number: int
    figures: Contribution = field(default_factory=Contribution)

    @property
    def key(self) -> str:
        return f"{self.week_number}-{self.year}"

    @property
    def label(self) -> str:
        return f"Week {self.week_number}/{self.year}"


@dataclass(frozen=True)
class ProjectBucket:
    project_id: str
    type: ProjectType
    budget_amount: Decimal = ZERO
    client: str = ""
    figures: Contribution = field(default_factory=Contribution)


@dataclass(frozen=True)
class Totals:
    figures: Contribution = field(default_factory=Contribution)
    skipped_count: int = 0
    budget: Optional[BudgetCalc] = None

    @property
    def total_labor(self) -> Decimal:
        return self.figures.labor_cost

    @property
    def total_materials(self) -> Decimal:
        return self.figures.materials_cost

    @property
    def total_invoiced(self) -> Decimal:
        return self.figures.invoiced_amount

    @property
    def total_income(self) -> Decimal:
        return self.figures.total_income

    @property
    def total_cost(self) -> Decimal:
        return self.figures.total_cost

    @property
    def total_official_hours(self) -> Decimal:
        return self.figures.official_hours

    @property
    def total_worker_hours(self) -> Decimal:
        return self.figures.worker_hours

    @property
    def total_hours(self) -> Decimal:
        return self.figures.total_hours

    @property
    def total_extra_budget(self) -> Decimal:
        return self.figures.extra_budget

    @property
    def total_extra_cost(self) -> Decimal:
        return self.figures.extra_cost

    @property
    def total_extra_official_hours(self) -> Decimal:
        return self.figures.extra_official_hours

    @property
    def total_extra_worker_hours(self) -> Decimal:
        return self.figures.extra_worker_hours

    @property
    def total_extra_hours(self) -> Decimal:
        return self.total_extra_official_hours + self.total_extra_worker_hours

    @property
    def grand_total(self) -> Decimal:
        return self.total_income + self.total_extra_budget

    @property
    def report_count(self) -> int:
        return self.figures.count

    @property
    def extra_work_count(self) -> int:
        return self.figures.extra_work_count


@dataclass(frozen=True)
class ReportSummary:
    totals: Totals
    by_week: list[WeekBucket]
    by_project: list[ProjectBucket]


class StrictValidationError(Exception):
    """Raised when strict data-quality validation fails."""
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Strict validation failed with {len(errors)} error(s):\n" +
                         "\n".join(f"  - {e}" for e in errors))


class RecordFormatError(Exception):
    """Raised when input records are structurally unusable."""
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Unusable input records ({len(errors)} problem(s)):\n" +
                         "\n".join(f"  - {e}" for e in errors))

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class StockStatus(str, Enum):
    SAFE = "SAFE"
    WARNING = "WARNING"
    URGENT = "URGENT"


class FilterStatus(str, Enum):
    ALL = "ALL"
    SAFE = "SAFE"
    WARNING = "WARNING"
    URGENT = "URGENT"


class SortOption(str, Enum):
    DEFAULT = "default"
    STOCK_ASC = "stock_asc"
    STOCK_DESC = "stock_desc"
    DURATION_ASC = "duration_asc"
    DURATION_DESC = "duration_desc"
    LEAD_TIME_ASC = "lead_time_asc"
    LEAD_TIME_DESC = "lead_time_desc"


class NewInventoryItem(BaseModel):
    """
    Defines the data contract for a raw material as it arrives from the operator.
    Every numeric field must be non-negative; this is the only place inputs are validated.
    """

    name: str = Field(..., min_length=1)
    unit: str = Field(..., min_length=1)
    current_stock: float = Field(..., ge=0, alias="currentStock")
    requirement_per_recipe: float = Field(..., ge=0, alias="requirementPerRecipe")
    recipes_today: int = Field(..., ge=0, alias="recipesToday")
    lead_time: int = Field(..., ge=0, alias="leadTime")
    supplier_whatsapp: Optional[str] = Field(default=None, alias="supplierWhatsapp")

    class Config:
        # Accept both snake_case names and the camelCase aliases of the items file,
        # and refuse NaN/inf before they reach the evaluator.
        populate_by_name = True
        str_strip_whitespace = True
        allow_inf_nan = False
        frozen = True

    @field_validator("supplier_whatsapp", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None


class InventoryItem(NewInventoryItem):
    """A stored raw material. Treated as an immutable value during one evaluation pass."""

    id: str = Field(..., min_length=1)


class StockEvaluation(BaseModel):
    """Everything the evaluator derives for one item on one day. Never persisted."""

    daily_requirement: float
    stock_duration_days: float  # math.inf when there is no daily usage
    status: StockStatus
    recommendation: str
    predicted_empty_date: Optional[date] = None


class EvaluatedItem(BaseModel):
    item: InventoryItem
    evaluation: StockEvaluation

    @property
    def status(self) -> StockStatus:
        return self.evaluation.status


class ItemQuery(BaseModel):
    search_text: str = ""
    status_filter: FilterStatus = FilterStatus.ALL
    sort_option: SortOption = SortOption.DEFAULT


class CollectionResult(BaseModel):
    """
    The filtered and sorted items plus the size of the collection before filtering,
    so callers can tell an empty inventory apart from a query with no matches.
    """

    items: list[EvaluatedItem]
    total_count: int = Field(..., ge=0)

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    @property
    def has_no_matches(self) -> bool:
        return self.total_count > 0 and not self.items


class CalendarEntry(BaseModel):
    id: str
    name: str
    status: StockStatus


class CalendarDay(BaseModel):
    day: date
    items: list[CalendarEntry] = Field(default_factory=list)


class ReorderReportRow(BaseModel):
    """
    One line of the reorder report, flattened for CSV/JSON output.
    Aliases are the column headers of the exported file.
    """

    id: str = Field(..., alias="ID")
    name: str = Field(..., alias="Name")
    unit: str = Field(..., alias="Unit")
    current_stock: float = Field(..., ge=0, alias="Current Stock")
    daily_requirement: float = Field(..., ge=0, alias="Daily Requirement")
    stock_duration_days: Optional[float] = Field(default=None, alias="Stock Duration (days)")
    lead_time: int = Field(..., ge=0, alias="Lead Time (days)")
    status: StockStatus = Field(..., alias="Status")
    recommendation: str = Field(..., alias="Recommendation")
    predicted_empty_date: Optional[date] = Field(default=None, alias="Predicted Empty Date")
    whatsapp_link: Optional[str] = Field(default=None, alias="WhatsApp Link")

    class Config:
        populate_by_name = True

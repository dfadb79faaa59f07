import enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReportType(str, enum.Enum):
    sales_grouped = "sales_grouped"
    employees_hierarchy = "employees_hierarchy"
    financial_chart = "financial_chart"
    invoice_form = "invoice_form"


# POST /admin/reports/generate: raw form values, normalized by ReportFilters
class ReportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    report_type: ReportType = Field(alias="reportType")
    date_from: Optional[str] = Field(None, alias="dateFrom")
    date_to: Optional[str] = Field(None, alias="dateTo")
    min_amount: Optional[str] = Field(None, alias="minAmount")

    @field_validator("min_amount", mode="before")
    @classmethod
    def stringify_amount(cls, v):
        # Parsed leniently later; a JSON number is accepted as-is
        if v is None:
            return None
        return str(v)


class ReportTypeInfo(BaseModel):
    type: ReportType
    title: str


class ReportCatalog(BaseModel):
    report_types: List[ReportTypeInfo]

"""Data models for the production report dashboard."""

import base64
from typing import List, Dict, Any, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator


class DocumentPayload(BaseModel):
    """A single, already-selected page ready to send to the vision model."""
    filename: str
    mime_type: str  # e.g. "image/png"
    data: bytes

    def to_data_url(self) -> str:
        """Encode the payload as a base64 data URL."""
        encoded = base64.b64encode(self.data).decode("utf-8")
        return f"data:{self.mime_type};base64,{encoded}"


class RawExtraction(BaseModel):
    """
    Boundary check for the model's JSON output.

    Only the top-level shape is enforced here: at least one entity object must
    be present. Everything inside the entity objects stays untyped and is left
    to the normalizer.
    """
    model_config = ConfigDict(extra="allow")

    date: Any = None
    lantabur: Optional[Dict[str, Any]] = None
    taqwa: Optional[Dict[str, Any]] = None
    overallGrandTotal: Any = None

    @model_validator(mode="after")
    def _require_an_entity(self) -> "RawExtraction":
        if self.lantabur is None and self.taqwa is None:
            raise ValueError("response contains neither 'lantabur' nor 'taqwa' data")
        return self


class LineItem(BaseModel):
    """A named loading-capacity entry with its share of the entity total."""
    name: str
    value: float
    percentage: float = 0.0


class ShareValue(BaseModel):
    """In-house or subcontract production with its share of the entity total."""
    value: float
    percentage: float = 0.0


class EntityProduction(BaseModel):
    """Normalized daily production for one industry."""
    daily_production_total: float = 0.0
    loading_capacity: List[LineItem] = Field(default_factory=list)
    in_house: ShareValue = Field(default_factory=lambda: ShareValue(value=0.0))
    sub_contract: ShareValue = Field(default_factory=lambda: ShareValue(value=0.0))
    lab_rft: Optional[str] = None
    total_this_month: Optional[float] = None
    average_per_day: Optional[float] = None  # Derived from total_this_month


class ProductionReport(BaseModel):
    """Normalized report for both industries on one date."""
    date: str = ""
    lantabur: EntityProduction = Field(default_factory=EntityProduction)
    taqwa: EntityProduction = Field(default_factory=EntityProduction)
    overall_grand_total: Optional[float] = None

    def entities(self) -> List[Tuple[str, EntityProduction]]:
        """Return (display name, data) pairs in fixed display order."""
        return [("Lantabur", self.lantabur), ("Taqwa", self.taqwa)]


class AccentColor(BaseModel):
    """Dashboard accent colour with its HSL value."""
    name: str
    value: str


class UserPreferences(BaseModel):
    """Durable user settings."""
    api_key: str = ""
    accent_color: AccentColor


class ChartDescription(BaseModel):
    """Model answer for a chart description request."""
    description: str


class DataInsights(BaseModel):
    """Model answer for an insights request."""
    insights: List[str]

"""Pydantic schemas for the analysis history."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cheat_risk.core.enums import GameFormat, RiskLevel


class HistoryEntry(BaseModel):
    """One analyzed player, as kept in the history list."""

    username: str = Field(..., min_length=1, description="Analyzed player")
    score: int = Field(..., ge=0, le=100, description="Headline risk score")
    format: Optional[GameFormat] = Field(
        None, description="Format behind the headline score"
    )
    risk_level: RiskLevel
    analyzed_at: datetime

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        """Case-insensitive identity of the entry."""
        return self.username.lower()


class HistoryListResponse(BaseModel):
    """History listing, newest username first."""

    entries: List[HistoryEntry] = Field(default_factory=list)
    total: int = Field(..., ge=0)

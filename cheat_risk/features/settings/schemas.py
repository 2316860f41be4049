"""Pydantic schemas for user preferences."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UserPreferences(BaseModel):
    """User-facing preferences of the analyzer."""

    rated_only: bool = Field(
        default=True, description="Only count rated games in the recent sample"
    )
    auto_open_popup: bool = Field(
        default=True, description="Open the result view when an opponent is found"
    )
    show_in_page_badge: bool = Field(
        default=True, description="Show the risk badge next to the opponent"
    )
    moderate_risk_threshold: int = Field(default=50, ge=0, le=100)
    high_risk_threshold: int = Field(default=70, ge=0, le=100)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_thresholds(self) -> "UserPreferences":
        if self.moderate_risk_threshold >= self.high_risk_threshold:
            raise ValueError(
                "moderate_risk_threshold must be lower than high_risk_threshold"
            )
        return self


DEFAULT_PREFERENCES = UserPreferences()

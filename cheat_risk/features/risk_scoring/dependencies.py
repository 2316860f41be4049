"""Dependencies for the risk scoring feature."""

from typing import Annotated

from fastapi import Depends, Request

from .service import RiskAnalysisService


def get_risk_analysis_service(request: Request) -> RiskAnalysisService:
    """Get the risk analysis service created at application startup."""
    return request.app.state.risk_analysis_service


# Type alias for cleaner dependency injection
RiskAnalysisServiceDep = Annotated[
    RiskAnalysisService, Depends(get_risk_analysis_service)
]

__all__ = ["get_risk_analysis_service", "RiskAnalysisServiceDep"]

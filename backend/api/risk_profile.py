"""Risk profile questionnaire endpoints."""

from fastapi import APIRouter

from api.helpers import translate_service_errors
from schemas import QuestionResponse, RiskAssessmentResponse, RiskProfileRequest
from services.risk_profile_service import RiskProfileService

router = APIRouter(prefix="/api/risk-profile", tags=["risk-profile"])


@router.get("/questions", response_model=list[QuestionResponse])
def list_questions():
    """The questionnaire, in presentation order."""
    return list(RiskProfileService.get_questions())


@router.post("", response_model=RiskAssessmentResponse)
def assess_risk_profile(data: RiskProfileRequest):
    """Score the answers and return the matching investor profile.

    Raises:
        HTTPException: 400 if a required question is unanswered.
    """
    with translate_service_errors():
        return RiskProfileService.assess(data.responses)

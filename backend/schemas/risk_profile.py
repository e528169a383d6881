"""Pydantic schemas for the risk profile questionnaire."""

from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict


class QuestionOptionResponse(BaseModel):
    value: str
    score: int
    label: str

    model_config = ConfigDict(from_attributes=True)


class QuestionResponse(BaseModel):
    id: str
    question: str
    type: str
    required: bool
    weight: Decimal
    options: list[QuestionOptionResponse]

    model_config = ConfigDict(from_attributes=True)


class RiskProfileRequest(BaseModel):
    """Questionnaire answers keyed by question id.

    Multi-select questions take a list of option values.
    """

    responses: dict[str, Union[str, list[str]]]


class RiskProfileDetail(BaseModel):
    type: str
    label: str
    description: str
    characteristics: list[str]
    suitable_investments: list[str]
    asset_allocation: dict[str, int]

    model_config = ConfigDict(from_attributes=True)


class ProfileRecommendationsResponse(BaseModel):
    investment_strategy: str
    portfolio_rebalancing: str
    risk_management: str
    tax_planning: str
    monitoring: str

    model_config = ConfigDict(from_attributes=True)


class RiskAssessmentResponse(BaseModel):
    score: Decimal
    profile: RiskProfileDetail
    recommendations: ProfileRecommendationsResponse

    model_config = ConfigDict(from_attributes=True)

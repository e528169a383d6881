"""Investor risk profiling: a weighted questionnaire and free-text assessment."""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal, Optional, Union

from services.exceptions import InvalidInputError
from utils.numbers import HUNDRED, ZERO

logger = logging.getLogger(__name__)

Answer = Union[str, list[str]]


@dataclass(frozen=True)
class QuestionOption:
    value: str
    score: int
    label: str


@dataclass(frozen=True)
class Question:
    id: str
    question: str
    weight: Decimal
    options: tuple[QuestionOption, ...]
    type: Literal["radio", "checkbox"] = "radio"
    required: bool = True

    def score_for(self, value: str) -> Optional[int]:
        for option in self.options:
            if option.value == value:
                return option.score
        return None


def _options(*entries: tuple[str, int, str]) -> tuple[QuestionOption, ...]:
    return tuple(QuestionOption(value, score, label) for value, score, label in entries)


QUESTIONS: tuple[Question, ...] = (
    Question(
        id="age",
        question="What is your age group?",
        weight=Decimal("0.20"),
        options=_options(
            ("18-25", 10, "18-25 years"),
            ("26-35", 8, "26-35 years"),
            ("36-45", 6, "36-45 years"),
            ("46-55", 4, "46-55 years"),
            ("56-65", 2, "56-65 years"),
            ("65+", 1, "65+ years"),
        ),
    ),
    Question(
        id="income",
        question="What is your annual household income?",
        weight=Decimal("0.15"),
        options=_options(
            ("<3", 2, "Less than ₹3 Lakhs"),
            ("3-6", 4, "₹3-6 Lakhs"),
            ("6-10", 6, "₹6-10 Lakhs"),
            ("10-20", 8, "₹10-20 Lakhs"),
            ("20-50", 9, "₹20-50 Lakhs"),
            (">50", 10, "More than ₹50 Lakhs"),
        ),
    ),
    Question(
        id="investment_experience",
        question="How many years of investment experience do you have?",
        weight=Decimal("0.15"),
        options=_options(
            ("0", 1, "None (Just starting)"),
            ("1-3", 4, "1-3 years"),
            ("3-5", 6, "3-5 years"),
            ("5-10", 8, "5-10 years"),
            (">10", 10, "More than 10 years"),
        ),
    ),
    Question(
        id="risk_tolerance",
        question="How would you describe your risk tolerance?",
        weight=Decimal("0.20"),
        options=_options(
            ("conservative", 2, "Very Conservative - Cannot tolerate any loss"),
            ("moderately_conservative", 4, "Moderately Conservative - Prefer safety over returns"),
            ("moderate", 6, "Moderate - Willing to take calculated risks"),
            ("moderately_aggressive", 8, "Moderately Aggressive - Comfortable with market volatility"),
            ("aggressive", 10, "Very Aggressive - Willing to take high risks for high returns"),
        ),
    ),
    Question(
        id="investment_horizon",
        question="What is your investment time horizon?",
        weight=Decimal("0.15"),
        options=_options(
            ("<1", 2, "Less than 1 year"),
            ("1-3", 4, "1-3 years"),
            ("3-5", 6, "3-5 years"),
            ("5-10", 8, "5-10 years"),
            (">10", 10, "More than 10 years"),
        ),
    ),
    Question(
        id="dependents",
        question="How many financial dependents do you have?",
        weight=Decimal("0.10"),
        options=_options(
            ("0", 10, "None"),
            ("1-2", 7, "1-2 dependents"),
            ("3-4", 4, "3-4 dependents"),
            (">4", 2, "More than 4 dependents"),
        ),
    ),
    Question(
        id="emergency_fund",
        question="Do you have an emergency fund covering at least 6 months of expenses?",
        weight=Decimal("0.10"),
        options=_options(
            ("yes_full", 10, "Yes, fully covered"),
            ("yes_partial", 6, "Yes, partially covered"),
            ("no", 2, "No"),
        ),
    ),
    Question(
        id="market_reaction",
        question="If your portfolio fell by 20% in a market downturn, what would you do?",
        weight=Decimal("0.15"),
        options=_options(
            ("sell_all", 1, "Sell all investments"),
            ("sell_some", 4, "Sell some investments"),
            ("hold_wait", 7, "Hold and wait for recovery"),
            ("buy_more", 10, "Buy more at lower prices"),
        ),
    ),
    Question(
        id="investment_knowledge",
        question="How would you rate your knowledge of financial products and markets?",
        weight=Decimal("0.10"),
        options=_options(
            ("none", 2, "No knowledge"),
            ("basic", 4, "Basic knowledge"),
            ("intermediate", 7, "Intermediate knowledge"),
            ("advanced", 10, "Advanced knowledge"),
        ),
    ),
    Question(
        id="investment_goals",
        question="What are your primary investment goals? (Select all that apply)",
        weight=Decimal("0.10"),
        type="checkbox",
        options=_options(
            ("retirement", 8, "Retirement Planning"),
            ("wealth_creation", 10, "Wealth Creation"),
            ("children_education", 6, "Children's Education"),
            ("buy_property", 6, "Buy Property"),
            ("emergency_fund", 2, "Emergency Fund"),
            ("tax_saving", 4, "Tax Saving"),
            ("regular_income", 3, "Regular Income"),
        ),
    ),
)


@dataclass(frozen=True)
class RiskProfile:
    type: str
    label: str
    description: str
    characteristics: list[str]
    suitable_investments: list[str]
    asset_allocation: dict[str, int]


@dataclass(frozen=True)
class ProfileRecommendations:
    investment_strategy: str
    portfolio_rebalancing: str
    risk_management: str
    tax_planning: str
    monitoring: str


@dataclass
class RiskAssessment:
    """Result of scoring a completed questionnaire."""

    score: Decimal
    profile: RiskProfile
    recommendations: ProfileRecommendations


@dataclass
class MessageRiskAssessment:
    """Coarse profile inferred from a chat message."""

    type: str
    score: int
    risk_preference: str
    time_horizon: str
    investment_amount: Optional[int]
    description: str
    characteristics: list[str] = field(default_factory=list)
    suitable_investments: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


# Upper score bound (inclusive) -> profile
PROFILES: tuple[tuple[int, RiskProfile], ...] = (
    (30, RiskProfile(
        type="conservative",
        label="Conservative Investor",
        description=(
            "You prioritize capital preservation over high returns. "
            "You prefer stable, low-risk investments."
        ),
        characteristics=[
            "Low risk tolerance",
            "Preference for guaranteed returns",
            "Focus on capital preservation",
            "Short to medium-term investment horizon",
        ],
        suitable_investments=[
            "Fixed Deposits",
            "PPF",
            "Debt Mutual Funds",
            "Government Bonds",
            "Large-cap Equity Funds (small allocation)",
        ],
        asset_allocation={"equity": 10, "debt": 75, "gold": 5, "cash": 10},
    )),
    (50, RiskProfile(
        type="moderately_conservative",
        label="Moderately Conservative Investor",
        description=(
            "You seek stable returns with moderate risk. "
            "You prefer a balanced approach with emphasis on safety."
        ),
        characteristics=[
            "Low to moderate risk tolerance",
            "Preference for stable returns",
            "Willing to take calculated risks",
            "Medium-term investment horizon",
        ],
        suitable_investments=[
            "Hybrid Mutual Funds",
            "Large-cap Equity Funds",
            "Corporate Bonds",
            "ELSS Funds",
            "Index Funds",
        ],
        asset_allocation={"equity": 30, "debt": 60, "gold": 5, "cash": 5},
    )),
    (70, RiskProfile(
        type="moderate",
        label="Moderate Investor",
        description=(
            "You seek balanced growth with manageable risk. You understand market "
            "volatility and are willing to take calculated risks."
        ),
        characteristics=[
            "Moderate risk tolerance",
            "Balanced approach to growth and safety",
            "Understanding of market cycles",
            "Medium to long-term investment horizon",
        ],
        suitable_investments=[
            "Multi-cap Equity Funds",
            "Large & Mid-cap Funds",
            "Hybrid Aggressive Funds",
            "ELSS Funds",
            "Select Blue-chip Stocks",
        ],
        asset_allocation={"equity": 60, "debt": 30, "gold": 5, "cash": 5},
    )),
    (85, RiskProfile(
        type="moderately_aggressive",
        label="Moderately Aggressive Investor",
        description=(
            "You prioritize growth and are comfortable with market volatility "
            "for potentially higher returns."
        ),
        characteristics=[
            "High risk tolerance",
            "Growth-focused approach",
            "Comfortable with market volatility",
            "Long-term investment horizon",
        ],
        suitable_investments=[
            "Mid-cap Equity Funds",
            "Small-cap Funds",
            "Sector-specific Funds",
            "Direct Stocks",
            "International Funds",
        ],
        asset_allocation={"equity": 75, "debt": 20, "gold": 3, "cash": 2},
    )),
    (100, RiskProfile(
        type="aggressive",
        label="Aggressive Investor",
        description=(
            "You prioritize maximum growth and are willing to take high risks "
            "for potentially high returns."
        ),
        characteristics=[
            "Very high risk tolerance",
            "High growth expectations",
            "Comfortable with high volatility",
            "Very long-term investment horizon",
        ],
        suitable_investments=[
            "Small-cap Funds",
            "Micro-cap Funds",
            "Thematic Funds",
            "Direct Stocks (including small-cap)",
            "Alternative Investments",
        ],
        asset_allocation={"equity": 85, "debt": 10, "gold": 3, "cash": 2},
    )),
)

RECOMMENDATIONS: dict[str, ProfileRecommendations] = {
    "conservative": ProfileRecommendations(
        investment_strategy=(
            "Focus on capital preservation with stable returns. Start with debt "
            "instruments and gradually add equity exposure."
        ),
        portfolio_rebalancing="Review quarterly. Maintain 70-80% in debt instruments.",
        risk_management="Maintain 6-12 months emergency fund. Avoid speculative investments.",
        tax_planning="Maximize PPF, tax-saving FDs, and traditional tax-saving options.",
        monitoring="Monitor interest rate changes and inflation impact on returns.",
    ),
    "moderately_conservative": ProfileRecommendations(
        investment_strategy=(
            "Balanced approach with 30% equity exposure. Focus on large-cap funds and hybrid funds."
        ),
        portfolio_rebalancing="Review semi-annually. Maintain 60-70% in debt, 30% in equity.",
        risk_management="Maintain 6 months emergency fund. Limit equity to large-cap stocks.",
        tax_planning="Combine traditional options with ELSS for equity exposure.",
        monitoring="Monitor both debt and equity market performance.",
    ),
    "moderate": ProfileRecommendations(
        investment_strategy=(
            "Balanced growth approach with 60% equity. Diversify across market caps and sectors."
        ),
        portfolio_rebalancing="Review quarterly. Maintain 60% equity, 30% debt allocation.",
        risk_management="Maintain 6 months emergency fund. Use SIP for equity investments.",
        tax_planning="Optimize between ELSS, PPF, and other tax-saving instruments.",
        monitoring="Regular monitoring of portfolio performance and market trends.",
    ),
    "moderately_aggressive": ProfileRecommendations(
        investment_strategy="Growth-focused with 75% equity. Include mid-cap and small-cap exposure.",
        portfolio_rebalancing="Review quarterly. Maintain 75% equity, 20% debt allocation.",
        risk_management="Maintain 3-6 months emergency fund. Use systematic transfer plans.",
        tax_planning="Focus on ELSS and tax-efficient equity funds.",
        monitoring="Active monitoring required. Consider professional advice.",
    ),
    "aggressive": ProfileRecommendations(
        investment_strategy="High growth strategy with 85% equity. Include small-cap and sector funds.",
        portfolio_rebalancing="Review monthly. Maintain 85% equity, 10% debt allocation.",
        risk_management="Maintain 3 months emergency fund. Be prepared for high volatility.",
        tax_planning="Focus on tax-efficient equity investments and long-term gains.",
        monitoring="Very active monitoring required. Regular portfolio review essential.",
    ),
}

# Free-text assessment tables; order matters (earlier entries win ties).
RISK_PREFERENCE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "conservative": ("conservative", "low risk", "safe", "guaranteed", "fixed income", "stable"),
    "moderate": ("moderate", "balanced", "medium risk", "some risk", "reasonable"),
    "aggressive": ("aggressive", "high risk", "high returns", "growth", "speculative", "volatile"),
}

TIME_HORIZON_KEYWORDS: dict[str, tuple[str, ...]] = {
    "short_term": ("short term", "1 year", "6 months", "intraday", "trading"),
    "medium_term": ("medium term", "3 years", "5 years", "2-5 years"),
    "long_term": ("long term", "10 years", "15 years", "20 years", "retirement"),
}

AMOUNT_PATTERNS: tuple[tuple[re.Pattern, int], ...] = (
    (re.compile(r"(\d+)\s*lakh", re.IGNORECASE), 100_000),
    (re.compile(r"(\d+)\s*crore", re.IGNORECASE), 10_000_000),
    (re.compile(r"₹?(\d+)\s*k", re.IGNORECASE), 1_000),
    (re.compile(r"₹?(\d+)"), 1),
)

MESSAGE_PROFILES: dict[str, dict] = {
    "conservative": {
        "description": "You prefer capital preservation over high returns",
        "characteristics": [
            "Low risk tolerance",
            "Preference for fixed income",
            "Focus on capital preservation",
            "Long-term wealth preservation",
        ],
        "suitable_investments": [
            "Fixed deposits",
            "PPF",
            "Debt mutual funds",
            "Large-cap equity funds (small allocation)",
            "Government bonds",
        ],
        "recommendations": [
            "Maintain 70-80% in debt instruments",
            "Keep 20-30% in equity for long-term growth",
            "Build emergency fund first",
            "Avoid speculative investments",
        ],
    },
    "moderate": {
        "description": "You seek balanced growth with manageable risk",
        "characteristics": [
            "Medium risk tolerance",
            "Balanced approach",
            "Willing to take calculated risks",
            "Focus on steady growth",
        ],
        "suitable_investments": [
            "Large-cap equity funds",
            "Hybrid funds",
            "ELSS funds",
            "Corporate bonds",
            "Blue-chip stocks",
        ],
        "recommendations": [
            "Maintain 60-70% in equity",
            "Keep 25-35% in debt",
            "Consider 5-10% in gold",
            "Regular portfolio rebalancing",
        ],
    },
    "aggressive": {
        "description": "You prioritize high returns and are comfortable with volatility",
        "characteristics": [
            "High risk tolerance",
            "Growth-focused",
            "Comfortable with volatility",
            "Long-term wealth creation",
        ],
        "suitable_investments": [
            "Mid-cap and small-cap funds",
            "Sector-specific funds",
            "Direct stocks",
            "International funds",
            "Alternative investments",
        ],
        "recommendations": [
            "Maintain 75-85% in equity",
            "Keep 10-15% in debt",
            "Consider 5% in alternative investments",
            "Regular monitoring and rebalancing",
        ],
    },
}


def _is_blank(answer) -> bool:
    if answer is None:
        return True
    if isinstance(answer, list):
        return len(answer) == 0
    return not str(answer).strip()


class RiskProfileService:
    """Scores the risk questionnaire and maps scores to investor profiles."""

    @staticmethod
    def get_questions() -> tuple[Question, ...]:
        return QUESTIONS

    @staticmethod
    def validate_responses(responses: dict[str, Answer]) -> list[str]:
        """Return one error message per unanswered required question."""
        return [
            f"{question.question} is required."
            for question in QUESTIONS
            if question.required and _is_blank(responses.get(question.id))
        ]

    @staticmethod
    def calculate_score(responses: dict[str, Answer]) -> Decimal:
        """Weighted mean of the chosen option scores, scaled to 0-100.

        Unanswered questions are left out of both the score and the weight.
        A multi-select answer contributes the mean of its options' scores;
        unknown option values score 0.
        """
        total_score = ZERO
        total_weight = ZERO
        for question in QUESTIONS:
            answer = responses.get(question.id)
            if _is_blank(answer):
                continue

            if question.type == "checkbox":
                selected = answer if isinstance(answer, list) else [answer]
                option_scores = [question.score_for(value) or 0 for value in selected]
                total_score += Decimal(sum(option_scores)) / len(option_scores) * question.weight
            else:
                option_score = question.score_for(answer if isinstance(answer, str) else str(answer))
                if option_score is not None:
                    total_score += option_score * question.weight
            total_weight += question.weight

        if total_weight == 0:
            return ZERO
        score = total_score / total_weight * 10
        return min(HUNDRED, max(ZERO, score))

    @staticmethod
    def determine_profile(score: Decimal) -> RiskProfile:
        for upper_bound, profile in PROFILES:
            if score <= upper_bound:
                return profile
        return PROFILES[-1][1]

    @staticmethod
    def generate_recommendations(profile: RiskProfile) -> ProfileRecommendations:
        return RECOMMENDATIONS[profile.type]

    @classmethod
    def assess(cls, responses: dict[str, Answer]) -> RiskAssessment:
        """Score a completed questionnaire.

        Raises:
            InvalidInputError: A required question was not answered.
        """
        errors = cls.validate_responses(responses)
        if errors:
            missing = [q.id for q in QUESTIONS if q.required and _is_blank(responses.get(q.id))]
            raise InvalidInputError("responses." + missing[0], " ".join(errors))

        score = cls.calculate_score(responses)
        profile = cls.determine_profile(score)
        logger.info("Risk questionnaire scored %.1f (%s)", score, profile.type)
        return RiskAssessment(
            score=score,
            profile=profile,
            recommendations=cls.generate_recommendations(profile),
        )

    # Free-text assessment

    @staticmethod
    def extract_risk_preference(message: str) -> str:
        lowered = message.lower()
        preference, best = "moderate", 0
        for level, keywords in RISK_PREFERENCE_KEYWORDS.items():
            matches = sum(1 for keyword in keywords if keyword in lowered)
            if matches > best:
                preference, best = level, matches
        return preference

    @staticmethod
    def extract_time_horizon(message: str) -> str:
        lowered = message.lower()
        for horizon, keywords in TIME_HORIZON_KEYWORDS.items():
            if any(keyword in lowered for keyword in keywords):
                return horizon
        return "medium_term"

    @staticmethod
    def extract_investment_amount(message: str) -> Optional[int]:
        """Rupee amount mentioned in ``message`` ("5 lakh", "2 crore", "50k")."""
        for pattern, multiplier in AMOUNT_PATTERNS:
            match = pattern.search(message)
            if match:
                return int(match.group(1)) * multiplier
        return None

    @classmethod
    def assess_from_message(
        cls, message: str, user_profile: Optional[dict] = None
    ) -> MessageRiskAssessment:
        """Infer conservative / moderate / aggressive from a chat message.

        Starts at 50 and moves with the stated preference (+/-20), time
        horizon (+/-15), age below 30 or above 50 (+/-10) and income above
        10 lakh or below 3 lakh (+/-5); clamped to 0-100.
        """
        user_profile = user_profile or {}
        preference = cls.extract_risk_preference(message)
        horizon = cls.extract_time_horizon(message)

        score = 50
        if preference == "conservative":
            score -= 20
        elif preference == "aggressive":
            score += 20

        if horizon == "long_term":
            score += 15
        elif horizon == "short_term":
            score -= 15

        age = user_profile.get("age")
        if age:
            if age < 30:
                score += 10
            elif age > 50:
                score -= 10

        income = user_profile.get("income")
        if income:
            if income > 1_000_000:
                score += 5
            elif income < 300_000:
                score -= 5

        score = max(0, min(100, score))
        if score < 35:
            profile_type = "conservative"
        elif score < 65:
            profile_type = "moderate"
        else:
            profile_type = "aggressive"

        details = MESSAGE_PROFILES[profile_type]
        return MessageRiskAssessment(
            type=profile_type,
            score=score,
            risk_preference=preference,
            time_horizon=horizon,
            investment_amount=cls.extract_investment_amount(message),
            description=details["description"],
            characteristics=list(details["characteristics"]),
            suitable_investments=list(details["suitable_investments"]),
            recommendations=list(details["recommendations"]),
        )

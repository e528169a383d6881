"""Keyword-weighted intent classification for chat messages.

Rules are evaluated in table order. Each keyword matches at the start of a
word (so ``diversif`` matches "diversify" and "diversification", and
``tax`` does not match "syntax"); a rule's score is the sum of the weights
of its matching keywords. The highest score wins, an earlier rule wins a
tie, and a message matching nothing is ``general``.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Literal

from services.knowledge_base import CommodityProfile, StockMention, find_commodities, find_stocks

logger = logging.getLogger(__name__)

Intent = Literal[
    "stock_lookup",
    "mutual_fund",
    "portfolio_advice",
    "tax_planning",
    "risk_profiling",
    "market_overview",
    "general",
]

# A named stock is strong evidence for a stock question.
STOCK_ENTITY_BONUS = 3
# A named commodity is routed to the market overview.
COMMODITY_ENTITY_BONUS = 2


@dataclass(frozen=True)
class IntentRule:
    intent: Intent
    keywords: tuple[tuple[str, int], ...]
    patterns: tuple[tuple[re.Pattern, int], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        compiled = tuple(
            (re.compile(r"\b" + re.escape(keyword), re.IGNORECASE), weight)
            for keyword, weight in self.keywords
        )
        object.__setattr__(self, "patterns", compiled)

    def score(self, message: str) -> int:
        return sum(weight for pattern, weight in self.patterns if pattern.search(message))


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule("stock_lookup", (
        ("stock", 2),
        ("share", 2),
        ("price", 1),
        ("target price", 2),
        ("buy", 1),
        ("sell", 1),
        ("nse", 1),
        ("bse", 1),
        ("p/e", 1),
        ("dividend", 1),
    )),
    IntentRule("mutual_fund", (
        ("mutual fund", 3),
        ("fund", 1),
        ("sip", 2),
        ("nav", 2),
        ("expense ratio", 2),
        ("index fund", 2),
        ("flexi cap", 2),
        ("large cap fund", 2),
        ("elss", 2),
        ("amc", 1),
    )),
    IntentRule("portfolio_advice", (
        ("portfolio", 3),
        ("allocat", 2),
        ("diversif", 2),
        ("rebalanc", 2),
        ("invest", 1),
        ("asset", 1),
        ("wealth", 1),
    )),
    IntentRule("tax_planning", (
        ("tax", 3),
        ("80c", 3),
        ("ltcg", 2),
        ("stcg", 2),
        ("capital gain", 2),
        ("ppf", 2),
        ("nps", 2),
        ("deduction", 2),
        ("elss", 1),
    )),
    IntentRule("risk_profiling", (
        ("risk profile", 4),
        ("risk tolerance", 4),
        ("risk appetite", 4),
        ("risk", 1),
        ("conservative", 2),
        ("aggressive", 2),
        ("safe", 1),
        ("volatil", 1),
    )),
    IntentRule("market_overview", (
        ("market", 2),
        ("nifty", 3),
        ("sensex", 3),
        ("sentiment", 2),
        ("vix", 2),
        ("sector", 1),
        ("gainer", 2),
        ("loser", 2),
        ("index", 1),
    )),
)


@dataclass
class Classification:
    intent: Intent
    score: int
    scores: dict[str, int] = field(default_factory=dict)
    stocks: list[StockMention] = field(default_factory=list)
    commodities: list[CommodityProfile] = field(default_factory=list)


class IntentClassifier:
    """Ordered rule-table classifier.

    Args:
        rules: Rule table, highest precedence first. Defaults to
            ``INTENT_RULES``.
    """

    def __init__(self, rules: tuple[IntentRule, ...] = INTENT_RULES):
        self.rules = rules

    def classify(self, message: str) -> Classification:
        stocks = find_stocks(message)
        commodities = find_commodities(message)

        scores: dict[str, int] = {}
        for rule in self.rules:
            score = rule.score(message)
            if rule.intent == "stock_lookup" and stocks:
                score += STOCK_ENTITY_BONUS
            if rule.intent == "market_overview" and commodities:
                score += COMMODITY_ENTITY_BONUS
            scores[rule.intent] = score

        best_intent: Intent = "general"
        best_score = 0
        for rule in self.rules:
            # Strictly greater: earlier rules keep ties
            if scores[rule.intent] > best_score:
                best_intent, best_score = rule.intent, scores[rule.intent]

        logger.debug("Classified %r as %s (scores=%s)", message[:80], best_intent, scores)
        return Classification(
            intent=best_intent,
            score=best_score,
            scores=scores,
            stocks=stocks,
            commodities=commodities,
        )

"""Best-effort cost extraction from proposal text.

The amounts found here are a text-mining signal, not financial analysis: the
first amount mentioned is taken at face value and USD figures are converted
with a fixed approximate rate.
"""

import re
from typing import Optional, Tuple

from govbot.backend.models import BudgetImpact, CostAnalysis, Proposal
from govbot.config import ScoringConfig, config
from govbot.lib.logger import configure_logger
from govbot.services.governance.scoring import SCORE_PRECISION
from govbot.services.governance.tracks import is_spending_track

logger = configure_logger(__name__)

COST_PATTERN = re.compile(
    r"(\d+(?:,\d{3})*(?:\.\d+)?)\s*(dot|ksm|usd|dollars?)", re.IGNORECASE
)

# Serialized call data, e.g. {"beneficiaries":[{"amount":"500000000000"}]}
PLANCK_AMOUNT_PATTERN = re.compile(r'amount"\s*:\s*"(\d+)"')

NATIVE_TOKENS = {"dot", "ksm"}


def _format_amount(value: float) -> str:
    return f"{value:.10f}".rstrip("0").rstrip(".")


def _contains_any(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


def extract_stated_cost(
    title: str, description: str, usd_per_token_rate: float
) -> Tuple[Optional[float], Optional[str]]:
    """Return (amount in native tokens, justification) for the first stated cost."""
    match = COST_PATTERN.search(description or "") or COST_PATTERN.search(title or "")
    if match is None:
        return None, None

    try:
        amount = float(match.group(1).replace(",", ""))
    except ValueError:
        logger.warning(f"Could not parse cost amount: {match.group(0)!r}")
        return None, None

    currency = match.group(2).lower()
    if currency in NATIVE_TOKENS:
        estimated_cost = amount
    else:
        estimated_cost = amount / usd_per_token_rate

    return estimated_cost, f"Estimated cost: {match.group(0)}"


def extract_planck_cost(
    description: str, planck_decimals: int
) -> Tuple[Optional[float], Optional[str]]:
    """Fallback: read a planck amount embedded in serialized call data."""
    match = PLANCK_AMOUNT_PATTERN.search(description or "")
    if match is None:
        return None, None

    try:
        estimated_cost = int(match.group(1)) / (10**planck_decimals)
    except (ValueError, OverflowError):
        logger.warning(f"Could not parse beneficiary amount: {match.group(1)!r}")
        return None, None

    return (
        estimated_cost,
        f"Estimated cost from beneficiary data: {_format_amount(estimated_cost)} DOT",
    )


def classify_budget_impact(
    estimated_cost: Optional[float], scoring: Optional[ScoringConfig] = None
) -> Optional[BudgetImpact]:
    if estimated_cost is None:
        return None
    scoring = scoring or config.scoring
    if estimated_cost > scoring.budget_high_cutoff:
        return BudgetImpact.HIGH
    if estimated_cost > scoring.budget_medium_cutoff:
        return BudgetImpact.MEDIUM
    return BudgetImpact.LOW


def analyze_cost(
    proposal: Proposal, scoring: Optional[ScoringConfig] = None
) -> CostAnalysis:
    scoring = scoring or config.scoring
    keywords = scoring.keywords
    description = (proposal.description or "").lower()

    estimated_cost, justification = extract_stated_cost(
        proposal.title, proposal.description, scoring.usd_per_token_rate
    )
    if estimated_cost is None:
        estimated_cost, justification = extract_planck_cost(
            proposal.description, scoring.planck_decimals
        )

    cost_effectiveness = scoring.neutral_cost_effectiveness

    if is_spending_track(proposal.track):
        # Spending proposals that do not state a cost are penalized
        cost_effectiveness = 0.7 if estimated_cost is not None else 0.3
        if _contains_any(description, keywords.budget_planning):
            cost_effectiveness += 0.2
        if _contains_any(description, keywords.adoption):
            cost_effectiveness += 0.1

    cost_effectiveness = round(cost_effectiveness, SCORE_PRECISION)
    cost_effectiveness = max(0.0, min(1.0, cost_effectiveness))

    analysis = CostAnalysis(
        estimated_cost=estimated_cost,
        cost_justification=justification,
        cost_effectiveness=cost_effectiveness,
        budget_impact=classify_budget_impact(estimated_cost, scoring),
    )
    logger.debug(
        f"Cost analysis for proposal {proposal.chain_id}: "
        f"cost={estimated_cost} effectiveness={cost_effectiveness:.2f}"
    )
    return analysis

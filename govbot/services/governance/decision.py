"""Score thresholding and the human-readable vote rationale."""

import math
from typing import Optional

from govbot.backend.models import (
    CostAnalysis,
    ProposalScore,
    TrackValidation,
    VoteDecision,
)
from govbot.config import DecisionThresholds, config

DECISION_EXPLANATIONS = {
    VoteDecision.AYE: (
        "✅ Voting AYE: This proposal meets the high standards required "
        "(≥80% score) and demonstrates strong alignment with Polkadot's goals."
    ),
    VoteDecision.ABSTAIN: (
        "⚖️ Abstaining: This proposal shows promise but has areas for improvement "
        "(50-79% score). I encourage further discussion and refinement."
    ),
    VoteDecision.NAY: (
        "❌ Voting NAY: This proposal has significant concerns (<50% score) "
        "that need to be addressed before it can be supported."
    ),
}


def to_percent(value: float) -> int:
    """Round a [0, 1] fraction to a whole percent, halves rounding up."""
    return int(math.floor(value * 100 + 0.5))


def determine_vote_decision(
    score: ProposalScore, thresholds: Optional[DecisionThresholds] = None
) -> VoteDecision:
    thresholds = thresholds or config.scoring.thresholds
    if score.overall >= thresholds.aye:
        return VoteDecision.AYE
    if score.overall >= thresholds.abstain:
        return VoteDecision.ABSTAIN
    return VoteDecision.NAY


def generate_score_based_reasoning(
    score: ProposalScore,
    track_validation: TrackValidation,
    cost_analysis: CostAnalysis,
    decision: VoteDecision,
) -> str:
    sections = []

    if not track_validation.is_valid and track_validation.recommendation:
        sections.append(f"⚠️ Track Concern: {track_validation.recommendation}")

    if cost_analysis.estimated_cost is not None:
        sections.append(
            f"💰 Cost Analysis: {cost_analysis.cost_justification} "
            f"(Effectiveness: {to_percent(cost_analysis.cost_effectiveness)}%)"
        )

    breakdown = "\n".join(
        [
            f"Technical Feasibility: {to_percent(score.technical_feasibility)}%",
            f"Alignment with Goals: {to_percent(score.alignment_with_goals)}%",
            f"Economic Impact: {to_percent(score.economic_implications)}%",
            f"Security Considerations: {to_percent(score.security_implications)}%",
            f"Community Engagement: {to_percent(score.community_sentiment)}%",
            f"Track Appropriateness: {to_percent(score.track_specific)}%",
        ]
    )
    sections.append(f"📊 Score Breakdown:\n{breakdown}")
    sections.append(f"🎯 Overall Score: {to_percent(score.overall)}%")
    sections.append(DECISION_EXPLANATIONS[decision])

    return "\n\n".join(sections)

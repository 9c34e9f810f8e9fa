"""Weighted multi-factor proposal scoring."""

import math
from typing import List, Optional, Sequence

from govbot.backend.models import (
    CostAnalysis,
    Proposal,
    ProposalScore,
    TrackValidation,
    VoteHistoryEntry,
)
from govbot.config import ScoringConfig, config
from govbot.lib.logger import configure_logger

logger = configure_logger(__name__)

# Recent average above this dampens sentiment, below the floor boosts it
HISTORY_HIGH_WATERMARK = 0.8
HISTORY_LOW_WATERMARK = 0.4
HISTORY_DAMPEN_FACTOR = 0.9
HISTORY_BOOST_FACTOR = 1.1

# Decimal places kept before thresholds are applied; absorbs float summation error
SCORE_PRECISION = 10


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, round(value, SCORE_PRECISION)))


def _proposal_text(proposal: Proposal) -> str:
    return f"{proposal.title or ''} {proposal.description or ''}".lower()


def _matches(text: str, keywords: Sequence[str]) -> List[str]:
    return [keyword for keyword in keywords if keyword in text]


def technical_feasibility_score(text: str, keywords: Sequence[str]) -> float:
    return 0.8 if _matches(text, keywords) else 0.6


def alignment_score(text: str, keywords: Sequence[str]) -> float:
    if not keywords:
        return 0.3
    fraction = len(_matches(text, keywords)) / len(keywords)
    return _clamp(fraction + 0.3)


def security_score(text: str, keywords: Sequence[str]) -> float:
    return 0.8 if _matches(text, keywords) else 0.5


def community_sentiment_score(
    message_count: int,
    vote_history: Sequence[VoteHistoryEntry],
    window: int,
) -> float:
    """Engagement volume, nudged away from recent voting streaks.

    `vote_history` is chronological; the trailing `window` entries count as
    recent.
    """
    sentiment = min(1.0, message_count / 10 + 0.4)

    if vote_history and window > 0:
        recent = list(vote_history)[-window:]
        recent_average = sum(entry.score for entry in recent) / len(recent)
        if recent_average > HISTORY_HIGH_WATERMARK:
            sentiment *= HISTORY_DAMPEN_FACTOR
        elif recent_average < HISTORY_LOW_WATERMARK:
            sentiment *= HISTORY_BOOST_FACTOR

    return _clamp(sentiment)


def weighted_overall(score_parts: dict, scoring: ScoringConfig) -> float:
    weights = scoring.weights.as_dict()
    overall = math.fsum(score_parts[name] * weight for name, weight in weights.items())
    return _clamp(overall)


def score_proposal(
    proposal: Proposal,
    track_validation: TrackValidation,
    cost_analysis: CostAnalysis,
    vote_history: Optional[Sequence[VoteHistoryEntry]] = None,
    scoring: Optional[ScoringConfig] = None,
) -> ProposalScore:
    scoring = scoring or config.scoring
    keywords = scoring.keywords
    text = _proposal_text(proposal)

    parts = {
        "technical_feasibility": technical_feasibility_score(text, keywords.technical),
        "alignment_with_goals": alignment_score(text, keywords.alignment),
        "economic_implications": _clamp(cost_analysis.cost_effectiveness),
        "security_implications": security_score(text, keywords.security),
        "community_sentiment": community_sentiment_score(
            len(proposal.messages), vote_history or [], scoring.sentiment_window
        ),
        "track_specific": 0.9 if track_validation.is_valid else 0.3,
    }

    score = ProposalScore(**parts, overall=weighted_overall(parts, scoring))
    logger.debug(
        f"Scored proposal {proposal.chain_id}: overall={score.overall:.4f}",
        extra={"breakdown": parts},
    )
    return score

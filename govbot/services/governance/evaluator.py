"""Deterministic proposal evaluation pipeline.

Runs classification, track validation, cost analysis, scoring, thresholding and
reasoning in order over a proposal snapshot. This is the authoritative decision
procedure; language-model output is advisory only.
"""

from typing import Optional, Sequence

from govbot.backend.models import Proposal, ProposalEvaluation, VoteHistoryEntry
from govbot.config import ScoringConfig, config
from govbot.lib.logger import configure_logger
from govbot.services.governance.classifier import (
    KeywordProposalClassifier,
    ProposalClassifier,
)
from govbot.services.governance.cost import analyze_cost
from govbot.services.governance.decision import (
    determine_vote_decision,
    generate_score_based_reasoning,
)
from govbot.services.governance.scoring import score_proposal
from govbot.services.governance.track_validator import validate_track

logger = configure_logger(__name__)


def evaluate_proposal(
    proposal: Proposal,
    vote_history: Optional[Sequence[VoteHistoryEntry]] = None,
    classifier: Optional[ProposalClassifier] = None,
    scoring: Optional[ScoringConfig] = None,
) -> ProposalEvaluation:
    """Evaluate a proposal and decide how GovBot should vote.

    Args:
        proposal: Proposal snapshot including its message thread
        vote_history: Prior decisions, oldest first
        classifier: Proposal type classifier (keyword classifier by default)
        scoring: Scoring configuration (global configuration by default)

    Returns:
        ProposalEvaluation with the decision, reasoning and score breakdown
    """
    scoring = scoring or config.scoring
    classifier = classifier or KeywordProposalClassifier(
        scoring.keywords.proposal_types
    )
    vote_history = list(vote_history or [])

    proposal_type = classifier.classify(proposal.title, proposal.description)
    track_validation = validate_track(proposal.track, proposal_type)
    cost_analysis = analyze_cost(proposal, scoring)
    score = score_proposal(
        proposal, track_validation, cost_analysis, vote_history, scoring
    )
    decision = determine_vote_decision(score, scoring.thresholds)
    reasoning = generate_score_based_reasoning(
        score, track_validation, cost_analysis, decision
    )

    logger.info(
        f"Evaluated proposal {proposal.chain_id} ({proposal_type or 'unclassified'})",
        extra={
            "proposal_id": proposal.chain_id,
            "decision": str(decision),
            "overall": score.overall,
        },
    )

    return ProposalEvaluation(
        proposal_type=proposal_type,
        track_validation=track_validation,
        cost_analysis=cost_analysis,
        score=score,
        decision=decision,
        reasoning=reasoning,
    )

"""Deterministic governance engine.

Pure functions that turn a proposal snapshot into an Aye/Nay/Abstain decision
with a score breakdown and a written rationale.
"""

from .ballot import build_ballot, validate_conviction
from .classifier import (
    KeywordProposalClassifier,
    ProposalClassifier,
    classify_proposal,
)
from .cost import analyze_cost
from .decision import determine_vote_decision, generate_score_based_reasoning
from .evaluator import evaluate_proposal
from .history import FIRST_VOTE_MESSAGE, analyze_vote_history
from .readiness import check_vote_readiness
from .scoring import score_proposal
from .track_validator import validate_track
from .tracks import POLKADOT_TRACKS, VALID_TRACKS_BY_TYPE, get_track_name

__all__ = [
    "build_ballot",
    "validate_conviction",
    "KeywordProposalClassifier",
    "ProposalClassifier",
    "classify_proposal",
    "analyze_cost",
    "determine_vote_decision",
    "generate_score_based_reasoning",
    "evaluate_proposal",
    "FIRST_VOTE_MESSAGE",
    "analyze_vote_history",
    "check_vote_readiness",
    "score_proposal",
    "validate_track",
    "POLKADOT_TRACKS",
    "VALID_TRACKS_BY_TYPE",
    "get_track_name",
]

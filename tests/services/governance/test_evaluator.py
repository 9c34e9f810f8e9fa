"""End-to-end tests for the deterministic evaluation pipeline."""

import pytest

from govbot.backend.models import (
    ChatRole,
    Message,
    Proposal,
    ProposalType,
    VoteDecision,
    VoteHistoryEntry,
)
from govbot.config import ScoringConfig
from govbot.services.governance.decision import determine_vote_decision
from govbot.services.governance.evaluator import evaluate_proposal


def make_messages(count):
    return [
        Message(
            role=ChatRole.USER if i % 2 == 0 else ChatRole.ASSISTANT,
            content=f"message {i}",
        )
        for i in range(count)
    ]


@pytest.fixture
def runtime_upgrade():
    return Proposal(
        id="p-xcm",
        chain_id="1501",
        title="Runtime upgrade for XCM v4",
        description=(
            "This implementation has passed a security audit and improves "
            "ecosystem interoperability."
        ),
        track="0",
        messages=make_messages(6),
    )


@pytest.fixture
def misplaced_treasury():
    return Proposal(
        id="p-events",
        chain_id="1502",
        title="Treasury funding for community events",
        description="Covering venue costs for meetups.",
        track="0",
        messages=make_messages(2),
    )


def test_runtime_upgrade_on_root_track(runtime_upgrade):
    scoring = ScoringConfig()
    evaluation = evaluate_proposal(runtime_upgrade, [], scoring=scoring)
    score = evaluation.score

    assert evaluation.proposal_type == ProposalType.ROOT
    assert evaluation.track_validation.is_valid is True
    assert score.technical_feasibility == 0.8
    assert score.security_implications == 0.8
    # ecosystem, security and interoperability are alignment keywords
    assert score.alignment_with_goals == pytest.approx(3 / 6 + 0.3)
    assert score.track_specific == 0.9
    assert score.economic_implications == 0.5
    assert score.community_sentiment == pytest.approx(1.0)

    weights = scoring.weights
    expected = (
        score.technical_feasibility * weights.technical_feasibility
        + score.alignment_with_goals * weights.alignment_with_goals
        + score.economic_implications * weights.economic_implications
        + score.security_implications * weights.security_implications
        + score.community_sentiment * weights.community_sentiment
        + score.track_specific * weights.track_specific
    )
    assert score.overall == pytest.approx(expected)
    assert score.overall >= 0.5
    assert evaluation.decision == determine_vote_decision(score, scoring.thresholds)
    assert evaluation.decision in (VoteDecision.AYE, VoteDecision.ABSTAIN)


def test_treasury_proposal_on_root_track(misplaced_treasury):
    evaluation = evaluate_proposal(misplaced_treasury, [])

    assert evaluation.proposal_type == ProposalType.TREASURY
    assert evaluation.track_validation.is_valid is False
    assert evaluation.track_validation.expected_tracks == [
        "10",
        "21",
        "22",
        "30",
        "31",
        "32",
    ]
    for name in ("Treasurer", "Small Tipper", "Big Tipper", "Small Spender",
                 "Medium Spender", "Big Spender"):
        assert name in evaluation.track_validation.recommendation
    assert evaluation.score.track_specific == 0.3
    assert evaluation.reasoning.startswith("⚠️ Track Concern:")


def test_history_dampens_sentiment(runtime_upgrade):
    history = [
        VoteHistoryEntry(proposal_id=str(i), decision=VoteDecision.AYE, score=0.9)
        for i in range(3)
    ]
    without_history = evaluate_proposal(runtime_upgrade, [])
    with_history = evaluate_proposal(runtime_upgrade, history)

    assert with_history.score.community_sentiment == pytest.approx(
        0.9 * without_history.score.community_sentiment
    )


def test_unsignalled_proposal_is_conservative():
    proposal = Proposal(id="p-empty", chain_id="7", title="Hello", description="")
    evaluation = evaluate_proposal(proposal)

    assert evaluation.proposal_type is None
    assert evaluation.track_validation.is_valid is True
    assert evaluation.cost_analysis.estimated_cost is None
    assert 0.0 <= evaluation.score.overall <= 1.0
    assert evaluation.decision == VoteDecision.ABSTAIN


def test_evaluation_is_deterministic(runtime_upgrade):
    assert evaluate_proposal(runtime_upgrade) == evaluate_proposal(runtime_upgrade)


def test_score_of_exactly_eighty_percent_votes_aye():
    proposal = Proposal(
        id="p-grant",
        chain_id="1503",
        title="Ecosystem tooling",
        description=(
            "Request 500 DOT for ecosystem, community, decentralization, "
            "security, scalability and interoperability work."
        ),
        track="30",
        messages=make_messages(4),
    )
    evaluation = evaluate_proposal(proposal, [])

    assert evaluation.score.breakdown() == {
        "technical_feasibility": 0.6,
        "alignment_with_goals": 1.0,
        "economic_implications": 0.7,
        "security_implications": 0.8,
        "community_sentiment": 0.8,
        "track_specific": 0.9,
    }
    assert evaluation.score.overall == 0.8
    assert evaluation.decision == VoteDecision.AYE
    assert "🎯 Overall Score: 80%" in evaluation.reasoning
    assert evaluation.reasoning.endswith("demonstrates strong alignment with Polkadot's goals.")

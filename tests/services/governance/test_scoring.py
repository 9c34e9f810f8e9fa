"""Tests for multi-factor proposal scoring."""

import unittest

import pytest

from govbot.backend.models import (
    ChatRole,
    CostAnalysis,
    Message,
    Proposal,
    TrackValidation,
    VoteDecision,
    VoteHistoryEntry,
)
from govbot.config import ScoringConfig
from govbot.services.governance.scoring import (
    alignment_score,
    community_sentiment_score,
    score_proposal,
)

ALIGNMENT_KEYWORDS = [
    "ecosystem",
    "community",
    "decentralization",
    "security",
    "scalability",
    "interoperability",
]


def make_messages(count):
    return [
        Message(
            role=ChatRole.USER if i % 2 == 0 else ChatRole.ASSISTANT,
            content=f"message {i}",
        )
        for i in range(count)
    ]


def make_history(*scores):
    return [
        VoteHistoryEntry(
            proposal_id=str(i), decision=VoteDecision.ABSTAIN, score=score
        )
        for i, score in enumerate(scores)
    ]


VALID_TRACK = TrackValidation(is_valid=True, expected_tracks=[], current_track="0")
INVALID_TRACK = TrackValidation(
    is_valid=False, expected_tracks=["2"], current_track="0"
)
NEUTRAL_COST = CostAnalysis()


class TestScoreProposal(unittest.TestCase):
    """Test cases for score_proposal."""

    def setUp(self):
        self.proposal = Proposal(
            id="p-1",
            chain_id="42",
            title="Plain title",
            description="Plain description",
            messages=make_messages(2),
        )

    def test_baseline_scores(self):
        score = score_proposal(self.proposal, VALID_TRACK, NEUTRAL_COST, [])
        self.assertEqual(score.technical_feasibility, 0.6)
        self.assertAlmostEqual(score.alignment_with_goals, 0.3)
        self.assertEqual(score.economic_implications, 0.5)
        self.assertEqual(score.security_implications, 0.5)
        self.assertAlmostEqual(score.community_sentiment, 0.6)
        self.assertEqual(score.track_specific, 0.9)

    def test_overall_is_weighted_sum(self):
        scoring = ScoringConfig()
        score = score_proposal(self.proposal, VALID_TRACK, NEUTRAL_COST, [], scoring)
        expected = sum(
            getattr(score, name) * weight
            for name, weight in scoring.weights.as_dict().items()
        )
        self.assertAlmostEqual(score.overall, expected)
        self.assertGreaterEqual(score.overall, 0.0)
        self.assertLessEqual(score.overall, 1.0)

    def test_invalid_track_lowers_track_score(self):
        score = score_proposal(self.proposal, INVALID_TRACK, NEUTRAL_COST, [])
        self.assertEqual(score.track_specific, 0.3)

    def test_economic_score_mirrors_cost_effectiveness(self):
        cost = CostAnalysis(estimated_cost=50, cost_effectiveness=0.7)
        score = score_proposal(self.proposal, VALID_TRACK, cost, [])
        self.assertEqual(score.economic_implications, 0.7)

    def test_technical_and_security_keywords(self):
        self.proposal.title = "Runtime upgrade"
        self.proposal.description = "Includes an external audit"
        score = score_proposal(self.proposal, VALID_TRACK, NEUTRAL_COST, [])
        self.assertEqual(score.technical_feasibility, 0.8)
        self.assertEqual(score.security_implications, 0.8)

    def test_security_keyword_in_title_counts(self):
        self.proposal.title = "Safe rollout"
        score = score_proposal(self.proposal, VALID_TRACK, NEUTRAL_COST, [])
        self.assertEqual(score.security_implications, 0.8)

    def test_alignment_is_capped(self):
        self.proposal.description = " ".join(ALIGNMENT_KEYWORDS)
        score = score_proposal(self.proposal, VALID_TRACK, NEUTRAL_COST, [])
        self.assertLessEqual(score.alignment_with_goals, 1.0)
        self.assertEqual(score.alignment_with_goals, 1.0)

    def test_high_recent_scores_dampen_sentiment(self):
        self.proposal.messages = make_messages(6)
        history = make_history(0.9, 0.9, 0.9)
        before = score_proposal(self.proposal, VALID_TRACK, NEUTRAL_COST, [])
        after = score_proposal(self.proposal, VALID_TRACK, NEUTRAL_COST, history)
        self.assertAlmostEqual(after.community_sentiment, before.community_sentiment * 0.9)

    def test_all_scores_stay_in_bounds(self):
        self.proposal.title = "Runtime upgrade implementation"
        self.proposal.description = " ".join(ALIGNMENT_KEYWORDS) + " audit"
        self.proposal.messages = make_messages(30)
        cost = CostAnalysis(estimated_cost=10, cost_effectiveness=1.0)
        score = score_proposal(
            self.proposal, VALID_TRACK, cost, make_history(0.1, 0.1, 0.1)
        )
        for value in score.model_dump().values():
            self.assertGreaterEqual(value, 0.0)
            self.assertLessEqual(value, 1.0)


def test_sentiment_without_history():
    assert community_sentiment_score(0, [], 3) == pytest.approx(0.4)
    assert community_sentiment_score(6, [], 3) == pytest.approx(1.0)
    assert community_sentiment_score(50, [], 3) == 1.0


def test_sentiment_dampened_by_generous_history():
    history = make_history(0.9, 0.9, 0.9)
    assert community_sentiment_score(6, history, 3) == pytest.approx(0.9)


def test_sentiment_boosted_by_harsh_history():
    history = make_history(0.2, 0.3, 0.3)
    assert community_sentiment_score(2, history, 3) == pytest.approx(0.6 * 1.1)


def test_sentiment_boost_is_clamped():
    history = make_history(0.1, 0.1, 0.1)
    assert community_sentiment_score(6, history, 3) == 1.0


def test_sentiment_uses_only_trailing_window():
    # Older harsh votes are outside the window of three
    history = make_history(0.1, 0.1, 0.9, 0.9, 0.9)
    assert community_sentiment_score(6, history, 3) == pytest.approx(0.9)


def test_sentiment_unchanged_for_middling_history():
    history = make_history(0.5, 0.6, 0.7)
    assert community_sentiment_score(2, history, 3) == pytest.approx(0.6)


def test_alignment_score_fraction():
    text = "ecosystem and community growth"
    assert alignment_score(text, ALIGNMENT_KEYWORDS) == pytest.approx(2 / 6 + 0.3)


if __name__ == "__main__":
    unittest.main()

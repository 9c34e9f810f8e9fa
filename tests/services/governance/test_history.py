"""Tests for the vote history summary."""

from govbot.backend.models import VoteDecision, VoteHistoryEntry
from govbot.services.governance.history import (
    FIRST_VOTE_MESSAGE,
    analyze_vote_history,
)


def entry(decision, score):
    return VoteHistoryEntry(proposal_id="1", decision=decision, score=score)


def test_empty_history_returns_first_vote_message():
    assert analyze_vote_history([]) == (
        "This is my first vote! I'm excited to participate in Polkadot governance."
    )
    assert analyze_vote_history([]) == FIRST_VOTE_MESSAGE


def test_summary_counts_and_averages():
    history = [
        entry(VoteDecision.AYE, 0.9),
        entry(VoteDecision.NAY, 0.3),
        entry(VoteDecision.ABSTAIN, 0.6),
    ]
    summary = analyze_vote_history(history)

    assert summary.startswith("📈 My Voting History (3 votes):")
    assert "• Aye: 1 (33%)" in summary
    assert "• Nay: 1 (33%)" in summary
    assert "• Abstain: 1 (33%)" in summary
    assert "• Average Score: 60%" in summary
    assert "• Recent Performance: 60% (last 3 votes)" in summary


def test_recent_performance_uses_trailing_entries():
    history = [entry(VoteDecision.NAY, 0.0)] * 5 + [entry(VoteDecision.AYE, 1.0)] * 5
    summary = analyze_vote_history(history)

    assert "(10 votes)" in summary
    assert "• Aye: 5 (50%)" in summary
    assert "• Nay: 5 (50%)" in summary
    assert "• Abstain: 0 (0%)" in summary
    assert "• Average Score: 50%" in summary
    assert "• Recent Performance: 100% (last 5 votes)" in summary


def test_report_window_override():
    history = [entry(VoteDecision.AYE, 0.2), entry(VoteDecision.AYE, 0.8)]
    summary = analyze_vote_history(history, report_window=1)
    assert "• Recent Performance: 80% (last 1 votes)" in summary

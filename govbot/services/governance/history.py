from typing import Optional, Sequence

from govbot.backend.models import VoteDecision, VoteHistoryEntry
from govbot.config import config
from govbot.services.governance.decision import to_percent

FIRST_VOTE_MESSAGE = (
    "This is my first vote! I'm excited to participate in Polkadot governance."
)


def analyze_vote_history(
    vote_history: Sequence[VoteHistoryEntry], report_window: Optional[int] = None
) -> str:
    """Summarize past decisions; the trailing entries count as recent."""
    if not vote_history:
        return FIRST_VOTE_MESSAGE

    if report_window is None:
        report_window = config.scoring.report_window

    total_votes = len(vote_history)
    counts = {
        decision: sum(1 for entry in vote_history if entry.decision == decision)
        for decision in VoteDecision
    }
    average_score = sum(entry.score for entry in vote_history) / total_votes

    recent = list(vote_history)[-max(report_window, 1):]
    recent_average = sum(entry.score for entry in recent) / len(recent)

    def share(decision: VoteDecision) -> str:
        count = counts[decision]
        return f"{count} ({to_percent(count / total_votes)}%)"

    return (
        f"📈 My Voting History ({total_votes} votes):\n"
        f"• Aye: {share(VoteDecision.AYE)}\n"
        f"• Nay: {share(VoteDecision.NAY)}\n"
        f"• Abstain: {share(VoteDecision.ABSTAIN)}\n"
        f"• Average Score: {to_percent(average_score)}%\n"
        f"• Recent Performance: {to_percent(recent_average)}% "
        f"(last {len(recent)} votes)\n"
        "\n"
        "I strive to maintain high standards while being fair and constructive "
        "in my evaluations."
    )

"""Conviction-voting ballot payloads."""

from typing import Any, Dict, Union

from govbot.backend.models import VoteDecision

MIN_CONVICTION = 0
MAX_CONVICTION = 6


def validate_conviction(conviction: int) -> int:
    if isinstance(conviction, bool) or not isinstance(conviction, int):
        raise ValueError(f"Conviction must be an integer, got {conviction!r}")
    if not MIN_CONVICTION <= conviction <= MAX_CONVICTION:
        raise ValueError(
            f"Conviction must be between {MIN_CONVICTION} and {MAX_CONVICTION}, "
            f"got {conviction}"
        )
    return conviction


def build_ballot(
    decision: Union[VoteDecision, str],
    conviction: int = 1,
    balance: str = "0",
) -> Dict[str, Any]:
    """Map a decision to the `convictionVoting.vote` account-vote payload.

    Args:
        decision: Aye, Nay or Abstain
        conviction: Lock multiplier from 0 (no lock) to 6
        balance: Voting balance in planck, as a decimal string

    Returns:
        A Standard vote for Aye/Nay, or a SplitAbstain vote for Abstain
    """
    decision = VoteDecision(decision)
    conviction = validate_conviction(conviction)
    balance = str(balance)

    if decision == VoteDecision.ABSTAIN:
        return {"SplitAbstain": {"aye": "0", "nay": "0", "abstain": balance}}

    return {
        "Standard": {
            "vote": {"aye": decision == VoteDecision.AYE, "conviction": conviction},
            "balance": balance,
        }
    }

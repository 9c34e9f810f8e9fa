from typing import Sequence

from govbot.backend.models import ChatRole, Message, VoteReadiness

MIN_MESSAGES_BEFORE_VOTE = 4

# Each group must be covered by the proposer before a vote is requested
READINESS_CHECKS = [
    (
        ("purpose", "goal", "objective"),
        "Please explain the purpose or goal of your proposal.",
    ),
    (
        ("impact", "effect", "result"),
        "Please explain the expected impact or effects of your proposal.",
    ),
    (
        ("concern", "risk", "challenge"),
        "Please address any potential concerns or risks associated with your proposal.",
    ),
]


def check_vote_readiness(messages: Sequence[Message]) -> VoteReadiness:
    """Decide whether the discussion has covered enough ground to vote."""
    if len(messages) < MIN_MESSAGES_BEFORE_VOTE:
        return VoteReadiness(
            can_vote=False,
            reason=(
                "More discussion is needed before making a voting decision. "
                "Please explain your proposal and address any questions."
            ),
        )

    user_content = " ".join(
        message.content.lower()
        for message in messages
        if message.role == ChatRole.USER
    )

    for keywords, reason in READINESS_CHECKS:
        if not any(keyword in user_content for keyword in keywords):
            return VoteReadiness(can_vote=False, reason=reason)

    return VoteReadiness(can_vote=True)

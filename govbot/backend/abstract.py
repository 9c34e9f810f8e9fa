from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from govbot.backend.models import Message, Proposal, Vote, VoteHistoryEntry


class AbstractBackend(ABC):
    """Persistence contract used by the GovBot agent.

    Implementations own proposals, their message threads, finalized votes and
    the append-only vote history. Instances are passed into the agent rather
    than looked up globally.
    """

    # ----------- Proposals -----------
    @abstractmethod
    def get_proposal(self, chain_id: str, network: str) -> Optional[Proposal]:
        """Return the proposal with its messages and vote, or None."""
        pass

    @abstractmethod
    def update_proposal_chat_count(self, proposal_id: str, chat_count: int) -> None:
        pass

    # ----------- Messages -----------
    @abstractmethod
    def create_message(self, new_message: Message) -> Message:
        pass

    # ----------- Votes -----------
    @abstractmethod
    def create_vote(self, new_vote: Vote) -> Vote:
        pass

    # ----------- Vote history -----------
    @abstractmethod
    def list_vote_history(self, limit: int) -> List[VoteHistoryEntry]:
        """Return the most recent `limit` entries, oldest first."""
        pass

    @abstractmethod
    def create_vote_history(self, new_entry: VoteHistoryEntry) -> VoteHistoryEntry:
        pass


class AbstractChainClient(ABC):
    """Submits conviction-voting ballots to a chain node."""

    @abstractmethod
    async def submit_vote(self, referendum_id: str, ballot: Dict[str, Any]) -> str:
        """Submit the ballot and return the transaction hash."""
        pass

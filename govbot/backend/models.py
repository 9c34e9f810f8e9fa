from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomBaseModel(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"

    def __str__(self):
        return self.value


class VoteDecision(str, Enum):
    AYE = "Aye"
    NAY = "Nay"
    ABSTAIN = "Abstain"

    def __str__(self):
        return self.value


class ProposalType(str, Enum):
    TREASURY = "treasury"
    STAKING = "staking"
    FELLOWSHIP = "fellowship"
    ADMIN = "admin"
    ROOT = "root"
    WHITELISTED = "whitelisted"

    def __str__(self):
        return self.value


class BudgetImpact(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def __str__(self):
        return self.value


# ---------------------------------------------------------------------------
# Stored entities
# ---------------------------------------------------------------------------


class Message(CustomBaseModel):
    role: ChatRole
    content: str
    id: Optional[str] = None
    proposal_id: Optional[str] = None
    created_at: Optional[datetime] = None


class Vote(CustomBaseModel):
    """The finalized vote GovBot cast on a proposal."""

    proposal_id: str
    decision: VoteDecision
    reasoning: str
    conviction: int = 1
    id: Optional[str] = None
    voted_at: Optional[datetime] = None


class Proposal(CustomBaseModel):
    id: str
    chain_id: str
    title: str
    description: str = ""
    proposer: Optional[str] = None
    track: Optional[str] = None
    network: str = "polkadot"
    chat_count: int = 0
    messages: List[Message] = Field(default_factory=list)
    vote: Optional[Vote] = None
    created_at: Optional[datetime] = None


class VoteHistoryEntry(CustomBaseModel):
    """One finalized decision; `score` is the overall score at decision time."""

    proposal_id: str
    decision: VoteDecision
    score: float
    reasoning: str = ""
    track: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Derived, per-evaluation records
# ---------------------------------------------------------------------------


class TrackValidation(CustomBaseModel):
    is_valid: bool
    expected_tracks: List[str] = Field(default_factory=list)
    current_track: str
    recommendation: Optional[str] = None


class CostAnalysis(CustomBaseModel):
    estimated_cost: Optional[float] = None
    cost_justification: Optional[str] = None
    cost_effectiveness: float = Field(default=0.5, ge=0.0, le=1.0)
    budget_impact: Optional[BudgetImpact] = None


class ProposalScore(CustomBaseModel):
    technical_feasibility: float = Field(ge=0.0, le=1.0)
    alignment_with_goals: float = Field(ge=0.0, le=1.0)
    economic_implications: float = Field(ge=0.0, le=1.0)
    security_implications: float = Field(ge=0.0, le=1.0)
    community_sentiment: float = Field(ge=0.0, le=1.0)
    track_specific: float = Field(ge=0.0, le=1.0)
    overall: float = Field(ge=0.0, le=1.0)

    def breakdown(self) -> Dict[str, float]:
        return self.model_dump(exclude={"overall"})


class ProposalEvaluation(CustomBaseModel):
    proposal_type: Optional[ProposalType] = None
    track_validation: TrackValidation
    cost_analysis: CostAnalysis
    score: ProposalScore
    decision: VoteDecision
    reasoning: str


class VoteReadiness(CustomBaseModel):
    can_vote: bool
    reason: Optional[str] = None


class AdvisoryOpinion(CustomBaseModel):
    """Narrative decision from the language model; never authoritative."""

    decision: VoteDecision
    reasoning: str


class VoteOutcome(CustomBaseModel):
    decision: VoteDecision
    reasoning: str
    score: Optional[float] = None


class CastVoteResult(CustomBaseModel):
    vote: Vote
    ballot: Optional[Dict[str, Any]] = None
    tx_hash: Optional[str] = None
    already_voted: bool = False


class ChatTurnResult(CustomBaseModel):
    """Assistant reply for one proposer turn, plus the vote if one was cast."""

    message: Message
    vote: Optional[Vote] = None
    tx_hash: Optional[str] = None

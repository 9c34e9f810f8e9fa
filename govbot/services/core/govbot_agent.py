"""GovBot agent service.

Drives a proposal conversation through the chat model, enforces the per
proposal chat limit and finalizes votes from the deterministic evaluation
engine. A chat turn casts the vote as soon as the engine settles on Aye or
Nay; an Abstain keeps the discussion open. Persistence and chain access are
injected so the agent can run against fakes.
"""

import re
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Sequence, Type
from uuid import uuid4

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel

from govbot.backend.abstract import AbstractBackend, AbstractChainClient
from govbot.backend.models import (
    AdvisoryOpinion,
    CastVoteResult,
    ChatRole,
    ChatTurnResult,
    Message,
    Proposal,
    Vote,
    VoteDecision,
    VoteHistoryEntry,
    VoteOutcome,
)
from govbot.config import Config, config as default_config
from govbot.lib.logger import configure_logger
from govbot.services.ai.llm import get_model_config, invoke_llm, invoke_structured
from govbot.services.ai.prompts import (
    ADVISORY_DECISION_PROMPT,
    CHAT_ERROR_MESSAGE,
    CHAT_LIMIT_REACHED_MESSAGE,
    EVALUATION_COMPLETE_NOTICE,
    EVALUATION_INCOMPLETE_NOTICE,
    FINAL_EVALUATION_PROMPT,
    FINAL_WARNING_NOTICE,
    FINAL_WARNING_PROMPT,
    build_system_prompt,
)
from govbot.services.governance.ballot import build_ballot, validate_conviction
from govbot.services.governance.classifier import ProposalClassifier
from govbot.services.governance.evaluator import evaluate_proposal

logger = configure_logger(__name__)

LLMInvoker = Callable[[List[BaseMessage]], Awaitable[str]]
StructuredInvoker = Callable[[List[BaseMessage], Type[BaseModel]], Awaitable[BaseModel]]


class ProposalNotFoundError(Exception):
    """No stored proposal matches the chain id on the configured network."""


class ProposalAlreadyVotedError(Exception):
    """The proposal has a finalized vote; the discussion is closed."""


SUFFICIENT_MARKERS = ("EVALUATION: SUFFICIENT", "VOTE_READY: YES")
INSUFFICIENT_MARKERS = ("EVALUATION INCOMPLETE", "VOTE_READY: NO", "MISSING_INFO:")

INSUFFICIENT_INFO_SCORE = 0.45
INSUFFICIENT_INFO_REASONING = (
    "After {max_chats} comprehensive chats with the proposer, I determined that "
    "insufficient information was provided to make a confident voting decision. "
    "Key concerns that remained unaddressed include technical feasibility details, "
    "implementation timeline, budget justification, and risk mitigation strategies.\n\n"
    "Due to the lack of critical information needed for proper evaluation, I am "
    "abstaining from this vote. I recommend the proposer address the missing "
    "information and consider resubmitting with more comprehensive documentation."
)
TECHNICAL_DIFFICULTIES_REASONING = (
    "Due to technical difficulties, I'm abstaining from voting on this proposal. "
    "Please try requesting my decision again later."
)
ADVISORY_FALLBACK_REASONING = (
    "After careful consideration, I've decided to abstain as I don't have enough "
    "information to make a confident decision."
)

DECISION_PATTERN = re.compile(r"DECISION:\s*(Aye|Nay|Abstain)", re.IGNORECASE)
REASONING_PATTERN = re.compile(r"REASONING:\s*([\s\S]*?)(?:$|DECISION)", re.IGNORECASE)


def to_langchain_messages(messages: Sequence[Message]) -> List[BaseMessage]:
    converted: List[BaseMessage] = []
    for message in messages:
        if message.role == ChatRole.ASSISTANT:
            converted.append(AIMessage(content=message.content))
        else:
            converted.append(HumanMessage(content=message.content))
    return converted


def parse_advisory_response(response: str) -> AdvisoryOpinion:
    """Parse `DECISION:`/`REASONING:` model output, defaulting to Abstain."""
    decision_match = DECISION_PATTERN.search(response or "")
    reasoning_match = REASONING_PATTERN.search(response or "")

    decision = VoteDecision.ABSTAIN
    if decision_match:
        decision = VoteDecision(decision_match.group(1).capitalize())

    reasoning = ""
    if reasoning_match:
        reasoning = reasoning_match.group(1).strip()

    return AdvisoryOpinion(
        decision=decision, reasoning=reasoning or ADVISORY_FALLBACK_REASONING
    )


def format_decision_message(outcome: VoteOutcome, submitted: bool) -> str:
    recorded = " and submitted to the blockchain" if submitted else ""
    return (
        "I've made my decision on this proposal.\n\n"
        f"**Decision: {outcome.decision}**\n\n"
        f"{outcome.reasoning}\n\n"
        "Thank you for engaging with me on this proposal. "
        f"My vote has been recorded{recorded}."
    )


class GovBotAgent:
    """Conversational governance agent with a deterministic vote path."""

    def __init__(
        self,
        backend: AbstractBackend,
        chain_client: Optional[AbstractChainClient] = None,
        llm_invoker: Optional[LLMInvoker] = None,
        classifier: Optional[ProposalClassifier] = None,
        config: Optional[Config] = None,
        structured_invoker: Optional[StructuredInvoker] = None,
    ):
        self.backend = backend
        self.chain_client = chain_client
        self.classifier = classifier
        self.config = config or default_config

        if llm_invoker is None:
            logger.debug(
                "GovBot agent using the configured chat model",
                extra={"model_config": get_model_config()},
            )
            self.llm_invoker = invoke_llm
            self.structured_invoker = structured_invoker or invoke_structured
        else:
            # A custom text invoker only gets structured output when given one
            self.llm_invoker = llm_invoker
            self.structured_invoker = structured_invoker

    @property
    def max_chats(self) -> int:
        return self.config.chat.max_chats

    @property
    def network(self) -> str:
        return self.config.network.network

    def _load_vote_history(self, limit: int) -> List[VoteHistoryEntry]:
        return list(self.backend.list_vote_history(limit))

    def _post_message(self, proposal: Proposal, role: ChatRole, content: str) -> Message:
        message = self.backend.create_message(
            Message(
                id=str(uuid4()),
                proposal_id=proposal.id,
                role=role,
                content=content,
                created_at=datetime.now(timezone.utc),
            )
        )
        proposal.messages.append(message)
        return message

    def load_proposal(self, chain_id: str) -> Proposal:
        """Fetch a proposal on the configured network.

        Raises:
            ProposalNotFoundError: If the backend has no such proposal
        """
        proposal = self.backend.get_proposal(chain_id, self.network)
        if proposal is None:
            raise ProposalNotFoundError(
                f"Proposal {chain_id} not found on {self.network}"
            )
        return proposal

    async def generate_chat_response(
        self, proposal: Proposal, messages: Sequence[Message]
    ) -> str:
        """Reply to the proposer, counting the reply against the chat limit."""
        if proposal.chat_count >= self.max_chats:
            return CHAT_LIMIT_REACHED_MESSAGE

        try:
            vote_history = self._load_vote_history(
                self.config.chat.chat_history_limit
            )

            chat_count = proposal.chat_count + 1
            self.backend.update_proposal_chat_count(proposal.id, chat_count)
            proposal.chat_count = chat_count

            system_prompt = build_system_prompt(
                proposal, chat_count, vote_history, self.config.chat
            )
            placeholders = {"chat_count": chat_count, "max_chats": self.max_chats}

            if chat_count == self.max_chats - 1:
                system_prompt += FINAL_WARNING_PROMPT.format(**placeholders)
            elif chat_count == self.max_chats:
                system_prompt += FINAL_EVALUATION_PROMPT.format(**placeholders)

            reply = await self.llm_invoker(
                [SystemMessage(content=system_prompt)]
                + to_langchain_messages(messages)
            )

            if chat_count == self.max_chats - 1:
                return reply + FINAL_WARNING_NOTICE.format(**placeholders)

            if chat_count == self.max_chats:
                if any(marker in reply for marker in SUFFICIENT_MARKERS):
                    return reply + EVALUATION_COMPLETE_NOTICE
                return reply + EVALUATION_INCOMPLETE_NOTICE.format(**placeholders)

            return reply
        except Exception as e:
            logger.error(
                f"Error generating chat response: {str(e)}",
                extra={"proposal_id": proposal.chain_id},
                exc_info=True,
            )
            return CHAT_ERROR_MESSAGE

    async def handle_chat_turn(self, chain_id: str, content: str) -> ChatTurnResult:
        """Run one proposer turn and vote once the engine is convinced.

        The user message and the reply are stored. The engine then re-runs on
        the updated thread; an Aye or Nay is finalized with the configured
        auto-vote ballot, an Abstain leaves the discussion open.

        Raises:
            ProposalNotFoundError: If the proposal is unknown
            ProposalAlreadyVotedError: If the proposal was already voted on
            ValueError: If the configured auto-vote conviction is invalid
        """
        chat_config = self.config.chat
        validate_conviction(chat_config.auto_vote_conviction)

        proposal = self.load_proposal(chain_id)
        if proposal.vote is not None:
            raise ProposalAlreadyVotedError(
                f"Proposal {chain_id} has already been voted on. "
                "No further chat is possible."
            )

        self._post_message(proposal, ChatRole.USER, content)
        reply = await self.generate_chat_response(proposal, proposal.messages)
        assistant_message = self._post_message(proposal, ChatRole.ASSISTANT, reply)

        try:
            outcome = self._evaluate_vote(proposal)
        except Exception as e:
            logger.error(
                f"Error evaluating proposal after chat turn: {str(e)}",
                extra={"proposal_id": proposal.chain_id},
                exc_info=True,
            )
            return ChatTurnResult(message=assistant_message)

        if outcome.decision == VoteDecision.ABSTAIN:
            logger.debug(
                "Not convinced yet, keeping the discussion open",
                extra={"proposal_id": proposal.chain_id, "overall": outcome.score},
            )
            return ChatTurnResult(message=assistant_message)

        self._record_history(
            proposal, outcome.decision, outcome.score, outcome.reasoning
        )
        result = await self._finalize_vote(
            proposal,
            outcome,
            chat_config.auto_vote_conviction,
            chat_config.auto_vote_balance,
        )
        return ChatTurnResult(
            message=assistant_message, vote=result.vote, tx_hash=result.tx_hash
        )

    async def advise_vote(self, proposal: Proposal) -> AdvisoryOpinion:
        """Ask the chat model for a narrative opinion. Never authoritative.

        Structured output is tried first when available; free text with
        `DECISION:`/`REASONING:` lines is the fallback.
        """
        system_prompt = build_system_prompt(
            proposal, proposal.chat_count, [], self.config.chat
        )
        messages = (
            [SystemMessage(content=system_prompt)]
            + to_langchain_messages(proposal.messages)
            + [HumanMessage(content=ADVISORY_DECISION_PROMPT)]
        )

        if self.structured_invoker is not None:
            try:
                return await self.structured_invoker(messages, AdvisoryOpinion)
            except Exception as e:
                logger.warning(
                    f"Structured advisory output failed, parsing text: {str(e)}",
                    extra={"proposal_id": proposal.chain_id},
                )

        try:
            response = await self.llm_invoker(messages)
            return parse_advisory_response(response)
        except Exception as e:
            logger.error(
                f"Error generating advisory decision: {str(e)}",
                extra={"proposal_id": proposal.chain_id},
                exc_info=True,
            )
            return AdvisoryOpinion(
                decision=VoteDecision.ABSTAIN,
                reasoning=TECHNICAL_DIFFICULTIES_REASONING,
            )

    def _discussion_ended_without_information(self, proposal: Proposal) -> bool:
        if proposal.chat_count < self.max_chats or not proposal.messages:
            return False
        last_message = proposal.messages[-1]
        return last_message.role == ChatRole.ASSISTANT and any(
            marker in last_message.content for marker in INSUFFICIENT_MARKERS
        )

    def _record_history(
        self, proposal: Proposal, decision: VoteDecision, score: float, reasoning: str
    ) -> None:
        self.backend.create_vote_history(
            VoteHistoryEntry(
                id=str(uuid4()),
                proposal_id=proposal.chain_id,
                decision=decision,
                score=score,
                reasoning=reasoning,
                track=proposal.track,
                created_at=datetime.now(timezone.utc),
            )
        )

    def _evaluate_vote(self, proposal: Proposal) -> VoteOutcome:
        if self._discussion_ended_without_information(proposal):
            logger.info(
                "Abstaining after chat limit without sufficient information",
                extra={"proposal_id": proposal.chain_id},
            )
            return VoteOutcome(
                decision=VoteDecision.ABSTAIN,
                reasoning=INSUFFICIENT_INFO_REASONING.format(max_chats=self.max_chats),
                score=INSUFFICIENT_INFO_SCORE,
            )

        vote_history = self._load_vote_history(self.config.chat.vote_history_limit)
        evaluation = evaluate_proposal(
            proposal,
            vote_history,
            classifier=self.classifier,
            scoring=self.config.scoring,
        )
        return VoteOutcome(
            decision=evaluation.decision,
            reasoning=evaluation.reasoning,
            score=evaluation.score.overall,
        )

    async def decide_vote(self, proposal: Proposal) -> VoteOutcome:
        """Decide GovBot's vote with the deterministic engine and record it."""
        try:
            outcome = self._evaluate_vote(proposal)
            self._record_history(
                proposal, outcome.decision, outcome.score, outcome.reasoning
            )
            return outcome
        except Exception as e:
            logger.error(
                f"Error generating vote decision: {str(e)}",
                extra={"proposal_id": proposal.chain_id},
                exc_info=True,
            )
            return VoteOutcome(
                decision=VoteDecision.ABSTAIN,
                reasoning=TECHNICAL_DIFFICULTIES_REASONING,
            )

    async def _finalize_vote(
        self, proposal: Proposal, outcome: VoteOutcome, conviction: int, balance: str
    ) -> CastVoteResult:
        ballot = build_ballot(outcome.decision, conviction, balance)

        tx_hash = None
        if self.chain_client is not None:
            try:
                tx_hash = await self.chain_client.submit_vote(proposal.chain_id, ballot)
                logger.info(
                    f"Vote transaction submitted with hash: {tx_hash}",
                    extra={"proposal_id": proposal.chain_id},
                )
            except Exception as e:
                logger.error(
                    f"Failed to submit on-chain vote: {str(e)}",
                    extra={"proposal_id": proposal.chain_id},
                    exc_info=True,
                )

        vote = self.backend.create_vote(
            Vote(
                id=str(uuid4()),
                proposal_id=proposal.id,
                decision=outcome.decision,
                reasoning=outcome.reasoning,
                conviction=conviction,
                voted_at=datetime.now(timezone.utc),
            )
        )
        proposal.vote = vote

        self._post_message(
            proposal,
            ChatRole.ASSISTANT,
            format_decision_message(outcome, submitted=bool(tx_hash)),
        )

        return CastVoteResult(vote=vote, ballot=ballot, tx_hash=tx_hash)

    async def cast_vote(
        self, proposal: Proposal, conviction: int = 1, balance: str = "0"
    ) -> CastVoteResult:
        """Finalize GovBot's vote on a proposal, at most once.

        Unlike a chat turn, this finalizes whatever the engine decides,
        Abstain included.

        Raises:
            ValueError: If the conviction is outside 0..6
        """
        validate_conviction(conviction)

        if proposal.vote is not None:
            logger.info(
                "Proposal has already been voted on",
                extra={"proposal_id": proposal.chain_id},
            )
            return CastVoteResult(vote=proposal.vote, already_voted=True)

        outcome = await self.decide_vote(proposal)
        return await self._finalize_vote(proposal, outcome, conviction, balance)

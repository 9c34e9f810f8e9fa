"""Tests for GovBot conversation prompts."""

from govbot.backend.models import Proposal, VoteDecision, VoteHistoryEntry
from govbot.config import ChatConfig
from govbot.services.ai.prompts import (
    EVALUATION_INCOMPLETE_NOTICE,
    FINAL_WARNING_NOTICE,
    build_system_prompt,
)
from govbot.services.ai.prompts.chat import format_chat_status, format_track_catalog

CHAT_CONFIG = ChatConfig(max_chats=10, warning_threshold=8)


def make_proposal(**kwargs):
    defaults = {
        "id": "p-1",
        "chain_id": "321",
        "title": "Fund validator tooling",
        "description": "Tooling for validators.",
        "track": "30",
    }
    defaults.update(kwargs)
    return Proposal(**defaults)


def test_system_prompt_includes_proposal_details():
    prompt = build_system_prompt(make_proposal(), 1, [], CHAT_CONFIG)

    assert "Title: Fund validator tooling" in prompt
    assert "ID: 321" in prompt
    assert "Proposer: Unknown" in prompt
    assert "Track: 30" in prompt
    assert "Description: Tooling for validators." in prompt
    assert "Chat 1 of 10 available." in prompt
    assert "This will be my first vote in the system!" in prompt


def test_system_prompt_reflects_weights_and_thresholds():
    prompt = build_system_prompt(make_proposal(), 1, [], CHAT_CONFIG)

    assert "Technical Feasibility (20%)" in prompt
    assert "Track Appropriateness (15%)" in prompt
    assert "AYE: ≥80% overall score" in prompt
    assert "ABSTAIN: 50-79% overall score" in prompt
    assert "NAY: <50% overall score" in prompt


def test_system_prompt_lists_every_track():
    catalog = format_track_catalog()
    assert "- Root (0):" in catalog
    assert "- Big Spender (32):" in catalog
    assert len(catalog.splitlines()) == 17


def test_system_prompt_includes_history_summary():
    history = [
        VoteHistoryEntry(proposal_id="1", decision=VoteDecision.AYE, score=0.9)
    ]
    prompt = build_system_prompt(make_proposal(proposer="5Grw"), 2, history, CHAT_CONFIG)

    assert "Proposer: 5Grw" in prompt
    assert "📊 MY VOTING HISTORY:" in prompt
    assert "My Voting History (1 votes)" in prompt


def test_chat_status_near_limit():
    assert "approaching the chat limit" in format_chat_status(8, CHAT_CONFIG)
    assert "chat 9 of 10" in format_chat_status(9, CHAT_CONFIG)
    final = format_chat_status(10, CHAT_CONFIG)
    assert "FINAL opportunity" in final
    assert "Chat 7 of 10 available." in format_chat_status(7, CHAT_CONFIG)


def test_notices_render_counts():
    notice = FINAL_WARNING_NOTICE.format(chat_count=9, max_chats=10)
    assert "chat 9 out of 10" in notice
    assert "after 10 chats" in EVALUATION_INCOMPLETE_NOTICE.format(max_chats=10)

#!/usr/bin/env python3
"""
CLI script for running GovBot's deterministic evaluation on a proposal snapshot.

The proposal file holds a single proposal object (title, description, track,
messages, ...). The optional history file holds a list of prior vote history
entries, oldest first.

Usage:
    python scripts/evaluate_proposal.py --proposal-file proposal.json
    python scripts/evaluate_proposal.py --proposal-file proposal.json --history-file history.json
    python scripts/evaluate_proposal.py --proposal-file proposal.json --json
"""

import argparse
import json
import os
import sys
from typing import List, Optional

# Add the parent directory (project root) to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import TypeAdapter, ValidationError

from govbot.backend.models import Proposal, VoteHistoryEntry
from govbot.services.governance import (
    analyze_vote_history,
    check_vote_readiness,
    evaluate_proposal,
    get_track_name,
)
from govbot.services.governance.decision import to_percent


def load_proposal(path: str) -> Proposal:
    with open(path, "r", encoding="utf-8") as f:
        return Proposal.model_validate(json.load(f))


def load_history(path: Optional[str]) -> List[VoteHistoryEntry]:
    if not path:
        return []
    with open(path, "r", encoding="utf-8") as f:
        return TypeAdapter(List[VoteHistoryEntry]).validate_python(json.load(f))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate a governance proposal with GovBot's scoring engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Evaluate a proposal snapshot
  python scripts/evaluate_proposal.py --proposal-file proposal.json

  # Include prior votes for sentiment adjustment and the history summary
  python scripts/evaluate_proposal.py --proposal-file proposal.json \\
    --history-file history.json

  # Machine-readable output
  python scripts/evaluate_proposal.py --proposal-file proposal.json --json
        """,
    )

    parser.add_argument(
        "--proposal-file",
        type=str,
        required=True,
        help="Path to a JSON file containing the proposal",
    )
    parser.add_argument(
        "--history-file",
        type=str,
        help="Path to a JSON file containing prior vote history entries",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full evaluation as JSON",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        proposal = load_proposal(args.proposal_file)
        history = load_history(args.history_file)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"❌ Could not load input: {e}", file=sys.stderr)
        return 1

    evaluation = evaluate_proposal(proposal, history)
    readiness = check_vote_readiness(proposal.messages)

    if args.json:
        output = {
            "proposal_id": proposal.chain_id,
            "breakdown": evaluation.score.breakdown(),
            "evaluation": evaluation.model_dump(mode="json"),
            "readiness": readiness.model_dump(mode="json"),
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0

    print("=" * 60)
    print(f"Proposal: {proposal.title} (#{proposal.chain_id})")
    print(f"Track:    {get_track_name(proposal.track)}")
    print(f"Type:     {evaluation.proposal_type or 'unclassified'}")
    print("=" * 60)
    print(f"Decision: {evaluation.decision}")
    print(f"Overall:  {to_percent(evaluation.score.overall)}%")
    print()
    print(evaluation.reasoning)
    print()
    if readiness.can_vote:
        print("🗳️ Discussion is ready for a vote.")
    else:
        print(f"💬 Not ready to vote: {readiness.reason}")
    print()
    print(analyze_vote_history(history))
    return 0


if __name__ == "__main__":
    sys.exit(main())

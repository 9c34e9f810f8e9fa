"""OpenGov track catalog.

Static lookup of Polkadot OpenGov track ids to display metadata, plus the
tracks each proposal category is expected to be submitted on.
"""

from typing import Dict, List, Optional, Union

from govbot.backend.models import ProposalType

POLKADOT_TRACKS: Dict[str, Dict[str, str]] = {
    "0": {
        "name": "Root",
        "description": "Highest permission level, can change core protocol features",
        "category": "root",
    },
    "1": {
        "name": "Whitelisted Caller",
        "description": "Calls pre-approved by the Fellowship whitelist",
        "category": "whitelisted",
    },
    "2": {
        "name": "Staking Admin",
        "description": "Controls staking parameters",
        "category": "staking",
    },
    "10": {
        "name": "Treasurer",
        "description": "Controls spending of treasury funds",
        "category": "treasury",
    },
    "11": {
        "name": "Lease Admin",
        "description": "Oversees parachain lease slots",
        "category": "admin",
    },
    "12": {
        "name": "Fellowship Admin",
        "description": "Fellowship self-governance",
        "category": "fellowship",
    },
    "13": {
        "name": "General Admin",
        "description": "Administrative matters such as registrar changes",
        "category": "admin",
    },
    "14": {
        "name": "Auction Admin",
        "description": "Conducts parachain auctions",
        "category": "admin",
    },
    "15": {
        "name": "Referendum Canceller",
        "description": "Cancels running referenda",
        "category": "governance",
    },
    "20": {
        "name": "Referendum Killer",
        "description": "Kills referenda at any stage",
        "category": "governance",
    },
    "21": {
        "name": "Small Tipper",
        "description": "Small treasury tips",
        "category": "treasury",
    },
    "22": {
        "name": "Big Tipper",
        "description": "Large treasury tips",
        "category": "treasury",
    },
    "30": {
        "name": "Small Spender",
        "description": "Small treasury spends",
        "category": "treasury",
    },
    "31": {
        "name": "Medium Spender",
        "description": "Medium treasury spends",
        "category": "treasury",
    },
    "32": {
        "name": "Big Spender",
        "description": "Large treasury spends",
        "category": "treasury",
    },
    "33": {
        "name": "Wish For Change",
        "description": "Non-binding signal for ideation and improvement",
        "category": "governance",
    },
    "34": {
        "name": "Retain At Rank",
        "description": "Maintain Fellowship ranks",
        "category": "fellowship",
    },
}

VALID_TRACKS_BY_TYPE: Dict[ProposalType, List[str]] = {
    ProposalType.TREASURY: ["10", "21", "22", "30", "31", "32"],
    ProposalType.STAKING: ["2"],
    ProposalType.FELLOWSHIP: ["12", "34"],
    ProposalType.ADMIN: ["13", "11", "14"],
    ProposalType.ROOT: ["0"],
    ProposalType.WHITELISTED: ["1"],
}

SPENDING_TRACK_MARKERS = ("Spender", "Tipper", "Treasurer")


def get_track(track: Optional[Union[str, int]]) -> Optional[Dict[str, str]]:
    if track is None or track == "":
        return None
    return POLKADOT_TRACKS.get(str(track))


def get_track_name(track: Optional[Union[str, int]]) -> str:
    """Human-readable name for a track id; unknown ids never raise."""
    if track is None or track == "":
        return "Unknown Track"
    info = get_track(track)
    if info is None:
        return f"Unknown Track ({track})"
    return info["name"]


def get_expected_tracks(proposal_type: ProposalType) -> List[str]:
    return list(VALID_TRACKS_BY_TYPE.get(proposal_type, []))


def is_spending_track(track: Optional[Union[str, int]]) -> bool:
    info = get_track(track)
    if info is None:
        return False
    return any(marker in info["name"] for marker in SPENDING_TRACK_MARKERS)

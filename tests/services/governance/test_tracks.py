"""Tests for the OpenGov track catalog."""

from govbot.backend.models import ProposalType
from govbot.services.governance.tracks import (
    POLKADOT_TRACKS,
    VALID_TRACKS_BY_TYPE,
    get_expected_tracks,
    get_track_name,
    is_spending_track,
)


def test_known_track_names():
    assert get_track_name("0") == "Root"
    assert get_track_name(10) == "Treasurer"
    assert get_track_name("32") == "Big Spender"


def test_unknown_track_names_do_not_raise():
    assert get_track_name("99") == "Unknown Track (99)"
    assert get_track_name("") == "Unknown Track"
    assert get_track_name(None) == "Unknown Track"


def test_every_expected_track_is_in_catalog():
    for tracks in VALID_TRACKS_BY_TYPE.values():
        for track in tracks:
            assert track in POLKADOT_TRACKS


def test_treasury_expected_tracks():
    assert get_expected_tracks(ProposalType.TREASURY) == [
        "10",
        "21",
        "22",
        "30",
        "31",
        "32",
    ]


def test_expected_tracks_are_copies():
    tracks = get_expected_tracks(ProposalType.ROOT)
    tracks.append("99")
    assert get_expected_tracks(ProposalType.ROOT) == ["0"]


def test_spending_tracks():
    for track in ("10", "21", "22", "30", "31", "32"):
        assert is_spending_track(track)
    for track in ("0", "1", "2", "13", "99", None, ""):
        assert not is_spending_track(track)

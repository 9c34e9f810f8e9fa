from typing import Optional

from govbot.backend.models import ProposalType, TrackValidation
from govbot.lib.logger import configure_logger
from govbot.services.governance.tracks import get_expected_tracks, get_track

logger = configure_logger(__name__)


def validate_track(
    track: Optional[str], proposal_type: Optional[ProposalType]
) -> TrackValidation:
    """Check whether a proposal sits on a track suited to its category.

    An unclassified proposal is always valid. A classified proposal without a
    track is reported as "Unknown" and is never valid.
    """
    current_track = track or "Unknown"

    if proposal_type is None:
        return TrackValidation(
            is_valid=True,
            expected_tracks=[],
            current_track=current_track,
        )

    expected_tracks = get_expected_tracks(proposal_type)
    is_valid = current_track in expected_tracks

    recommendation = None
    if not is_valid and expected_tracks:
        track_names = ", ".join(
            (get_track(expected) or {}).get("name", expected)
            for expected in expected_tracks
        )
        recommendation = (
            f"This {proposal_type} proposal should be on one of these tracks: "
            f"{track_names}"
        )
        logger.debug(
            f"Track {current_track} is not valid for {proposal_type} proposals"
        )

    return TrackValidation(
        is_valid=is_valid,
        expected_tracks=expected_tracks,
        current_track=current_track,
        recommendation=recommendation,
    )

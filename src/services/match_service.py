"""Festival match scoring.

# ─── SCORING RULES ────────────────────────────────────────────────────
#
#   match% = round_half_up(100 * |user ∩ lineup| / |user|)
#
# Both sides are compared by normalized name (lowercase, accents
# stripped, trimmed).  The denominator is the size of the user's
# normalized artist set: the score answers "what share of MY artists
# play here", not "how much of the lineup do I like".
#
# ``artists_in_common`` lists lineup entries, in lineup order and
# original casing, whose normalized form is in the user set.
#
# Presentation:
#   - unannounced / hiatus festivals display "N/A" and use their status
#     as the CSS class; the nominal score is still computed
#   - otherwise high-match >= 20, medium-match >= 5, else low-match
#
# Ranking is a stable descending sort, so ties keep catalog order.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

from src.models.festival import Festival, LineupStatus, MatchResult
from src.utils.text_normalizer import normalize_artist_name

NO_ARTISTS_MESSAGE = "Add artists to your profile to see your compatibility"
NOT_AVAILABLE = "N/A"

_DEFAULT_HIGH_THRESHOLD = 20
_DEFAULT_MEDIUM_THRESHOLD = 5


def round_half_up_percentage(numerator: int, denominator: int) -> int:
    """Return ``round(100 * numerator / denominator)`` with .5 rounded up.

    Integer arithmetic, so 1/8 (12.5%) is 13 rather than banker's 12.
    """
    if denominator <= 0:
        return 0
    return (200 * numerator + denominator) // (2 * denominator)


def match_class(
    percentage: int,
    lineup_status: LineupStatus,
    high_threshold: int = _DEFAULT_HIGH_THRESHOLD,
    medium_threshold: int = _DEFAULT_MEDIUM_THRESHOLD,
) -> str:
    """Return the CSS class the client uses to colour a festival."""
    if not lineup_status.has_percentage:
        return lineup_status.value
    if percentage >= high_threshold:
        return "high-match"
    if percentage >= medium_threshold:
        return "medium-match"
    return "low-match"


def match_display(percentage: int, lineup_status: LineupStatus) -> str:
    if not lineup_status.has_percentage:
        return NOT_AVAILABLE
    return f"{percentage}%"


class MatchService:
    """Scores festivals against a user's normalized artist set.

    Parameters
    ----------
    high_threshold, medium_threshold:
        Percentage cut-offs for the ``high-match`` / ``medium-match``
        classes (``match.high_threshold`` / ``match.medium_threshold`` in
        config.yaml).
    """

    def __init__(
        self,
        high_threshold: int = _DEFAULT_HIGH_THRESHOLD,
        medium_threshold: int = _DEFAULT_MEDIUM_THRESHOLD,
    ) -> None:
        self._high = high_threshold
        self._medium = medium_threshold

    def score_festival(
        self,
        festival: Festival,
        user_artists: Collection[str],
        is_favorite: bool = False,
    ) -> MatchResult:
        """Score one festival.

        Args:
            festival: Catalog entry.
            user_artists: The user's *normalized* artist set.
            is_favorite: Copied onto the result.
        """
        matched = [name for name in festival.lineup if normalize_artist_name(name) in user_artists]
        matched_keys = {normalize_artist_name(name) for name in matched}
        percentage = round_half_up_percentage(len(matched_keys), len(user_artists))
        return self._result(
            festival,
            percentage=percentage,
            matched_artists=len(matched_keys),
            total_user_artists=len(user_artists),
            artists_in_common=matched,
            is_favorite=is_favorite,
        )

    def rank_festivals(
        self,
        festivals: Iterable[Festival],
        user_artists: Collection[str],
        favorite_ids: Collection[str] = (),
    ) -> list[MatchResult]:
        """Score every festival and sort by match percentage, highest first.

        With an empty artist set scoring is skipped and every festival is
        returned at 0% in catalog order.
        """
        if not user_artists:
            return [
                self._result(festival, is_favorite=festival.id in favorite_ids)
                for festival in festivals
            ]
        results = [
            self.score_festival(festival, user_artists, is_favorite=festival.id in favorite_ids)
            for festival in festivals
        ]
        return sorted(results, key=lambda r: r.match_percentage, reverse=True)

    def _result(
        self,
        festival: Festival,
        percentage: int = 0,
        matched_artists: int = 0,
        total_user_artists: int = 0,
        artists_in_common: list[str] | None = None,
        is_favorite: bool = False,
    ) -> MatchResult:
        return MatchResult(
            **festival.model_dump(),
            match_percentage=percentage,
            matched_artists=matched_artists,
            total_user_artists=total_user_artists,
            artists_in_common=artists_in_common or [],
            is_favorite=is_favorite,
            match_display=match_display(percentage, festival.lineup_status),
            match_class=match_class(percentage, festival.lineup_status, self._high, self._medium),
        )

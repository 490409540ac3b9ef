"""
Profile Ranker - Prefix/substring relevance ranking of terminal profiles.

Each term scores 2 when the lowercased profile name starts with it, 1 when it
appears anywhere else in the name, and 0 otherwise. How term scores combine
is controlled by TermMatchMode.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from termprofiles.config.errors import SearchError
from termprofiles.domains.profiles.models import Profile

from .models import ProfileMatch, ProfileQuery, TermMatchMode

logger = logging.getLogger(__name__)

__all__ = ["ProfileRanker", "score_term"]

PREFIX_WEIGHT = 2
SUBSTRING_WEIGHT = 1


def score_term(normalized_name: str, term: str) -> int:
    """Score one search term against a lowercased profile name."""
    index = normalized_name.find(term.lower())
    if index == 0:
        return PREFIX_WEIGHT
    if index > 0:
        return SUBSTRING_WEIGHT
    return 0


class ProfileRanker:
    """
    Rank profiles against search terms.

    Example:
        >>> ranker = ProfileRanker()
        >>> [m.name for m in ranker.rank(profiles, ["def"])]
        ['Default']
    """

    def __init__(self, match_mode: TermMatchMode = TermMatchMode.ALL) -> None:
        self.match_mode = match_mode

    def rank(
        self,
        profiles: Sequence[Profile],
        terms: Sequence[str],
    ) -> list[ProfileMatch]:
        """
        Rank profiles by relevance.

        Args:
            profiles: Profile snapshot to search; never modified
            terms: Tokenized search terms

        Returns:
            Profiles with a positive weight, highest weight first. Equal
            weights keep their order in ``profiles``.

        Raises:
            SearchError: If no usable search term is given
        """
        try:
            query = ProfileQuery(terms=terms, match_mode=self.match_mode)
        except ValidationError as e:
            raise SearchError("Invalid search terms", {"terms": repr(terms)}) from e

        matches = []
        for profile in profiles:
            weight = self._weigh(profile, query)
            # weight of 0 means no match
            if weight > 0:
                matches.append(ProfileMatch(profile=profile, weight=weight))

        # sort is stable, ties stay in snapshot order
        matches.sort(key=lambda m: m.weight, reverse=True)

        logger.debug(
            "Ranked %d profiles for %s (%s) -> %d matches",
            len(profiles),
            query.terms,
            query.match_mode.value,
            len(matches),
        )
        return matches

    @staticmethod
    def _weigh(profile: Profile, query: ProfileQuery) -> int:
        name = profile.normalized_name
        if query.match_mode is TermMatchMode.LAST_TERM:
            return score_term(name, query.terms[-1])

        scores = [score_term(name, term) for term in query.terms]
        if query.match_mode is TermMatchMode.ALL and 0 in scores:
            return 0
        return sum(scores)

"""
Search Domain - Profile ranking and the shell search provider.

This domain handles:
- Prefix/substring ranking of profiles
- Multi-term combination modes
- Host entry points (initial search, subsearch, metas, activation)
"""

from .contracts import Launcher, Ranker, SearchHost, TerminalApp
from .models import Icon, ProfileMatch, ProfileQuery, ResultMeta, TermMatchMode
from .provider import TerminalSearchProvider
from .ranker import ProfileRanker, score_term

__all__ = [
    "Ranker",
    "TerminalApp",
    "Launcher",
    "SearchHost",
    "Icon",
    "ProfileMatch",
    "ProfileQuery",
    "ResultMeta",
    "TermMatchMode",
    "ProfileRanker",
    "TerminalSearchProvider",
    "score_term",
]

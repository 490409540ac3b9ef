"""
termprofiles - Search and launch terminal profiles from a desktop shell.

Example:
    >>> from termprofiles.domains.search import ProfileRanker
    >>> ranker = ProfileRanker()
    >>> matches = ranker.rank(directory.profiles, ["work"])
"""

__version__ = "1.0.0"
__all__ = ["__version__"]

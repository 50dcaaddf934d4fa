"""
Core modules for code_stats
"""

from .vcs_models import ChangeType, Commit, FileChange
from .stats_models import CodeBucket, ContributorIdentity, ContributorStats, LanguageStats
from .log_parser import GitLogParser, parse_commits
from .alias_resolver import AliasResolver, resolve_identities
from .statistics_aggregator import (
    LanguageLookup,
    PathClassifier,
    StatisticsAggregator,
    aggregate,
    classify_path,
)
from .service import CodeStatsRequest, CodeStatsResult, CodeStatsService

__all__ = [
    "ChangeType",
    "Commit",
    "FileChange",
    "CodeBucket",
    "ContributorIdentity",
    "ContributorStats",
    "LanguageStats",
    "GitLogParser",
    "parse_commits",
    "AliasResolver",
    "resolve_identities",
    "LanguageLookup",
    "PathClassifier",
    "StatisticsAggregator",
    "aggregate",
    "classify_path",
    "CodeStatsRequest",
    "CodeStatsResult",
    "CodeStatsService",
]

"""
Code Stats

커밋 로그 기반 기여자별 개발 통계 집계 도구
"""

__version__ = "0.1.0"
__author__ = "Code Stats Team"

# Core modules - Data models
from .core.vcs_models import ChangeType, Commit, FileChange
from .core.stats_models import CodeBucket, ContributorIdentity, ContributorStats, LanguageStats

# Core modules - Pipeline components
from .core.log_parser import GitLogParser, parse_commits
from .core.alias_resolver import AliasResolver, resolve_identities
from .core.statistics_aggregator import LanguageLookup, StatisticsAggregator, aggregate, classify_path
from .core.service import CodeStatsRequest, CodeStatsResult, CodeStatsService

# Utility modules - Configuration and logging
from .utils.config import CodeStatsConfig, Config
from .utils.logger import get_logger, setup_logger, LogContext
from .exceptions import CodeStatsError, ConfigError

__all__ = [
    # Data models
    "ChangeType",
    "Commit",
    "FileChange",
    "CodeBucket",
    "ContributorIdentity",
    "ContributorStats",
    "LanguageStats",

    # Pipeline components
    "GitLogParser",
    "parse_commits",
    "AliasResolver",
    "resolve_identities",
    "LanguageLookup",
    "StatisticsAggregator",
    "aggregate",
    "classify_path",
    "CodeStatsRequest",
    "CodeStatsResult",
    "CodeStatsService",

    # Configuration and utilities
    "CodeStatsConfig",
    "Config",
    "get_logger",
    "setup_logger",
    "LogContext",
    "CodeStatsError",
    "ConfigError",

    # Convenience functions
    "analyze_log",
]


def analyze_log(log_text: str, config: CodeStatsConfig = None) -> CodeStatsResult:
    """
    커밋 로그 텍스트를 기본 파이프라인으로 분석합니다.

    Args:
        log_text: `git log --numstat` 원시 출력
        config: 분석 설정 (기본값: CodeStatsConfig.default())

    Returns:
        CodeStatsResult 인스턴스
    """
    request = CodeStatsRequest(log_text=log_text, config=config or CodeStatsConfig.default())
    return CodeStatsService().analyze(request)

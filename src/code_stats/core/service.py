"""
Code Stats Service Module - 분석 파이프라인 조립

로그 파싱 -> 필터링 -> 기여자 식별 -> 통계 집계 단계를 하나로 묶어 실행합니다.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from code_stats.core.alias_resolver import AliasResolver
from code_stats.core.log_parser import GitLogParser
from code_stats.core.statistics_aggregator import StatisticsAggregator
from code_stats.core.stats_models import ContributorStats
from code_stats.core.vcs_models import Commit
from code_stats.utils.config import CodeStatsConfig
from code_stats.utils.logger import LogContext, get_logger

logger = get_logger(__name__)


@dataclass
class CodeStatsRequest:
    """분석 요청"""
    log_text: Optional[str]
    config: CodeStatsConfig = field(default_factory=CodeStatsConfig.default)
    days: Optional[int] = None
    since: Optional[datetime] = None
    until: Optional[datetime] = None
    include_users: Sequence[str] = ()
    exclude_users: Sequence[str] = ()
    repository_path: Optional[str] = None


@dataclass
class CodeStatsResult:
    """분석 결과"""
    contributor_stats: List[ContributorStats]
    total_commits: int
    repository_path: Optional[str] = None
    oldest_commit: Optional[datetime] = None
    newest_commit: Optional[datetime] = None
    success: bool = True
    error_message: Optional[str] = None

    @property
    def analysis_period(self) -> str:
        if self.oldest_commit is None or self.newest_commit is None:
            return "No commits found"
        if self.oldest_commit == self.newest_commit:
            return f"Single commit on {self.oldest_commit.date()}"
        return f"{self.oldest_commit.date()} to {self.newest_commit.date()}"


def _matches_user(commit: Commit, users: Sequence[str]) -> bool:
    lowered = {user.lower() for user in users}
    return commit.author_email.lower() in lowered or commit.author_name.lower() in lowered


class CodeStatsService:
    """커밋 로그 분석 서비스"""

    def __init__(
        self,
        parser: Optional[GitLogParser] = None,
        resolver: Optional[AliasResolver] = None,
        aggregator: Optional[StatisticsAggregator] = None,
        max_workers: Optional[int] = None
    ):
        self.parser = parser or GitLogParser(max_workers=max_workers)
        self.resolver = resolver or AliasResolver()
        self.aggregator = aggregator or StatisticsAggregator(max_workers=max_workers)

    def analyze(self, request: CodeStatsRequest) -> CodeStatsResult:
        """
        로그 텍스트를 분석하여 기여자 통계 생성

        Args:
            request: 분석 요청

        Returns:
            분석 결과 (예외 발생 시 success=False)
        """
        try:
            with LogContext("commit log analysis", logger):
                commits = self.parser.parse_commits(request.log_text)
                commits = self.filter_commits(commits, request)

                config = request.config
                identities = self.resolver.resolve_identities(commits, config.aliases)
                stats = self.aggregator.aggregate(
                    commits,
                    identities,
                    config.language_lookup(),
                    config.production_directories,
                    config.test_directories,
                    config.unmatched_bucket,
                )

            dates = [commit.commit_date for commit in commits]
            return CodeStatsResult(
                contributor_stats=stats,
                total_commits=len(commits),
                repository_path=request.repository_path,
                oldest_commit=min(dates) if dates else None,
                newest_commit=max(dates) if dates else None,
            )
        except Exception as e:
            logger.error(f"Analysis failed: {e}")
            return CodeStatsResult(
                contributor_stats=[],
                total_commits=0,
                repository_path=request.repository_path,
                success=False,
                error_message=f"Error analyzing commit log: {e}",
            )

    def filter_commits(self, commits: List[Commit], request: CodeStatsRequest) -> List[Commit]:
        """날짜 범위 및 사용자 포함/제외 필터 적용"""
        since = request.since
        if request.days is not None:
            cutoff = datetime.now() - timedelta(days=request.days)
            since = max(since, cutoff) if since else cutoff

        filtered = self.parser.filter_by_date_range(commits, since, request.until)

        include = list(request.include_users) or request.config.include_users
        exclude = list(request.exclude_users) or request.config.exclude_users
        if include:
            filtered = [c for c in filtered if _matches_user(c, include)]
        if exclude:
            filtered = [c for c in filtered if not _matches_user(c, exclude)]

        if len(filtered) != len(commits):
            logger.info(f"Filtered commits: {len(commits)} -> {len(filtered)}")
        return filtered

"""
Statistics Aggregator Module - 기여자별 통계 집계

커밋 목록과 기여자 식별 정보를 결합하여 기여자별 커밋 수, 라인 증감,
언어별 통계, 프로덕션/테스트 코드 분포를 계산합니다.
"""
import re
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from code_stats.core.alias_resolver import find_canonical_name
from code_stats.core.stats_models import (
    CodeBucket,
    ContributorIdentity,
    ContributorStats,
    LanguageStats,
)
from code_stats.core.vcs_models import Commit
from code_stats.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

UNKNOWN_LANGUAGE = "Unknown"

_PATH_SEPARATORS = re.compile(r'[\\/]')


@dataclass(frozen=True)
class LanguageLookup:
    """파일명/확장자 -> 언어 매핑"""
    filenames: Mapping[str, str] = field(default_factory=dict)
    extensions: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # 키는 소문자, 확장자는 선행 '.' 없이 저장
        object.__setattr__(
            self, 'filenames', {k.lower(): v for k, v in (self.filenames or {}).items()}
        )
        object.__setattr__(
            self, 'extensions',
            {k.lower().lstrip('.'): v for k, v in (self.extensions or {}).items()}
        )

    def language_for(self, path: str) -> str:
        """
        파일 경로의 언어 결정

        1) 파일명 전체 일치 (대소문자 무시)
        2) 마지막 '.' 이후 확장자
        3) 둘 다 없으면 "Unknown"
        """
        filename = _PATH_SEPARATORS.split(path)[-1].lower()
        if filename in self.filenames:
            return self.filenames[filename]

        dot = path.rfind('.')
        if dot == -1:
            return UNKNOWN_LANGUAGE

        extension = path[dot + 1:].lower()
        if _PATH_SEPARATORS.search(extension):
            return UNKNOWN_LANGUAGE
        return self.extensions.get(extension, UNKNOWN_LANGUAGE)


def classify_path(
    path: str,
    production_patterns: Sequence[str],
    test_patterns: Sequence[str],
    unmatched: CodeBucket = CodeBucket.PRODUCTION
) -> CodeBucket:
    """
    파일 경로를 프로덕션/테스트 코드로 분류

    테스트 패턴이 우선이며, 어떤 패턴에도 맞지 않으면 `unmatched`를 반환합니다.
    """
    lowered = path.lower()
    if any(pattern.lower() in lowered for pattern in test_patterns or ()):
        return CodeBucket.TEST
    if any(pattern.lower() in lowered for pattern in production_patterns or ()):
        return CodeBucket.PRODUCTION
    return unmatched


@dataclass(frozen=True)
class PathClassifier:
    """경로 패턴 기반 코드 분류기"""
    production_patterns: Tuple[str, ...] = ()
    test_patterns: Tuple[str, ...] = ()
    unmatched: CodeBucket = CodeBucket.PRODUCTION

    def classify(self, path: str) -> CodeBucket:
        return classify_path(path, self.production_patterns, self.test_patterns, self.unmatched)


class StatisticsAggregator:
    """커밋 -> 기여자 통계 집계기"""

    def __init__(self, max_workers: Optional[int] = None):
        """
        Args:
            max_workers: 기여자 그룹 병렬 집계 스레드 수 (None 또는 1이면 순차 처리)
        """
        self.max_workers = max_workers

    @log_execution_time
    def aggregate(
        self,
        commits: Optional[List[Commit]],
        identities: Optional[Mapping[str, ContributorIdentity]],
        language_lookup: LanguageLookup,
        production_patterns: Sequence[str],
        test_patterns: Sequence[str],
        unmatched_bucket: CodeBucket = CodeBucket.PRODUCTION
    ) -> List[ContributorStats]:
        """
        기여자별 통계 집계

        Args:
            commits: 파싱된 커밋 목록
            identities: 대표 이메일 -> ContributorIdentity (비어 있으면 이메일별로 생성)
            language_lookup: 언어 판별 테이블
            production_patterns: 프로덕션 코드 경로 패턴
            test_patterns: 테스트 코드 경로 패턴
            unmatched_bucket: 어떤 패턴에도 맞지 않는 파일의 분류

        Returns:
            커밋 수 내림차순, 이름 오름차순으로 정렬된 통계 목록
        """
        if not commits:
            return []

        classifier = PathClassifier(
            production_patterns=tuple(production_patterns or ()),
            test_patterns=tuple(test_patterns or ()),
            unmatched=unmatched_bucket,
        )
        groups = self._group_commits(commits, identities or {})

        def build(group: Tuple[ContributorIdentity, List[Commit]]) -> ContributorStats:
            return self._aggregate_contributor(group[0], group[1], language_lookup, classifier)

        if self.max_workers and self.max_workers > 1 and len(groups) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                stats = list(executor.map(build, groups))
        else:
            stats = [build(group) for group in groups]

        stats.sort(key=lambda s: (-s.commit_count, s.name, s.primary_email))
        logger.debug(f"Aggregated {len(commits)} commits into {len(stats)} contributors")
        return stats

    def _group_commits(
        self,
        commits: Iterable[Commit],
        identities: Mapping[str, ContributorIdentity]
    ) -> List[Tuple[ContributorIdentity, List[Commit]]]:
        """커밋을 기여자 단위로 묶음 (식별 정보가 없는 이메일은 이메일별로 묶음)"""
        email_to_identity: Dict[str, ContributorIdentity] = {}
        for key in sorted(identities):
            identity = identities[key]
            for email in identity.all_emails:
                email_to_identity.setdefault(email, identity)

        known: Dict[str, Tuple[ContributorIdentity, List[Commit]]] = {}
        unknown: Dict[str, List[Commit]] = defaultdict(list)

        for commit in commits:
            identity = email_to_identity.get(commit.author_email)
            if identity is None:
                unknown[commit.author_email].append(commit)
                continue
            known.setdefault(identity.primary_email, (identity, []))[1].append(commit)

        groups = list(known.values())
        for email, email_commits in unknown.items():
            groups.append((self._default_identity(email, email_commits), email_commits))

        if unknown and identities:
            logger.debug(f"{len(unknown)} author email(s) had no resolved identity")
        return groups

    @staticmethod
    def _default_identity(email: str, commits: List[Commit]) -> ContributorIdentity:
        names = {commit.author_name for commit in commits}
        return ContributorIdentity(
            canonical_name=find_canonical_name(names),
            primary_email=email,
            all_emails=frozenset({email}),
            all_names=frozenset(names),
        )

    def _aggregate_contributor(
        self,
        identity: ContributorIdentity,
        commits: List[Commit],
        language_lookup: LanguageLookup,
        classifier: PathClassifier
    ) -> ContributorStats:
        language_totals: Dict[str, List[int]] = defaultdict(lambda: [0, 0, 0, 0])
        buckets: Dict[CodeBucket, Dict[str, int]] = {bucket: defaultdict(int) for bucket in CodeBucket}

        for commit in commits:
            for change in commit.file_changes:
                language = language_lookup.language_for(change.path)

                totals = language_totals[language]
                totals[0] += change.total_lines_changed
                totals[1] += change.insertions
                totals[2] += change.deletions
                totals[3] += 1

                buckets[classifier.classify(change.path)][language] += change.net_lines

        language_stats = {
            language: LanguageStats(language, lines, ins, dels, files)
            for language, (lines, ins, dels, files) in language_totals.items()
        }

        return ContributorStats(
            name=identity.canonical_name,
            primary_email=identity.primary_email,
            all_emails=identity.all_emails,
            commit_count=len(commits),
            files_changed=sum(commit.files_changed_count for commit in commits),
            insertions=sum(commit.insertions for commit in commits),
            deletions=sum(commit.deletions for commit in commits),
            language_stats=language_stats,
            production_lines=dict(buckets[CodeBucket.PRODUCTION]),
            test_lines=dict(buckets[CodeBucket.TEST]),
            other_lines=dict(buckets[CodeBucket.OTHER]),
        )


def aggregate(
    commits: Optional[List[Commit]],
    identities: Optional[Mapping[str, ContributorIdentity]],
    language_lookup: LanguageLookup,
    production_patterns: Sequence[str],
    test_patterns: Sequence[str],
    unmatched_bucket: CodeBucket = CodeBucket.PRODUCTION
) -> List[ContributorStats]:
    """기본 StatisticsAggregator로 기여자별 통계 집계"""
    return StatisticsAggregator().aggregate(
        commits, identities, language_lookup, production_patterns, test_patterns, unmatched_bucket
    )

"""
Statistics Models Module - 기여자 통계 데이터 모델

기여자 식별 정보와 집계 결과를 표현하는 불변 데이터 클래스 모음
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Dict, FrozenSet


def also_emails(primary_email: str, all_emails: AbstractSet[str]) -> str:
    """대표 이메일을 제외한 이메일 목록 표기 "(also: a, b)" (없으면 빈 문자열)"""
    others = sorted(e for e in all_emails if e != primary_email)
    if not others:
        return ""
    return f"(also: {', '.join(others)})"


class CodeBucket(str, Enum):
    """변경된 파일의 코드 분류"""
    PRODUCTION = "production"
    TEST = "test"
    OTHER = "other"


@dataclass(frozen=True)
class ContributorIdentity:
    """여러 이메일/이름을 하나로 묶은 기여자 식별 정보"""
    canonical_name: str
    primary_email: str
    all_emails: FrozenSet[str] = field(default_factory=frozenset)
    all_names: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        # primary_email은 항상 all_emails에 포함
        object.__setattr__(
            self, 'all_emails', frozenset(self.all_emails) | {self.primary_email}
        )
        object.__setattr__(self, 'all_names', frozenset(self.all_names))

    def has_email(self, email: str) -> bool:
        return email in self.all_emails

    def has_name(self, name: str) -> bool:
        return name in self.all_names

    @property
    def display_string(self) -> str:
        """이름과 함께 다른 이메일 목록을 보여주는 문자열"""
        also = also_emails(self.primary_email, self.all_emails)
        return f"{self.canonical_name} {also}" if also else self.canonical_name


@dataclass(frozen=True)
class LanguageStats:
    """언어별 변경 통계"""
    language: str
    lines_changed: int = 0
    insertions: int = 0
    deletions: int = 0
    files_changed: int = 0

    @property
    def net_lines(self) -> int:
        return self.insertions - self.deletions

    def combine(self, other: 'LanguageStats') -> 'LanguageStats':
        """
        같은 언어의 통계 두 개를 합산

        Raises:
            ValueError: 언어가 다른 경우
        """
        if self.language != other.language:
            raise ValueError(
                f"Cannot combine stats for different languages: "
                f"{self.language} != {other.language}"
            )
        return LanguageStats(
            language=self.language,
            lines_changed=self.lines_changed + other.lines_changed,
            insertions=self.insertions + other.insertions,
            deletions=self.deletions + other.deletions,
            files_changed=self.files_changed + other.files_changed,
        )


@dataclass(frozen=True)
class ContributorStats:
    """기여자 한 명에 대한 집계 결과"""
    name: str
    primary_email: str
    all_emails: FrozenSet[str] = field(default_factory=frozenset)
    commit_count: int = 0
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0
    language_stats: Dict[str, LanguageStats] = field(default_factory=dict)
    production_lines: Dict[str, int] = field(default_factory=dict)
    test_lines: Dict[str, int] = field(default_factory=dict)
    other_lines: Dict[str, int] = field(default_factory=dict)

    @property
    def total_lines_changed(self) -> int:
        return self.insertions + self.deletions

    @property
    def net_lines(self) -> int:
        return self.insertions - self.deletions

    def commit_percentage(self, total_commits: int) -> float:
        """전체 커밋 대비 비율(%)"""
        if total_commits == 0:
            return 0.0
        return self.commit_count / total_commits * 100.0

    def lines_for(self, bucket: CodeBucket) -> Dict[str, int]:
        """분류별 언어 -> 순증감 라인 수"""
        return {
            CodeBucket.PRODUCTION: self.production_lines,
            CodeBucket.TEST: self.test_lines,
            CodeBucket.OTHER: self.other_lines,
        }[bucket]

"""
Alias Resolver Module - 기여자 식별 정보 통합

한 사람이 여러 이메일/이름으로 커밋한 경우 별칭 설정을 이용해
하나의 ContributorIdentity로 묶습니다.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional

from code_stats.core.stats_models import ContributorIdentity
from code_stats.core.vcs_models import Commit
from code_stats.utils.logger import get_logger

logger = get_logger(__name__)

AliasTable = Mapping[str, Iterable[str]]

UNKNOWN_NAME = "Unknown"
UNKNOWN_EMAIL = "unknown@example.com"


def find_canonical_name(names: Iterable[str]) -> str:
    """
    표시용 대표 이름 선택

    가장 긴 이름을 선택하고, 길이가 같으면 사전순으로 앞선 이름을 선택합니다.
    """
    candidates = sorted(set(names), key=lambda name: (-len(name), name))
    return candidates[0] if candidates else UNKNOWN_NAME


def find_primary_email(emails: Iterable[str], email_counts: Mapping[str, int]) -> str:
    """커밋 수가 가장 많은 이메일 (동률이면 사전순)"""
    candidates = sorted(set(emails), key=lambda email: (-email_counts.get(email, 0), email))
    return candidates[0] if candidates else UNKNOWN_EMAIL


def resolve_email_alias(alias_table: Optional[AliasTable], email: str) -> str:
    """
    별칭 설정으로 이메일의 대표(canonical) 이메일 결정

    Args:
        alias_table: 대표 이메일 -> 별칭 이메일 집합
        email: 커밋 작성자 이메일

    Returns:
        대표 이메일 (별칭이 아니면 입력 그대로)
    """
    if not alias_table:
        return email
    if email in alias_table:
        return email
    for canonical, aliases in alias_table.items():
        if email in aliases:
            return canonical
    return email


class AliasResolver:
    """커밋 작성자 정보를 기여자 단위로 묶는 클래스"""

    def resolve_identities(
        self,
        commits: Optional[List[Commit]],
        alias_table: Optional[AliasTable] = None
    ) -> Dict[str, ContributorIdentity]:
        """
        커밋 목록에서 기여자 식별 정보 생성

        Args:
            commits: 파싱된 커밋 목록
            alias_table: 대표 이메일 -> 별칭 이메일 집합 (선택사항)

        Returns:
            대표 이메일 -> ContributorIdentity
        """
        if not commits:
            return {}

        table = {
            canonical: set(aliases or ())
            for canonical, aliases in (alias_table or {}).items()
        }

        grouped: Dict[str, List[Commit]] = defaultdict(list)
        for commit in commits:
            grouped[resolve_email_alias(table, commit.author_email)].append(commit)

        identities = {
            canonical: self._build_identity(canonical, group, table)
            for canonical, group in grouped.items()
        }

        merged = sum(1 for identity in identities.values() if len(identity.all_emails) > 1)
        logger.debug(
            f"Resolved {len(identities)} contributor identities "
            f"({merged} with multiple emails)"
        )
        return identities

    def _build_identity(
        self,
        canonical_email: str,
        commits: List[Commit],
        alias_table: Mapping[str, set]
    ) -> ContributorIdentity:
        emails = {commit.author_email for commit in commits}
        emails |= alias_table.get(canonical_email, set())
        emails.add(canonical_email)
        names = {commit.author_name for commit in commits}

        return ContributorIdentity(
            canonical_name=find_canonical_name(names),
            primary_email=canonical_email,
            all_emails=frozenset(emails),
            all_names=frozenset(names),
        )


def resolve_identities(
    commits: Optional[List[Commit]],
    alias_table: Optional[AliasTable] = None
) -> Dict[str, ContributorIdentity]:
    """기본 AliasResolver로 기여자 식별 정보 생성"""
    return AliasResolver().resolve_identities(commits, alias_table)

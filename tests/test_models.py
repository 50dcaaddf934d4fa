"""
Data Model Unit Tests

커밋 및 통계 데이터 모델 테스트
"""
from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from code_stats.core.stats_models import (
    CodeBucket,
    ContributorIdentity,
    ContributorStats,
    LanguageStats,
    also_emails,
)
from code_stats.core.vcs_models import ChangeType, Commit, FileChange


class TestCommitModels:
    """커밋 모델 테스트"""

    def test_file_change_defaults(self):
        """FileChange 기본값 테스트"""
        change = FileChange("src/a.py", 10, 4)

        assert change.change_type == ChangeType.MODIFIED
        assert change.total_lines_changed == 14
        assert change.net_lines == 6

    def test_commit_totals_from_file_changes(self):
        """파일 변경사항 합계 테스트"""
        commit = Commit.from_file_changes(
            hash="abc123",
            author_name="Alice",
            author_email="alice@x.com",
            commit_date=datetime(2024, 1, 1),
            message="init",
            file_changes=[FileChange("a.py", 3, 1), FileChange("b.py", 2, 5)],
        )

        assert commit.insertions == 5
        assert commit.deletions == 6
        assert commit.total_lines_changed == 11
        assert commit.net_lines == -1
        assert commit.files_changed_count == 2
        assert isinstance(commit.file_changes, tuple)

    def test_commit_is_immutable(self):
        """커밋 불변성 테스트"""
        commit = Commit("abc", "Alice", "alice@x.com", datetime(2024, 1, 1), "msg")

        with pytest.raises(FrozenInstanceError):
            commit.message = "changed"


class TestContributorIdentity:
    """ContributorIdentity 테스트"""

    def test_primary_email_always_included(self):
        """대표 이메일 포함 테스트"""
        identity = ContributorIdentity("Alice", "alice@x.com", frozenset({"a@home.com"}))

        assert identity.all_emails == {"alice@x.com", "a@home.com"}
        assert identity.has_email("alice@x.com")
        assert not identity.has_email("bob@x.com")

    def test_display_string(self):
        """표시 문자열 테스트"""
        single = ContributorIdentity("Alice", "alice@x.com")
        multi = ContributorIdentity(
            "Alice", "alice@x.com", {"z@x.com", "b@x.com"}, {"Alice", "A."}
        )

        assert single.display_string == "Alice"
        assert multi.display_string == "Alice (also: b@x.com, z@x.com)"
        assert multi.has_name("A.")
        assert isinstance(multi.all_names, frozenset)

    def test_also_emails(self):
        """다른 이메일 목록 표기 테스트"""
        assert also_emails("a@x.com", {"a@x.com"}) == ""
        assert also_emails("a@x.com", frozenset({"c@x.com", "a@x.com", "b@x.com"})) == \
            "(also: b@x.com, c@x.com)"


class TestLanguageStats:
    """LanguageStats 테스트"""

    def test_combine_same_language(self):
        """같은 언어 합산 테스트"""
        combined = LanguageStats("Python", 10, 7, 3, 2).combine(LanguageStats("Python", 4, 4, 0, 1))

        assert combined == LanguageStats("Python", 14, 11, 3, 3)
        assert combined.net_lines == 8

    def test_combine_different_language_raises(self):
        """다른 언어 합산 시 예외 테스트"""
        with pytest.raises(ValueError, match="different languages"):
            LanguageStats("Python").combine(LanguageStats("Java"))


class TestContributorStats:
    """ContributorStats 테스트"""

    def test_derived_values(self):
        """파생 값 테스트"""
        stats = ContributorStats(
            name="Alice",
            primary_email="alice@x.com",
            commit_count=3,
            insertions=20,
            deletions=5,
            production_lines={"Python": 10},
            test_lines={"Python": 5},
        )

        assert stats.total_lines_changed == 25
        assert stats.net_lines == 15
        assert stats.commit_percentage(12) == pytest.approx(25.0)
        assert stats.lines_for(CodeBucket.PRODUCTION) == {"Python": 10}
        assert stats.lines_for(CodeBucket.TEST) == {"Python": 5}
        assert stats.lines_for(CodeBucket.OTHER) == {}

    def test_commit_percentage_with_zero_total(self):
        """전체 커밋 수가 0일 때 비율 테스트"""
        assert ContributorStats("Alice", "alice@x.com").commit_percentage(0) == 0.0

"""
Git Log Parser Module - 커밋 로그 텍스트 파싱

`git log --numstat` 형태의 원시 텍스트를 구조화된 커밋 목록으로 변환합니다.
형식이 잘못된 커밋 블록은 건너뛰고 나머지 블록은 그대로 반환합니다.
"""
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from code_stats.core.vcs_models import ChangeType, Commit, FileChange
from code_stats.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)


class GitLogParser:
    """git log 출력 파서"""

    BLOCK_SPLIT_PATTERN = re.compile(r'^(?=commit [0-9A-Za-z]+)', re.MULTILINE)
    COMMIT_PATTERN = re.compile(r'^commit ([0-9A-Za-z]+)\b', re.MULTILINE)
    AUTHOR_PATTERN = re.compile(r'^Author:[ \t]*([^<\s].*?)[ \t]*<([^<>\n]+)>[ \t]*$', re.MULTILINE)
    DATE_PATTERN = re.compile(r'^Date:[ \t]*(.*?)[ \t]*$', re.MULTILINE)
    NUMSTAT_PATTERN = re.compile(r'^(\d+|-)[ \t]+(\d+|-)[ \t]+(\S.*?)\s*$')
    DIFFSTAT_PATTERN = re.compile(r'^ ?\S.*\|\s*(\d+|Bin)')
    SUMMARY_PATTERN = re.compile(r'^ ?\d+ files? changed')
    MODE_PATTERN = re.compile(r'^[ \t]*(create|delete) mode \d+ (.+?)[ \t]*$', re.MULTILINE)
    HEADER_PATTERN = re.compile(r'^[A-Za-z][A-Za-z-]*:\s')

    STRICT_DATE_PATTERN = re.compile(r'^(\d{4})-(\d{2})-(\d{2})\s+(\d{2}):(\d{2}):(\d{2})(?:\s.*)?$')
    YEAR_TOKEN_PATTERN = re.compile(r'^\d{4}$')

    RENAME_MARKER = " => "
    BINARY_MARKER = "-"

    def __init__(self, max_workers: Optional[int] = None):
        """
        GitLogParser 초기화

        Args:
            max_workers: 블록 병렬 파싱 스레드 수 (None 또는 1이면 순차 처리)
        """
        self.max_workers = max_workers

    def split_blocks(self, raw_text: Optional[str]) -> List[str]:
        """
        원시 텍스트를 `commit <hash>` 줄 기준으로 블록 분할

        Returns:
            'commit'으로 시작하는 블록 목록 (원래 순서 유지)
        """
        if not raw_text or not raw_text.strip():
            return []

        blocks = []
        for chunk in self.BLOCK_SPLIT_PATTERN.split(raw_text):
            block = chunk.strip()
            if block.startswith("commit"):
                blocks.append(block)
        return blocks

    @log_execution_time
    def parse_commits(self, raw_text: Optional[str]) -> List[Commit]:
        """
        git log 텍스트 전체를 커밋 목록으로 변환

        Args:
            raw_text: git log 원시 출력 (None 허용)

        Returns:
            파싱에 성공한 커밋 목록 (입력 순서 유지)
        """
        blocks = self.split_blocks(raw_text)
        if not blocks:
            return []

        if self.max_workers and self.max_workers > 1 and len(blocks) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                parsed = list(executor.map(self.parse_commit, blocks))
        else:
            parsed = [self.parse_commit(block) for block in blocks]

        commits = [commit for commit in parsed if commit is not None]
        skipped = len(blocks) - len(commits)
        if skipped:
            logger.info(f"Skipped {skipped} malformed commit block(s) out of {len(blocks)}")
        logger.debug(f"Parsed {len(commits)} commits")
        return commits

    def parse_commit(self, block: str) -> Optional[Commit]:
        """
        단일 커밋 블록 파싱

        Args:
            block: 'commit <hash>'로 시작하는 텍스트 블록

        Returns:
            Commit 또는 필수 필드(hash/author/date)가 없으면 None
        """
        try:
            commit_match = self.COMMIT_PATTERN.search(block)
            if not commit_match:
                logger.debug("Skipping block without commit hash")
                return None
            commit_hash = commit_match.group(1)

            author_match = self.AUTHOR_PATTERN.search(block)
            if not author_match:
                logger.debug(f"Skipping commit {commit_hash}: no Author line")
                return None

            date_match = self.DATE_PATTERN.search(block)
            if not date_match:
                logger.debug(f"Skipping commit {commit_hash}: no Date line")
                return None

            return Commit.from_file_changes(
                hash=commit_hash,
                author_name=author_match.group(1).strip(),
                author_email=author_match.group(2).strip(),
                commit_date=self.parse_date(date_match.group(1)),
                message=self._extract_message(block, date_match.end()),
                file_changes=self._parse_file_changes(block),
            )
        except Exception as e:
            logger.debug(f"Failed to parse commit block: {e}")
            return None

    def parse_date(self, text: str) -> datetime:
        """
        Date: 헤더 값 파싱

        1) YYYY-MM-DD HH:MM:SS (타임존 무시)
        2) 4자리 연도 토큰이 있으면 해당 연도의 고정 시각
        3) 둘 다 실패하면 현재 시각
        """
        text = (text or "").strip()

        strict = self.STRICT_DATE_PATTERN.match(text)
        if strict:
            try:
                return datetime(*(int(part) for part in strict.groups()))
            except ValueError:
                logger.debug(f"Out-of-range date fields in {text!r}")

        for token in text.split():
            if self.YEAR_TOKEN_PATTERN.match(token):
                try:
                    return datetime(int(token), 1, 15, 10, 30, 45)
                except ValueError:
                    continue

        logger.debug(f"Unparseable date {text!r}, using current time")
        return datetime.now()

    def _is_file_change_line(self, line: str) -> bool:
        return bool(
            self.NUMSTAT_PATTERN.match(line)
            or self.DIFFSTAT_PATTERN.match(line)
            or self.SUMMARY_PATTERN.match(line)
        )

    def _extract_message(self, block: str, header_end: int) -> str:
        """Date 헤더 이후부터 첫 파일 변경 줄 전까지의 메시지"""
        # 첫 요소는 Date 줄의 나머지(빈 문자열)
        lines = block[header_end:].split('\n')[1:]
        parts = []
        in_header = True

        for line in lines:
            if not line.strip():
                in_header = False
                continue
            # --format=fuller 등의 추가 헤더 (Commit:, CommitDate:)
            if in_header and self.HEADER_PATTERN.match(line):
                continue
            in_header = False
            if self._is_file_change_line(line):
                break
            parts.append(line.strip())

        return " ".join(parts).strip()

    def _parse_file_changes(self, block: str) -> List[FileChange]:
        modes = self._parse_change_modes(block)
        changes = []

        for line in block.splitlines():
            match = self.NUMSTAT_PATTERN.match(line)
            if not match:
                continue

            ins_raw, del_raw, path = match.groups()
            if self.is_rename(path):
                continue

            counts = self._parse_counts(ins_raw, del_raw)
            if counts is None:
                logger.debug(f"Skipping numstat line with invalid counts: {line!r}")
                continue

            changes.append(FileChange(
                path=path,
                insertions=counts[0],
                deletions=counts[1],
                change_type=modes.get(path, ChangeType.MODIFIED)
            ))

        return changes

    def _parse_change_modes(self, block: str) -> Dict[str, ChangeType]:
        """--summary 출력의 create/delete mode 줄로 변경 유형 결정"""
        modes = {}
        for kind, path in self.MODE_PATTERN.findall(block):
            modes[path] = ChangeType.ADDED if kind == "create" else ChangeType.DELETED
        return modes

    def _parse_counts(self, ins_raw: str, del_raw: str) -> Optional[Tuple[int, int]]:
        try:
            insertions = 0 if ins_raw == self.BINARY_MARKER else int(ins_raw)
            deletions = 0 if del_raw == self.BINARY_MARKER else int(del_raw)
        except ValueError:
            return None
        return insertions, deletions

    @classmethod
    def is_rename(cls, path: str) -> bool:
        """`old => new` 또는 `{old => new}` 형태의 이름 변경 경로 여부"""
        return cls.RENAME_MARKER in path

    @staticmethod
    def filter_by_date_range(
        commits: Iterable[Commit],
        since: Optional[datetime] = None,
        until: Optional[datetime] = None
    ) -> List[Commit]:
        """
        날짜 범위로 커밋 필터링 (양 끝 포함)

        Args:
            commits: 커밋 목록
            since: 시작 시각 (None이면 제한 없음)
            until: 종료 시각 (None이면 제한 없음)
        """
        return [
            commit for commit in commits
            if (since is None or commit.commit_date >= since)
            and (until is None or commit.commit_date <= until)
        ]

    @staticmethod
    def filter_by_authors(commits: Iterable[Commit], emails: Optional[Set[str]]) -> List[Commit]:
        """지정한 작성자 이메일의 커밋만 남김 (비어 있으면 전체)"""
        commits = list(commits)
        if not emails:
            return commits
        return [commit for commit in commits if commit.author_email in emails]


def parse_commits(raw_text: Optional[str]) -> List[Commit]:
    """기본 설정의 GitLogParser로 커밋 목록 파싱"""
    return GitLogParser().parse_commits(raw_text)

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Tuple


class ChangeType(str, Enum):
    """파일 변경 유형"""
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"


@dataclass(frozen=True)
class FileChange:
    path: str
    insertions: int = 0
    deletions: int = 0
    change_type: ChangeType = ChangeType.MODIFIED

    @property
    def total_lines_changed(self) -> int:
        return self.insertions + self.deletions

    @property
    def net_lines(self) -> int:
        return self.insertions - self.deletions


@dataclass(frozen=True)
class Commit:
    hash: str
    author_name: str
    author_email: str
    commit_date: datetime
    message: str
    file_changes: Tuple[FileChange, ...] = field(default_factory=tuple)
    insertions: int = 0
    deletions: int = 0

    @classmethod
    def from_file_changes(
        cls,
        hash: str,
        author_name: str,
        author_email: str,
        commit_date: datetime,
        message: str,
        file_changes,
    ) -> 'Commit':
        """파일 변경사항 합계로 insertions/deletions를 채운 커밋 생성"""
        changes = tuple(file_changes)
        return cls(
            hash=hash,
            author_name=author_name,
            author_email=author_email,
            commit_date=commit_date,
            message=message,
            file_changes=changes,
            insertions=sum(fc.insertions for fc in changes),
            deletions=sum(fc.deletions for fc in changes),
        )

    @property
    def total_lines_changed(self) -> int:
        return self.insertions + self.deletions

    @property
    def net_lines(self) -> int:
        return self.insertions - self.deletions

    @property
    def files_changed_count(self) -> int:
        return len(self.file_changes)

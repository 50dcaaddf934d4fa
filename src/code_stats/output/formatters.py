"""
Output Formatter Module - 분석 결과 출력 포맷팅

분석 결과를 JSON 문자열 또는 Rich 텍스트 리포트로 변환합니다.
"""
import io
import json
from typing import Any, Dict

from rich.console import Console
from rich.table import Table
from rich.text import Text

from code_stats.core.service import CodeStatsResult
from code_stats.core.stats_models import ContributorStats, also_emails
from code_stats.utils.logger import get_logger

logger = get_logger(__name__)


def contributor_to_dict(stats: ContributorStats) -> Dict[str, Any]:
    """ContributorStats를 직렬화 가능한 딕셔너리로 변환"""
    return {
        "name": stats.name,
        "primary_email": stats.primary_email,
        "all_emails": sorted(stats.all_emails),
        "commit_count": stats.commit_count,
        "files_changed": stats.files_changed,
        "insertions": stats.insertions,
        "deletions": stats.deletions,
        "net_lines": stats.net_lines,
        "language_stats": {
            language: {
                "lines_changed": ls.lines_changed,
                "insertions": ls.insertions,
                "deletions": ls.deletions,
                "files_changed": ls.files_changed,
            }
            for language, ls in sorted(stats.language_stats.items())
        },
        "production_lines": dict(sorted(stats.production_lines.items())),
        "test_lines": dict(sorted(stats.test_lines.items())),
        "other_lines": dict(sorted(stats.other_lines.items())),
    }


class JsonOutputFormatter:
    """프로그램 연동용 JSON 포맷터"""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def to_dict(self, result: CodeStatsResult) -> Dict[str, Any]:
        return {
            "success": result.success,
            "error_message": result.error_message,
            "repository_path": result.repository_path,
            "total_commits": result.total_commits,
            "oldest_commit": result.oldest_commit.isoformat() if result.oldest_commit else None,
            "newest_commit": result.newest_commit.isoformat() if result.newest_commit else None,
            "analysis_period": result.analysis_period,
            "contributors": [contributor_to_dict(s) for s in result.contributor_stats],
        }

    def format(self, result: CodeStatsResult) -> str:
        return json.dumps(self.to_dict(result), indent=self.indent, ensure_ascii=False)


class TextOutputFormatter:
    """터미널용 텍스트 리포트 포맷터"""

    TOP_LANGUAGES = 3

    def __init__(self, use_colors: bool = True, width: int = 120):
        self.use_colors = use_colors
        self.width = width

    def _console(self, buffer: io.StringIO) -> Console:
        return Console(
            file=buffer,
            width=self.width,
            force_terminal=self.use_colors,
            no_color=not self.use_colors,
            highlight=False,
        )

    def format(self, result: CodeStatsResult) -> str:
        buffer = io.StringIO()
        console = self._console(buffer)

        if not result.success:
            console.print(f"[bold red]Error:[/bold red] {result.error_message}")
            return buffer.getvalue()

        if not result.contributor_stats:
            console.print("[yellow]No commits found in the given log or time range.[/yellow]")
            return buffer.getvalue()

        console.print("[bold blue]Code Statistics Report[/bold blue]")
        if result.repository_path:
            console.print(f"[cyan]Repository:[/cyan] {result.repository_path}")
        console.print(f"[cyan]Period:[/cyan] {result.analysis_period}")
        console.print(f"[cyan]Total commits:[/cyan] {result.total_commits}")
        console.print()

        table = Table(title="Contributors")
        table.add_column("#", justify="right")
        table.add_column("Name", style="bold green")
        table.add_column("Email", style="cyan")
        table.add_column("Commits", justify="right")
        table.add_column("Files", justify="right")
        table.add_column("Lines", justify="right")
        table.add_column("Languages")
        table.add_column("Production / Test", justify="right")

        for rank, stats in enumerate(result.contributor_stats, start=1):
            table.add_row(
                str(rank),
                stats.name,
                self._emails(stats),
                f"{stats.commit_count} ({stats.commit_percentage(result.total_commits):.1f}%)",
                str(stats.files_changed),
                self._lines(stats),
                self._languages(stats),
                f"{sum(stats.production_lines.values())} / {sum(stats.test_lines.values())}",
            )

        console.print(table)
        return buffer.getvalue()

    @staticmethod
    def _emails(stats: ContributorStats) -> str:
        also = also_emails(stats.primary_email, stats.all_emails)
        return f"{stats.primary_email}\n{also}" if also else stats.primary_email

    @staticmethod
    def _lines(stats: ContributorStats) -> Text:
        net = stats.net_lines
        net_style = "green" if net > 0 else "red" if net < 0 else "yellow"
        text = Text()
        text.append(f"+{stats.insertions}", style="green")
        text.append(" ")
        text.append(f"-{stats.deletions}", style="red")
        text.append(" (net ")
        text.append(f"+{net}" if net > 0 else str(net), style=net_style)
        text.append(")")
        return text

    def _languages(self, stats: ContributorStats) -> str:
        ranked = sorted(
            stats.language_stats.values(),
            key=lambda ls: (-ls.lines_changed, ls.language)
        )[:self.TOP_LANGUAGES]
        return ", ".join(f"{ls.language} ({ls.lines_changed})" for ls in ranked)

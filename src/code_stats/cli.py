"""
Code Stats CLI Interface

커밋 로그 통계 도구의 명령줄 인터페이스
"""
import sys
from typing import Dict, Optional

import click
from rich.console import Console
from rich.table import Table
from dotenv import load_dotenv

from code_stats.core.service import CodeStatsRequest, CodeStatsService
from code_stats.exceptions import CodeStatsError
from code_stats.output.formatters import JsonOutputFormatter, TextOutputFormatter
from code_stats.utils.config import CodeStatsConfig, Config
from code_stats.utils.logger import get_logger, setup_logger

console = Console()
logger = get_logger(__name__)

# 환경 변수 로드
load_dotenv()

DATE_FORMATS = ['%Y-%m-%d', '%Y-%m-%d %H:%M:%S']


def parse_extension_mapping(value: Optional[str]) -> Dict[str, str]:
    """
    `ext1:Lang1,ext2:Lang2` 형식의 확장자 매핑 파싱

    Raises:
        click.BadParameter: 항목 형식이 잘못된 경우
    """
    mapping = {}
    if not value or not value.strip():
        return mapping

    for pair in value.split(','):
        if not pair.strip():
            continue
        ext, sep, language = pair.partition(':')
        if not sep or not ext.strip() or not language.strip():
            raise click.BadParameter(f"Expected ext:Language, got {pair.strip()!r}")
        mapping[ext.strip()] = language.strip()
    return mapping


def _load_config(ctx: click.Context) -> Config:
    try:
        return Config(config_file=ctx.obj.get('config_file'))
    except CodeStatsError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default=None,
    help='Set the logging level (default: CODE_STATS_LOG_LEVEL or WARNING)'
)
@click.option(
    '--config',
    'config_file',
    type=click.Path(exists=True, dir_okay=False),
    help='Path to a YAML/JSON configuration file'
)
@click.pass_context
def cli(ctx, log_level, config_file):
    """Code Stats - 커밋 로그 기반 기여자 통계 도구"""
    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config_file
    ctx.obj['log_level'] = log_level


@cli.command()
@click.argument('logfile', type=click.File('r', encoding='utf-8', errors='replace'), default='-')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text',
              help='Output format')
@click.option('--days', type=click.IntRange(min=0), default=None,
              help='Only include commits from the last N days')
@click.option('--since', type=click.DateTime(formats=DATE_FORMATS), default=None,
              help='Only include commits on or after this date')
@click.option('--until', type=click.DateTime(formats=DATE_FORMATS), default=None,
              help='Only include commits on or before this date')
@click.option('--include-user', 'include_users', multiple=True,
              help='Only include this author email or name (repeatable)')
@click.option('--exclude-user', 'exclude_users', multiple=True,
              help='Exclude this author email or name (repeatable)')
@click.option('--ext', 'extensions', default=None,
              help='Extra extension mappings, e.g. "vue:Vue,tf:Terraform"')
@click.option('--workers', type=click.IntRange(min=1), default=None,
              help='Worker threads for parsing and aggregation')
@click.option('--repo-name', default=None, help='Repository label shown in the report')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.pass_context
def analyze(ctx, logfile, output_format, days, since, until, include_users, exclude_users,
            extensions, workers, repo_name, no_color):
    """LOGFILE(기본값: 표준입력)의 `git log --numstat` 출력 분석"""
    config = _load_config(ctx)
    setup_logger(ctx.obj.get('log_level') or config.app.log_level, config.app.log_file)
    logger.info(f"Reading commit log from {getattr(logfile, 'name', '<stdin>')}")

    stats_config = config.stats
    try:
        extra = parse_extension_mapping(extensions)
    except click.BadParameter as e:
        raise click.UsageError(str(e)) from e
    if extra:
        stats_config = stats_config.merge_with(
            CodeStatsConfig(extensions=extra, unmatched_bucket=stats_config.unmatched_bucket)
        )

    request = CodeStatsRequest(
        log_text=logfile.read(),
        config=stats_config,
        days=days,
        since=since,
        until=until,
        include_users=include_users,
        exclude_users=exclude_users,
        repository_path=repo_name,
    )
    service = CodeStatsService(max_workers=workers or config.app.max_workers)
    result = service.analyze(request)

    if output_format == 'json':
        click.echo(JsonOutputFormatter().format(result))
    else:
        click.echo(TextOutputFormatter(use_colors=not no_color).format(result), nl=False)

    if not result.success:
        sys.exit(1)


@cli.command('show-config')
@click.pass_context
def show_config(ctx):
    """현재 적용되는 언어 매핑 및 경로 패턴 확인"""
    config = _load_config(ctx)
    stats = config.stats

    table = Table(title="Language mappings")
    table.add_column("Kind", style="cyan")
    table.add_column("Key", style="green")
    table.add_column("Language", style="yellow")
    for name, language in sorted(stats.filenames.items()):
        table.add_row("filename", name, language)
    for ext, language in sorted(stats.extensions.items()):
        table.add_row("extension", ext, language)
    console.print(table)

    console.print(f"[bold]Production patterns:[/bold] {', '.join(stats.production_directories)}")
    console.print(f"[bold]Test patterns:[/bold] {', '.join(stats.test_directories)}")
    console.print(f"[bold]Unmatched files:[/bold] {stats.unmatched_bucket.value}")

    if stats.aliases:
        alias_table = Table(title="Aliases")
        alias_table.add_column("Canonical email", style="cyan")
        alias_table.add_column("Aliases", style="green")
        for canonical, aliases in sorted(stats.aliases.items()):
            alias_table.add_row(canonical, ", ".join(sorted(aliases)))
        console.print(alias_table)

    errors = config.validate()
    for error in errors:
        console.print(f"[red]✗[/red] {error}")
    if not errors:
        console.print("\n[green]✓[/green] Configuration is valid.")


def main():
    """메인 엔트리포인트"""
    cli()


if __name__ == "__main__":
    main()

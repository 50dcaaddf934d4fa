"""
Configuration Management Module

언어 매핑, 코드 분류 패턴, 별칭 설정 및 실행 환경 설정을 관리하는 모듈
"""
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import yaml
from dotenv import load_dotenv

from code_stats.core.statistics_aggregator import LanguageLookup
from code_stats.core.stats_models import CodeBucket
from code_stats.exceptions import ConfigError

# 환경 변수 로드
load_dotenv()


DEFAULT_EXTENSIONS: Dict[str, str] = {
    # Web
    'js': 'JavaScript',
    'mjs': 'JavaScript',
    'jsx': 'JavaScript',
    'ts': 'TypeScript',
    'tsx': 'TypeScript',
    'html': 'HTML',
    'css': 'CSS',
    'scss': 'SCSS',
    'vue': 'Vue',
    'svelte': 'Svelte',
    # Backend
    'java': 'Java',
    'py': 'Python',
    'rb': 'Ruby',
    'php': 'PHP',
    'go': 'Go',
    'rs': 'Rust',
    'cpp': 'C++',
    'c': 'C',
    'cs': 'C#',
    'kt': 'Kotlin',
    'scala': 'Scala',
    # Scripting
    'sh': 'Shell',
    'bash': 'Bash',
    'ps1': 'PowerShell',
    # Data & Config
    'sql': 'SQL',
    'json': 'JSON',
    'yaml': 'YAML',
    'yml': 'YAML',
    'xml': 'XML',
    'toml': 'TOML',
    'md': 'Markdown',
    'mdc': 'Markdown',
    'markdown': 'Markdown',
    # Mobile
    'swift': 'Swift',
    'dart': 'Dart',
}

DEFAULT_FILENAMES: Dict[str, str] = {
    'dockerfile': 'Docker',
    'makefile': 'Makefile',
    'jenkinsfile': 'Jenkins',
    'vagrantfile': 'Vagrant',
    'rakefile': 'Ruby',
    'gemfile': 'Ruby',
    'podfile': 'Ruby',
    'fastfile': 'Ruby',
    'brewfile': 'Ruby',
}

DEFAULT_PRODUCTION_DIRECTORIES = ['src', 'lib', 'app', 'source', 'main']
DEFAULT_TEST_DIRECTORIES = ['test', 'tests', '__tests__', 'spec', 'specs', 'cypress', 'e2e']


def _alias_set(canonical: Any, emails: Any) -> Set[str]:
    """별칭 값 정규화 (단일 문자열 또는 목록)"""
    if emails is None:
        return set()
    if isinstance(emails, str):
        return {emails}
    if not isinstance(emails, (list, tuple, set)):
        raise ConfigError(
            f"Aliases for {canonical} must be an email or a list of emails, "
            f"got {type(emails).__name__}"
        )
    return {str(alias) for alias in emails}


@dataclass
class CodeStatsConfig:
    """분석 설정 (언어 매핑, 경로 패턴, 별칭, 사용자 필터)"""
    extensions: Dict[str, str] = field(default_factory=dict)
    filenames: Dict[str, str] = field(default_factory=dict)
    production_directories: List[str] = field(default_factory=list)
    test_directories: List[str] = field(default_factory=list)
    aliases: Dict[str, Set[str]] = field(default_factory=dict)
    include_users: List[str] = field(default_factory=list)
    exclude_users: List[str] = field(default_factory=list)
    unmatched_bucket: CodeBucket = CodeBucket.PRODUCTION

    @classmethod
    def default(cls) -> 'CodeStatsConfig':
        """기본 언어 매핑과 디렉터리 패턴을 가진 설정"""
        return cls(
            extensions=dict(DEFAULT_EXTENSIONS),
            filenames=dict(DEFAULT_FILENAMES),
            production_directories=list(DEFAULT_PRODUCTION_DIRECTORIES),
            test_directories=list(DEFAULT_TEST_DIRECTORIES),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CodeStatsConfig':
        """
        딕셔너리에서 설정 생성 (누락된 항목은 비어 있는 값)

        Raises:
            ConfigError: 항목의 형식이 잘못된 경우
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        try:
            aliases = {
                str(canonical): _alias_set(canonical, emails)
                for canonical, emails in (data.get('aliases') or {}).items()
            }
            unmatched = data.get('unmatched_bucket')
            return cls(
                extensions={str(k): str(v) for k, v in (data.get('extensions') or {}).items()},
                filenames={str(k): str(v) for k, v in (data.get('filenames') or {}).items()},
                production_directories=[str(p) for p in data.get('production_directories') or []],
                test_directories=[str(p) for p in data.get('test_directories') or []],
                aliases=aliases,
                include_users=[str(u) for u in data.get('include_users') or []],
                exclude_users=[str(u) for u in data.get('exclude_users') or []],
                unmatched_bucket=CodeBucket(unmatched) if unmatched else CodeBucket.PRODUCTION,
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_file(cls, config_file: str) -> 'CodeStatsConfig':
        """
        YAML/JSON 설정 파일을 읽어 기본 설정 위에 병합

        Args:
            config_file: 설정 파일 경로 (.yml/.yaml 또는 .json)

        Raises:
            ConfigError: 파일이 없거나 파싱할 수 없는 경우
        """
        config_path = Path(config_file)

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_file}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if config_path.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read configuration {config_file}: {e}") from e

        return cls.default().merge_with(cls.from_dict(data or {}))

    def merge_with(self, other: 'CodeStatsConfig') -> 'CodeStatsConfig':
        """
        다른 설정과 병합

        매핑은 other의 항목이 우선하고, 목록은 other가 비어 있지 않을 때만 대체합니다.
        """
        return CodeStatsConfig(
            extensions={**self.extensions, **other.extensions},
            filenames={**self.filenames, **other.filenames},
            production_directories=list(other.production_directories or self.production_directories),
            test_directories=list(other.test_directories or self.test_directories),
            aliases={**self.aliases, **other.aliases},
            include_users=list(other.include_users or self.include_users),
            exclude_users=list(other.exclude_users or self.exclude_users),
            unmatched_bucket=other.unmatched_bucket,
        )

    def language_lookup(self) -> LanguageLookup:
        return LanguageLookup(filenames=self.filenames, extensions=self.extensions)


@dataclass
class AppConfig:
    """실행 환경 설정"""
    log_level: str = 'WARNING'
    log_file: Optional[str] = None
    max_workers: Optional[int] = None

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """환경 변수에서 설정 로드"""
        workers = os.getenv('CODE_STATS_MAX_WORKERS')
        try:
            max_workers = int(workers) if workers else None
        except ValueError as e:
            raise ConfigError(f"CODE_STATS_MAX_WORKERS must be an integer: {workers!r}") from e

        return cls(
            log_level=os.getenv('CODE_STATS_LOG_LEVEL', 'WARNING'),
            log_file=os.getenv('CODE_STATS_LOG_FILE') or None,
            max_workers=max_workers,
        )


class Config:
    """통합 설정 관리 클래스"""

    def __init__(self, config_file: Optional[str] = None):
        """
        설정 초기화

        Args:
            config_file: 분석 설정 파일 경로 (선택사항)
        """
        self.app = AppConfig.from_env()
        self.stats = CodeStatsConfig.from_file(config_file) if config_file else CodeStatsConfig.default()

    def validate(self) -> List[str]:
        """설정 유효성 검증"""
        errors = []

        if not self.stats.extensions and not self.stats.filenames:
            errors.append("No language mappings configured")
        overlap = set(self.stats.production_directories) & set(self.stats.test_directories)
        if overlap:
            errors.append(
                f"Patterns configured as both production and test: {', '.join(sorted(overlap))}"
            )
        if self.app.max_workers is not None and self.app.max_workers < 1:
            errors.append("max_workers must be at least 1")

        return errors

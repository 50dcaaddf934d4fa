"""
Configuration Unit Tests

설정 로딩 및 병합 테스트
"""
import json

import pytest

from code_stats.core.stats_models import CodeBucket
from code_stats.exceptions import CodeStatsError, ConfigError
from code_stats.utils.config import (
    DEFAULT_EXTENSIONS,
    DEFAULT_TEST_DIRECTORIES,
    AppConfig,
    CodeStatsConfig,
    Config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('CODE_STATS_LOG_LEVEL', 'CODE_STATS_LOG_FILE', 'CODE_STATS_MAX_WORKERS'):
        monkeypatch.delenv(name, raising=False)


class TestCodeStatsConfig:
    """CodeStatsConfig 테스트"""

    def test_default(self):
        """기본 설정 테스트"""
        config = CodeStatsConfig.default()

        assert config.extensions['py'] == 'Python'
        assert config.filenames['dockerfile'] == 'Docker'
        assert 'src' in config.production_directories
        assert config.test_directories == DEFAULT_TEST_DIRECTORIES
        assert config.unmatched_bucket == CodeBucket.PRODUCTION
        assert config.aliases == {}

    def test_default_returns_copies(self):
        """기본 매핑이 공유되지 않는지 테스트"""
        config = CodeStatsConfig.default()
        config.extensions['py'] = 'Snake'

        assert DEFAULT_EXTENSIONS['py'] == 'Python'

    def test_merge_with(self):
        """설정 병합 테스트"""
        base = CodeStatsConfig.default()
        override = CodeStatsConfig(
            extensions={'py': 'Python3', 'tf': 'Terraform'},
            test_directories=['qa'],
            aliases={'a@x.com': {'b@x.com'}},
            unmatched_bucket=CodeBucket.OTHER,
        )

        merged = base.merge_with(override)

        assert merged.extensions['py'] == 'Python3'
        assert merged.extensions['tf'] == 'Terraform'
        assert merged.extensions['java'] == 'Java'
        assert merged.production_directories == base.production_directories
        assert merged.test_directories == ['qa']
        assert merged.aliases == {'a@x.com': {'b@x.com'}}
        assert merged.unmatched_bucket == CodeBucket.OTHER

    def test_from_dict_invalid(self):
        """잘못된 설정 딕셔너리 테스트"""
        with pytest.raises(ConfigError):
            CodeStatsConfig.from_dict(['not', 'a', 'mapping'])
        with pytest.raises(ConfigError):
            CodeStatsConfig.from_dict({'unmatched_bucket': 'somewhere'})

    def test_from_dict_single_alias_string(self):
        """문자열 하나로 지정한 별칭 테스트"""
        config = CodeStatsConfig.from_dict({'aliases': {'a@x.com': 'b@x.com', 'c@x.com': None}})

        assert config.aliases == {'a@x.com': {'b@x.com'}, 'c@x.com': set()}

    def test_from_dict_invalid_alias_value(self):
        """매핑 형태의 별칭 값 테스트"""
        with pytest.raises(ConfigError, match="a@x.com"):
            CodeStatsConfig.from_dict({'aliases': {'a@x.com': {'b@x.com': 1}}})

    def test_single_alias_string_in_yaml(self, tmp_path):
        """YAML에서 단일 문자열 별칭 로드 테스트"""
        config_file = tmp_path / "stats.yml"
        config_file.write_text(
            "aliases:\n"
            "  alice@work.com: alice@home.com\n",
            encoding='utf-8',
        )

        config = CodeStatsConfig.from_file(str(config_file))

        assert config.aliases == {'alice@work.com': {'alice@home.com'}}

    def test_from_yaml_file(self, tmp_path):
        """YAML 설정 파일 로드 테스트"""
        config_file = tmp_path / "stats.yml"
        config_file.write_text(
            "extensions:\n"
            "  tf: Terraform\n"
            "aliases:\n"
            "  alice@work.com:\n"
            "    - alice@home.com\n"
            "unmatched_bucket: other\n",
            encoding='utf-8',
        )

        config = CodeStatsConfig.from_file(str(config_file))

        assert config.extensions['tf'] == 'Terraform'
        assert config.extensions['py'] == 'Python'
        assert config.aliases == {'alice@work.com': {'alice@home.com'}}
        assert config.unmatched_bucket == CodeBucket.OTHER
        assert config.production_directories

    def test_from_json_file(self, tmp_path):
        """JSON 설정 파일 로드 테스트"""
        config_file = tmp_path / "stats.json"
        config_file.write_text(
            json.dumps({'production_directories': ['pkg'], 'exclude_users': ['bot@x.com']}),
            encoding='utf-8',
        )

        config = CodeStatsConfig.from_file(str(config_file))

        assert config.production_directories == ['pkg']
        assert config.exclude_users == ['bot@x.com']
        assert config.unmatched_bucket == CodeBucket.PRODUCTION

    def test_empty_file_gives_defaults(self, tmp_path):
        """빈 설정 파일 테스트"""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("", encoding='utf-8')

        assert CodeStatsConfig.from_file(str(config_file)) == CodeStatsConfig.default()

    def test_missing_file(self, tmp_path):
        """존재하지 않는 설정 파일 테스트"""
        with pytest.raises(ConfigError, match="not found"):
            CodeStatsConfig.from_file(str(tmp_path / "missing.yml"))

    def test_malformed_yaml(self, tmp_path):
        """파싱할 수 없는 설정 파일 테스트"""
        config_file = tmp_path / "bad.yml"
        config_file.write_text("extensions: [unclosed\n", encoding='utf-8')

        with pytest.raises(ConfigError):
            CodeStatsConfig.from_file(str(config_file))

    def test_non_mapping_yaml(self, tmp_path):
        """매핑이 아닌 설정 파일 테스트"""
        config_file = tmp_path / "list.yml"
        config_file.write_text("- a\n- b\n", encoding='utf-8')

        with pytest.raises(CodeStatsError):
            CodeStatsConfig.from_file(str(config_file))

    def test_language_lookup(self):
        """설정에서 언어 판별 테이블 생성 테스트"""
        lookup = CodeStatsConfig.default().language_lookup()

        assert lookup.language_for("src/main.go") == "Go"
        assert lookup.language_for("Jenkinsfile") == "Jenkins"


class TestAppConfig:
    """AppConfig 테스트"""

    def test_defaults(self):
        """환경 변수가 없을 때 기본값 테스트"""
        app = AppConfig.from_env()

        assert app.log_level == 'WARNING'
        assert app.log_file is None
        assert app.max_workers is None

    def test_from_env(self, monkeypatch):
        """환경 변수 로드 테스트"""
        monkeypatch.setenv('CODE_STATS_LOG_LEVEL', 'DEBUG')
        monkeypatch.setenv('CODE_STATS_LOG_FILE', '/tmp/code_stats.log')
        monkeypatch.setenv('CODE_STATS_MAX_WORKERS', '4')

        app = AppConfig.from_env()

        assert app.log_level == 'DEBUG'
        assert app.log_file == '/tmp/code_stats.log'
        assert app.max_workers == 4

    def test_invalid_workers(self, monkeypatch):
        """잘못된 작업자 수 테스트"""
        monkeypatch.setenv('CODE_STATS_MAX_WORKERS', 'many')

        with pytest.raises(ConfigError):
            AppConfig.from_env()


class TestConfig:
    """통합 설정 테스트"""

    def test_default_config_is_valid(self):
        """기본 설정 유효성 테스트"""
        assert Config().validate() == []

    def test_validate_reports_problems(self, monkeypatch):
        """설정 오류 보고 테스트"""
        monkeypatch.setenv('CODE_STATS_MAX_WORKERS', '0')
        config = Config()
        config.stats = CodeStatsConfig(production_directories=['src', 'qa'], test_directories=['qa'])

        errors = config.validate()

        assert "No language mappings configured" in errors
        assert any('qa' in error for error in errors)
        assert "max_workers must be at least 1" in errors

    def test_config_file(self, tmp_path):
        """설정 파일 경로 지정 테스트"""
        config_file = tmp_path / "stats.yml"
        config_file.write_text("test_directories: [qa]\n", encoding='utf-8')

        config = Config(config_file=str(config_file))

        assert config.stats.test_directories == ['qa']

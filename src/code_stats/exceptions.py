"""
Exceptions Module

설정 로딩 및 CLI 경계에서 사용하는 예외 정의
"""


class CodeStatsError(Exception):
    """code_stats 기본 예외"""


class ConfigError(CodeStatsError):
    """설정 파일을 읽을 수 없거나 형식이 잘못된 경우"""

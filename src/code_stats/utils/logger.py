"""
Logging Utility Module

code_stats 전체에서 사용하는 로깅 설정 및 유틸리티
"""
import functools
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


# 로그 출력용 콘솔 (stdout은 리포트 출력에 사용)
console = Console(stderr=True)

LOGGER_NAME = "code_stats"

_PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


def setup_logger(
    log_level: str = "WARNING",
    log_file: Optional[str] = None,
    use_rich: bool = True
) -> logging.Logger:
    """
    code_stats 로거 설정

    Args:
        log_level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: 로그 파일 경로 (선택사항)
        use_rich: Rich 핸들러 사용 여부

    Returns:
        설정된 로거 객체
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else level)
    logger.handlers.clear()
    logger.propagate = False

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    handler.setLevel(level)
    logger.addHandler(handler)

    # 파일에는 모든 로그 저장
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    로거 인스턴스 가져오기

    Args:
        name: 하위 로거 이름 (모듈 __name__ 그대로 전달 가능)

    Returns:
        로거 객체
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def log_execution_time(func):
    """함수 실행 시간을 DEBUG 레벨로 로깅하는 데코레이터"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(
                f"{func.__name__} failed after {time.perf_counter() - start:.3f} seconds: {e}"
            )
            raise
        logger.debug(f"{func.__name__} completed in {time.perf_counter() - start:.3f} seconds")
        return result

    return wrapper


class LogContext:
    """작업 단위 시작/종료를 기록하는 컨텍스트 관리자"""

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None):
        self.operation = operation
        self.logger = logger or get_logger()
        self.start_time: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.info(f"Completed {self.operation} in {elapsed:.3f} seconds")
        else:
            self.logger.error(f"Failed {self.operation} after {elapsed:.3f} seconds: {exc_val}")
        return False

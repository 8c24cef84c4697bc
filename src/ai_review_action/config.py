"""
Configuration Management

Action inputs, inference endpoint settings and logging setup.
"""

import os
import logging
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigurationError


DEFAULT_API_URL = "https://1vts9b3q5f9dgg-8000.proxy.runpod.net/v1/chat/completions"
DEFAULT_MODEL = "Mistral-Small-3.1-24B-Instruct-2503"


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30


@dataclass
class InferenceConfig:
    """Chat completion endpoint settings"""
    api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    temperature: float = 0.2
    max_tokens: int = 700
    timeout_seconds: int = 120


@dataclass
class ReviewConfig:
    """리뷰 생성 설정"""
    exclude: str = ""  # comma-separated glob patterns
    max_workers: int = 1


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    review: ReviewConfig = field(default_factory=ReviewConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    event_path: Optional[str] = None
    event_name: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Load configuration from GitHub Action inputs.

        Actions expose an input ``foo`` as ``INPUT_FOO``; the bare name is
        accepted as a fallback so the tool can also run outside Actions.
        """
        env = os.environ if environ is None else environ

        def action_input(name: str, default: Optional[str] = None) -> Optional[str]:
            value = env.get(f"INPUT_{name}")
            if value is None or value == "":
                value = env.get(name)
            if value is None or value == "":
                return default
            return value

        return cls(
            github=GitHubConfig(
                token=action_input("GITHUB_TOKEN"),
                api_base_url=env.get("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=_as_int(action_input("GITHUB_TIMEOUT", "30"), "GITHUB_TIMEOUT"),
            ),
            inference=InferenceConfig(
                api_key=action_input("CUSTOM_API_KEY"),
                api_url=action_input("CUSTOM_API_URL", DEFAULT_API_URL),
                model=action_input("MODEL", DEFAULT_MODEL),
                temperature=_as_float(action_input("TEMPERATURE", "0.2"), "TEMPERATURE"),
                max_tokens=_as_int(action_input("MAX_TOKENS", "700"), "MAX_TOKENS"),
                timeout_seconds=_as_int(action_input("INFERENCE_TIMEOUT", "120"), "INFERENCE_TIMEOUT"),
            ),
            review=ReviewConfig(
                exclude=action_input("EXCLUDE", ""),
                max_workers=_as_int(action_input("MAX_WORKERS", "1"), "MAX_WORKERS"),
            ),
            logging=LoggingConfig(
                level=action_input("LOG_LEVEL", "INFO"),
                file_path=action_input("LOG_FILE"),
            ),
            event_path=env.get("GITHUB_EVENT_PATH"),
            event_name=env.get("GITHUB_EVENT_NAME"),
        )

    @classmethod
    def from_yaml(cls, config_path: str, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        YAML 파일에서 설정 로드

        Secrets left out of the file are taken from the environment.
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        env_config = cls.from_env(environ)
        try:
            config = cls(
                github=GitHubConfig(**config_data.get('github', {})),
                inference=InferenceConfig(**config_data.get('inference', {})),
                review=ReviewConfig(**config_data.get('review', {})),
                logging=LoggingConfig(**config_data.get('logging', {})),
                event_path=config_data.get('event_path', env_config.event_path),
                event_name=config_data.get('event_name', env_config.event_name),
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

        if not config.github.token:
            config.github.token = env_config.github.token
        if not config.inference.api_key:
            config.inference.api_key = env_config.inference.api_key
        return config

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        if not self.github.token:
            errors.append("GitHub token is required")

        if not self.inference.api_key:
            errors.append("Inference API key is required")

        if not self.inference.api_url:
            errors.append("Inference API URL is required")

        if not 0.0 <= self.inference.temperature <= 2.0:
            errors.append("Temperature must be between 0.0 and 2.0")

        if self.inference.max_tokens <= 0:
            errors.append("max_tokens must be positive")

        if self.review.max_workers <= 0:
            errors.append("max_workers must be positive")

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환 (토큰 제외)"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
            },
            'inference': {
                'api_url': self.inference.api_url,
                'model': self.inference.model,
                'temperature': self.inference.temperature,
                'max_tokens': self.inference.max_tokens,
                'timeout_seconds': self.inference.timeout_seconds,
            },
            'review': {
                'exclude': self.review.exclude,
                'max_workers': self.review.max_workers,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'event_path': self.event_path,
            'event_name': self.event_name,
        }


def setup_logging(config: LoggingConfig) -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
    )

    # 파일 로깅이 설정된 경우 로테이션 설정
    if config.file_path:
        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))
        logging.getLogger().addHandler(handler)


def _as_int(value: str, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def _as_float(value: str, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e

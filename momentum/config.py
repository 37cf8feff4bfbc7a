#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Momentum v1.0 - Configuration
Централизованная конфигурация из переменных окружения с валидацией

Версия: 1.0.0
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class PointsMode(Enum):
    """Источник истины для счётчика очков"""
    DERIVED = "derived"          # Вычисляется из коллекции
    INCREMENTAL = "incremental"  # Хранимый счётчик, +/- при переключении

@dataclass
class StorageConfig:
    """Конфигурация хранилища"""
    data_dir: Path

@dataclass
class GamificationConfig:
    """Конфигурация геймификации"""
    points_mode: PointsMode = PointsMode.DERIVED
    points_per_task: int = 10
    points_per_level: int = 100

class MomentumConfig:
    """Главный класс конфигурации"""

    def __init__(self, ensure_directories: bool = True):
        self._errors = []
        self._load_config()
        self._validate_config()
        if ensure_directories:
            self._ensure_directories()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""
        self.environment = self._get_enum('ENVIRONMENT', Environment, 'development')

        # Директории
        self.data_dir = Path(os.getenv('MOMENTUM_DATA_DIR', 'data'))
        self.log_dir = Path(os.getenv('MOMENTUM_LOG_DIR', 'logs'))

        self.storage = StorageConfig(data_dir=self.data_dir)

        self.gamification = GamificationConfig(
            points_mode=self._get_enum('MOMENTUM_POINTS_MODE', PointsMode, 'derived'),
            points_per_task=self._get_int('MOMENTUM_POINTS_PER_TASK', 10),
            points_per_level=self._get_int('MOMENTUM_POINTS_PER_LEVEL', 100)
        )

        # Временная зона для "сегодня" и стрика
        self.timezone_name = os.getenv('MOMENTUM_TIMEZONE', 'UTC')

        # Логирование
        self.log_level = self._get_enum('LOG_LEVEL', LogLevel, 'INFO')
        self.log_to_file = os.getenv('LOG_TO_FILE', 'false').lower() == 'true'
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _get_enum(self, key: str, enum_class: type, default: str):
        value = os.getenv(key, default)
        try:
            return enum_class(value)
        except ValueError:
            valid = [e.value for e in enum_class]
            self._errors.append(f"{key}={value!r} is not one of {valid}")
            return enum_class(default)

    def _get_int(self, key: str, default: int) -> int:
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            self._errors.append(f"{key}={value!r} is not an integer")
            return default

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = list(self._errors)

        if self.gamification.points_per_task <= 0:
            errors.append("MOMENTUM_POINTS_PER_TASK must be positive")

        if self.gamification.points_per_level <= 0:
            errors.append("MOMENTUM_POINTS_PER_LEVEL must be positive")

        try:
            self.timezone = pytz.timezone(self.timezone_name)
        except pytz.UnknownTimeZoneError:
            errors.append(f"MOMENTUM_TIMEZONE={self.timezone_name!r} is not a known time zone")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"• {error}" for error in errors))

    def _ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.data_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stderr
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"momentum_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'data_dir': str(self.data_dir),
            'timezone': self.timezone_name,
            'points_mode': self.gamification.points_mode.value,
            'points_per_task': self.gamification.points_per_task,
            'points_per_level': self.gamification.points_per_level,
            'log_level': self.log_level.value,
            'log_to_file': self.log_to_file
        }

_config: Optional[MomentumConfig] = None

def load_config(ensure_directories: bool = True) -> MomentumConfig:
    """Новый экземпляр конфигурации из текущего окружения"""
    return MomentumConfig(ensure_directories=ensure_directories)

def get_config() -> MomentumConfig:
    """Глобальный экземпляр конфигурации"""
    global _config
    if _config is None:
        _config = load_config()
    return _config

__all__ = [
    'MomentumConfig',
    'Environment',
    'LogLevel',
    'PointsMode',
    'StorageConfig',
    'GamificationConfig',
    'load_config',
    'get_config'
]

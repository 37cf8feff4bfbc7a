#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Momentum v1.0 - Key-Value Storage
Хранилище состояния: по одному JSON-файлу на ключ, атомарная запись

Версия: 1.0.0
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Ключи хранилища
REMINDERS_KEY = "momentum-reminders"
POINTS_KEY = "momentum-points"
DARK_MODE_KEY = "momentum-dark-mode"

# ===== EXCEPTIONS =====

class StorageError(Exception):
    """Базовое исключение для ошибок хранилища"""
    pass

class StorageCorruptionError(StorageError):
    """Ошибка повреждения данных"""
    pass

# ===== STORAGE PORT =====

class StoragePort(ABC):
    """Порт хранилища: чтение всего при старте, запись при каждом изменении"""

    @abstractmethod
    def read(self, key: str) -> Optional[Any]:
        """Декодированное значение или None, если ключа нет.

        Повреждённое значение -> StorageCorruptionError.
        """

    @abstractmethod
    def write(self, key: str, value: Any) -> None:
        """Записать значение (JSON-совместимое)"""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Удалить ключ; отсутствующий ключ не ошибка"""

class MemoryStorage(StoragePort):
    """Хранилище в памяти (для тестов)"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        # Значения хранятся сериализованными, как в localStorage
        self.items: Dict[str, str] = dict(initial or {})
        self.write_count = 0

    def read(self, key: str) -> Optional[Any]:
        raw = self.items.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageCorruptionError(f"Value under {key!r} is not valid JSON: {e}")

    def write(self, key: str, value: Any) -> None:
        self.items[key] = json.dumps(value, ensure_ascii=False)
        self.write_count += 1

    def delete(self, key: str) -> None:
        self.items.pop(key, None)

class JsonFileStorage(StoragePort):
    """Файловое хранилище: <data_dir>/<key>.json"""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def read(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"❌ Файл {path} повреждён: {e}")
            self._quarantine(path)
            raise StorageCorruptionError(f"Value under {key!r} is corrupted: {e}")
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}")

    def write(self, key: str, value: Any) -> None:
        path = self._path(key)
        # Атомарное сохранение через временный файл
        temp_file = path.with_suffix(".tmp")

        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            temp_file.replace(path)
            logger.debug(f"💾 Сохранено: {path}")
        except (OSError, TypeError, ValueError) as e:
            if temp_file.exists():
                temp_file.unlink()
            raise StorageError(f"Failed to write {path}: {e}")

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}")

    def _quarantine(self, path: Path) -> None:
        """Переместить повреждённый файл в сторону, чтобы начать с чистого значения"""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        target = path.with_name(f"{path.stem}.corrupted-{timestamp}.json")
        try:
            path.replace(target)
            logger.warning(f"🔄 Повреждённый файл перемещён в {target}")
        except OSError as e:
            logger.error(f"❌ Не удалось переместить повреждённый файл {path}: {e}")

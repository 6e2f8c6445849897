"""Генерация тестового набора случайных файлов"""

import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

LIST_FILENAME = "test-files.txt"

_SIZE_UNITS = {'': 1, 'K': 1024, 'M': 1024 ** 2, 'G': 1024 ** 3}


def parse_size(text: str) -> int:
    """'10M' -> 10485760, '50K' -> 51200, '123' -> 123"""
    text = str(text).strip().upper()
    unit = text[-1] if text and text[-1] in _SIZE_UNITS else ''
    number = text[:-1] if unit else text
    try:
        value = int(number)
    except ValueError:
        raise ValueError(f"Invalid size: {text!r}") from None
    if value < 0:
        raise ValueError(f"Invalid size: {text!r}")
    return value * _SIZE_UNITS[unit]


def make_random_files(target_dir: Path, number_of_files: int = 100,
                      file_size: int = 10 * 1024 * 1024,
                      chunk_size: int = 4 * 1024 * 1024) -> Path:
    """
    Создать number_of_files файлов со случайным содержимым и
    отсортированный список путей к ним (test-files.txt).
    Возвращает путь к списку.
    """
    target_dir = Path(target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Creating %d random files with size %d bytes each...",
                number_of_files, file_size)

    paths: List[Path] = []
    for index in range(number_of_files):
        path = target_dir / f"{index:020d}.bin"
        with open(path, 'wb') as f:
            remaining = file_size
            while remaining > 0:
                n = min(chunk_size, remaining)
                f.write(os.urandom(n))
                remaining -= n
        paths.append(path)

    list_file = target_dir / LIST_FILENAME
    list_file.write_text("".join(f"{p}\n" for p in sorted(paths)), encoding='utf-8')
    return list_file


def cleanup(target_dir: Path):
    """Удалить сгенерированные файлы и список"""
    target_dir = Path(target_dir)
    for path in target_dir.glob("*.bin"):
        path.unlink()
    list_file = target_dir / LIST_FILENAME
    if list_file.exists():
        list_file.unlink()

"""Распределение файлов между воркерами"""

import random
from typing import List, Optional

from .config import SplitPolicy


def partition_workload(num_indices: int, num_workers: int, policy,
                       randomize: bool = False,
                       rng: Optional[random.Random] = None) -> List[List[int]]:
    """
    Построить план для каждого воркера.

    separate - непересекающиеся непрерывные куски, остаток уходит последнему
    overlap  - каждый воркер получает свою случайную перестановку всех индексов
    same     - все воркеры получают один и тот же список

    randomize перемешивает общий список до разбиения.
    """
    if num_workers < 1:
        raise ValueError(f"num_workers must be at least 1, got {num_workers}")
    if num_indices < 0:
        raise ValueError(f"num_indices must be non-negative, got {num_indices}")
    policy = SplitPolicy(policy)
    rng = rng or random.Random()

    indices = list(range(num_indices))
    if randomize:
        rng.shuffle(indices)

    if policy is SplitPolicy.SEPARATE:
        return _split_separate(indices, num_workers)

    if policy is SplitPolicy.OVERLAP:
        plans = []
        for _ in range(num_workers):
            plan = list(indices)
            rng.shuffle(plan)
            plans.append(plan)
        return plans

    return [list(indices) for _ in range(num_workers)]


def _split_separate(indices: List[int], num_workers: int) -> List[List[int]]:
    slice_size = len(indices) // num_workers
    plans = []
    for i in range(num_workers):
        start = slice_size * i
        end = slice_size * (i + 1) if i < num_workers - 1 else len(indices)
        plans.append(indices[start:end])
    return plans

"""
Rank generation: seeded permutations of ``0..n-1``.

Every index draws one uniform value and gets a real sort key.  In full
permutation mode the keys are i.i.d. over ``[0, n)``; in windowed mode
the key is the index plus a jitter of at most the window width, so the
element only moves locally.  Sorting the keys (ties by index) yields the
permutation: position ``p`` holds the original index ranked ``p``-th.
"""
import random
from typing import List, Sequence

import numpy as np


def rank(n: int,
         rng: random.Random,
         seed: int,
         permute: bool = False,
         width: float = 0.0,
         absolute: bool = False) -> List[int]:
    """Returns a permutation of ``range(n)``; reseeds ``rng`` from ``seed`` first."""
    rng.seed(seed)
    if permute:
        keys = [rng.random() * n for _ in range(n)]
    elif absolute:
        keys = [i + rng.random() * width for i in range(n)]
    else:
        keys = [i + rng.random() * width * n for i in range(n)]
    # Stable sort keeps ascending index order among equal keys
    order = np.argsort(np.asarray(keys, dtype=np.float64), kind="stable")
    return [int(i) for i in order]


def expected_displacement(perm: Sequence[int]) -> float:
    """Mean distance between each rank and the original index placed there."""
    if len(perm) == 0:
        return 0.0
    arr = np.asarray(perm, dtype=np.int64)
    return float(np.mean(np.abs(arr - np.arange(len(arr)))))

import random
from typing import List


def flip(max_var: int, probability: float, rng: random.Random, seed: int) -> List[bool]:
    """
    Decides independently per variable whether its literals get negated.
    The extremes are deterministic and draw nothing from ``rng``.
    """
    rng.seed(seed)
    if probability <= 0.0:
        return [False] * max_var
    if probability >= 1.0:
        return [True] * max_var
    return [rng.random() <= probability for _ in range(max_var)]

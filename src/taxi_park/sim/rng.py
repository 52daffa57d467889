# sim/rng.py
from zlib import crc32

import numpy as np


def _tag(s: str) -> int:
    return crc32(s.encode("utf-8")) & 0xFFFFFFFF


class RNGRegistry:
    """
    Seeded numpy generators addressed by name and index.

    Every call derives a fresh generator from [seed, dataset, name, index],
    so the draws for one key never depend on which keys were used before.
    """

    def __init__(self, seed: int, *, dataset: str = "park"):
        self.seed = seed & 0xFFFFFFFF
        self.dataset_tag = _tag(dataset)

    def substream(self, name: str, index: int = 0) -> np.random.Generator:
        ss = np.random.SeedSequence(
            entropy=[self.seed, self.dataset_tag, _tag(name), index & 0xFFFFFFFF]
        )
        return np.random.Generator(np.random.PCG64(ss))

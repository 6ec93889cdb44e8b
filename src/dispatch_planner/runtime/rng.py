# dispatch_planner/runtime/rng.py
from __future__ import annotations

from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _tag(part: object) -> int:
    if isinstance(part, (int, np.integer)) and not isinstance(part, bool):
        return _u32(int(part))
    return _u32(crc32(str(part).encode("utf-8")))


class RNGRegistry:
    """
    Deterministic numpy Generators keyed by (seed, account, name, *parts).
    The same key always yields the same draws, whatever order keys are requested in.
    """

    def __init__(self, master_seed: int, *, account: str = ""):
        self.master_seed = _u32(master_seed)
        self.account_tag = _tag(account)

    def substream(self, name: str, *parts: object) -> np.random.Generator:
        ss = np.random.SeedSequence(
            entropy=[self.master_seed, self.account_tag, _tag(name), *(_tag(p) for p in parts)]
        )
        return np.random.Generator(np.random.PCG64(ss))

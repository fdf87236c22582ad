# sim/rng.py
from __future__ import annotations

from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _tag(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


class RNGRegistry:
    """
    Deterministic registry of numpy.random.Generator streams, one per name.
    Entropy path: [master_seed, scenario, stream name].
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0):
        self.master_seed = _u32(master_seed)
        self.scenario_tag = _tag(str(scenario))
        self._streams: dict[str, np.random.Generator] = {}

    def fresh(self, name: str) -> np.random.Generator:
        """New generator positioned at the start of the `name` stream."""
        ss = np.random.SeedSequence(entropy=[self.master_seed, self.scenario_tag, _tag(name)])
        return np.random.Generator(np.random.PCG64(ss))

    def stream(self, name: str) -> np.random.Generator:
        """Shared generator for `name`, created on first use; creation order does not matter."""
        if name not in self._streams:
            self._streams[name] = self.fresh(name)
        return self._streams[name]

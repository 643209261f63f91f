"""Largest uniform glyph height that still packs a fixed surface.

The packer is used as a yes/no oracle. Bisection is only correct while
"fits at height H" implies "fits at every height below H", which holds when
padding and spacing are constant in texels and the rectangle count does not
change between probes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .errors import InsufficientSpace
from .models import Rectangle, Surface
from .packer import Packer

logger = logging.getLogger(__name__)

BatchBuilder = Callable[[int], List[Rectangle]]


@dataclass
class CapacityResult:
    height: int
    rectangles: List[Rectangle]
    probes: int


class _Oracle:
    def __init__(self, build_batch: BatchBuilder, packer: Packer) -> None:
        self.build_batch = build_batch
        self.packer = packer
        self.probes = 0
        self.best: Optional[List[Rectangle]] = None

    def __call__(self, height: int) -> bool:
        self.probes += 1
        batch = self.build_batch(height)
        ok = self.packer.pack(batch)
        logger.debug("probe %d: height %d -> %s", self.probes, height, "fits" if ok else "no fit")
        if ok:
            self.best = batch
        return ok


def find_max_height(
    build_batch: BatchBuilder,
    surface: Surface,
    initial_height: int,
    *,
    packer: Optional[Packer] = None,
) -> CapacityResult:
    """Search the largest height whose batch packs ``surface``.

    Doubles from ``initial_height`` while packing succeeds, with the candidate
    capped at ``surface.height + 1``, then bisects between the last success
    and the first failure. The returned rectangles are the batch packed at
    the final height.

    Raises:
        InsufficientSpace: If not even a height of 1 packs.
        ValueError: If ``initial_height`` is not positive, or ``packer`` was
            built for another surface.
    """
    if initial_height <= 0:
        raise ValueError(f"initial height must be positive, got {initial_height}")
    if packer is None:
        packer = Packer(surface)
    elif packer.surface != surface:
        raise ValueError("packer surface does not match the searched surface")
    oracle = _Oracle(build_batch, packer)

    cap = surface.height + 1
    lo = 0
    best: Optional[List[Rectangle]] = None
    candidate = min(initial_height, cap)
    while True:
        if candidate >= cap:
            hi = cap
            break
        if not oracle(candidate):
            hi = candidate
            break
        lo, best = candidate, oracle.best
        candidate = min(candidate * 2, cap)

    while hi - lo > 1:
        mid = (lo + hi) // 2
        if oracle(mid):
            lo, best = mid, oracle.best
        else:
            hi = mid

    if lo == 0 or best is None:
        raise InsufficientSpace(
            "no glyph height fits a {}x{} surface with spacing {}".format(
                surface.width, surface.height, surface.spacing
            )
        )
    if not all(rect.placed for rect in best):
        # build_batch handed out shared rectangles that a later probe reset
        oracle(lo)
        best = oracle.best
    logger.info("largest fitting height is %d (%d probes)", lo, oracle.probes)
    return CapacityResult(height=lo, rectangles=best, probes=oracle.probes)

"""
Frame Scheduler - Washes output frame slots across a fixed pool of threads

Slots are split up front into contiguous ranges, one per worker. Each worker
writes only into its own slots of a pre-sized result list, so workers never
share a cursor and never need a lock. Output order depends only on slot
numbers, never on which thread finishes first.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .color import LabColor
from .parser import Frame
from .remap import PaletteRemapper
from ..errors import InvalidArgument

logger = logging.getLogger(__name__)


def partition(frame_count: int, worker_count: int) -> List[range]:
    """
    Split [0, frame_count) into contiguous ranges of near-equal size.

    Sizes differ by at most one; the later ranges are the smaller ones.
    There are never more ranges than slots, and none is empty.
    """
    if worker_count < 1:
        raise InvalidArgument("Thread count must be at least 1")
    if frame_count <= 0:
        return []

    workers = min(worker_count, frame_count)
    base, extra = divmod(frame_count, workers)

    ranges = []
    start = 0
    for w in range(workers):
        size = base + (1 if w < extra else 0)
        ranges.append(range(start, start + size))
        start += size

    return ranges


class FrameScheduler:
    """Runs a PaletteRemapper over every output slot in parallel"""

    def __init__(self, worker_count: int, remapper: Optional[PaletteRemapper] = None):
        if worker_count < 1:
            raise InvalidArgument("Thread count must be at least 1")
        self.worker_count = worker_count
        self.remapper = remapper or PaletteRemapper()

    def run(
        self,
        source_frames: Sequence[Frame],
        overlays: Sequence[LabColor]
    ) -> List[Frame]:
        """
        Produce one output frame per overlay color.

        Slot i uses source frame i mod len(source_frames) and overlay i.
        Blocks until every worker is done; an exception in any worker is
        re-raised here and no partial result is returned.
        """
        if not source_frames:
            raise InvalidArgument("No source frames to process")

        results: List[Optional[Frame]] = [None] * len(overlays)
        ranges = partition(len(overlays), self.worker_count)
        if not ranges:
            return []

        logger.debug(
            "washing %d slot(s) from %d source frame(s) on %d worker(s)",
            len(overlays), len(source_frames), len(ranges)
        )

        with ThreadPoolExecutor(max_workers=len(ranges)) as executor:
            futures = [
                executor.submit(self._process, slots, source_frames, overlays, results)
                for slots in ranges
            ]
            for future in futures:
                future.result()

        return results

    def _process(
        self,
        slots: range,
        source_frames: Sequence[Frame],
        overlays: Sequence[LabColor],
        results: List[Optional[Frame]]
    ) -> None:
        for i in slots:
            source = source_frames[i % len(source_frames)]
            results[i] = self.remapper.remap(source, overlays[i])

# Pointillist - Sequence Assembler
"""
Data-parallel transform of whole animations.

Frames are independent, so the sequence assembler fans them out over a
thread pool (the numpy kernels release the GIL for most of the work) and
collects the results in submission order. The transform is all-or-nothing:
if any frame fails, pending work is cancelled and the error propagates.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from .config import PointillistConfig
from .frame import Frame
from .raster import Circle, rasterize
from .transform import FrameTransformer

logger = logging.getLogger(__name__)


@dataclass
class SequenceMetrics:
    """Counters of the last sequence transform.

    :param frames_submitted: Number of frames submitted for processing
    :param frames_completed: Number of frames that completed processing
    :param blocks: Blocks partitioned over all completed frames
    :param circles_drawn: Circles with a radius above 0 over all completed frames
    :param start_time: Start timestamp (perf_counter)
    :param end_time: End timestamp (perf_counter)
    """
    frames_submitted: int = 0
    frames_completed: int = 0
    blocks: int = 0
    circles_drawn: int = 0
    start_time: float = 0.0
    end_time: float = 0.0

    @property
    def total_time_s(self) -> float:
        return self.end_time - self.start_time

    @property
    def fps(self) -> float:
        """Completed frames per second of wall time."""
        if self.total_time_s <= 0:
            return 0.0
        return self.frames_completed / self.total_time_s

    @property
    def circles_per_frame(self) -> float:
        if not self.frames_completed:
            return 0.0
        return self.circles_drawn / self.frames_completed

    @property
    def coverage(self) -> float:
        """Share of blocks that got a visible circle, 0 when nothing ran."""
        if not self.blocks:
            return 0.0
        return self.circles_drawn / self.blocks

    def record(self, circles: Sequence[Circle]) -> None:
        """Count one completed frame and its planned circles."""
        self.frames_completed += 1
        self.blocks += len(circles)
        self.circles_drawn += sum(1 for c in circles if c.radius > 0)

    def summary(self) -> str:
        return "\n".join([
            "=== Pointillism Metrics ===",
            f"Frames: {self.frames_completed} / {self.frames_submitted}",
            f"Circles: {self.circles_drawn} in {self.blocks} blocks "
            f"({self.circles_per_frame:.1f} per frame, {self.coverage:.0%} coverage)",
            f"Time: {self.total_time_s:.3f}s ({self.fps:.1f} FPS)",
        ])


class SequenceAssembler:
    """Transforms every frame of an animation with one shared configuration.

    Example::

        with SequenceAssembler(PointillistConfig(block_size=6), num_workers=4) as assembler:
            out_frames = assembler.process_all(frames)

    Without ``with``, each :meth:`process_all` call uses a short-lived pool.

    :param config: Transform parameters, defaults if None
    :param num_workers: Number of parallel workers (auto-detect if None)
    """

    def __init__(self, config: PointillistConfig | None = None, num_workers: int | None = None):
        self._transformer = FrameTransformer(config)
        self._num_workers = num_workers or os.cpu_count() or 4
        self._executor: ThreadPoolExecutor | None = None
        self._metrics = SequenceMetrics()

    @property
    def config(self) -> PointillistConfig:
        return self._transformer.config

    def _process_one(self, frame: Frame) -> tuple[Frame, list[Circle]]:
        """Transform one frame and stamp the output delay."""
        circles = self._transformer.plan(frame.pixels)
        height, width, channels = frame.pixels.shape
        pixels = rasterize(width, height, circles, self.config.background, channels)
        return frame.with_pixels(pixels, delay=self.config.output_delay), circles

    def process_all(self, frames: Sequence[Frame]) -> list[Frame]:
        """Transform all frames in parallel, preserving order.

        :param frames: Source frames
        :returns: Transformed frames, same count and order, each carrying
            the configured output delay
        :raises PointillistError: The error of the first failing frame; no
            partial result is returned
        """
        if self._executor is None:
            with self:
                return self.process_all(frames)

        self._metrics = SequenceMetrics(frames_submitted=len(frames))
        self._metrics.start_time = time.perf_counter()

        futures: list[Future] = [self._executor.submit(self._process_one, f) for f in frames]

        results = []
        try:
            for index, future in enumerate(futures):
                try:
                    frame, circles = future.result()
                except Exception:
                    logger.error(f"Frame {index} of {len(frames)} failed, aborting sequence")
                    raise
                results.append(frame)
                self._metrics.record(circles)
        except BaseException:
            for future in futures:
                future.cancel()
            raise
        finally:
            self._metrics.end_time = time.perf_counter()

        logger.info(
            f"Transformed {len(results)} frames ({self._metrics.circles_drawn} circles) in {self._metrics.total_time_s:.3f}s "
            f"({self._metrics.fps:.1f} FPS, {self._num_workers} workers)"
        )
        return results

    def get_metrics(self) -> SequenceMetrics:
        """Get metrics of the last :meth:`process_all` call."""
        return self._metrics

    def __enter__(self) -> 'SequenceAssembler':
        self._executor = ThreadPoolExecutor(
            max_workers=self._num_workers,
            thread_name_prefix='pointillist',
        )
        return self

    def __exit__(self, *args) -> None:
        if self._executor:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None


def pointillize(
    frames: Sequence[Frame],
    config: PointillistConfig | None = None,
    num_workers: int | None = None,
) -> list[Frame]:
    """Transform a whole animation.

    :param frames: Source frames in display order
    :param config: Transform parameters, defaults if None
    :param num_workers: Number of parallel workers (auto-detect if None)
    :returns: Transformed frames in the same order
    """
    return SequenceAssembler(config, num_workers=num_workers).process_all(frames)


__all__ = ['SequenceAssembler', 'SequenceMetrics', 'pointillize']

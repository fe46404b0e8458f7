"""Brute force search for the smallest discriminating key pixel set.

For every key pixel amount K from ``minimum`` to ``maximum`` the driver walks
all K-combinations of the sprites' row-major pixel indices in ascending
order. Each combination becomes a trial matcher which must map every sprite
back to its own index. The first passing combination wins, so the result
depends only on the sprites, their order and the bounds.

Trials are independent pure functions over an explicit combination. With
``max_workers > 0`` they run on a thread pool in ordered batches; results are
still inspected in enumeration order, so the pool changes the running time,
never the outcome.
"""
from __future__ import annotations

import contextvars
import itertools
import logging
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.combinations import CombinationEnumerator, count_combinations
from ..core.exceptions import InvalidArgumentError
from ..core.logging_config import CorrelationContext
from ..utils.geometry import coordinate_from_index, pixel_domain_bound
from ..utils.image_utils import Raster
from ..utils.validation import validate_rasters, validate_search_range
from .matcher import SpriteKeyPixelMatcher

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DiscoveryStats:
    """Bookkeeping of the last :meth:`DiscoveryDriver.run`."""
    trials: int = 0
    key_pixel_count: Optional[int] = None
    elapsed_seconds: float = 0.0
    run_id: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.key_pixel_count is not None


def run_trial(sprites: Sequence[Raster], combination: Tuple[int, ...],
              width: int) -> Optional[SpriteKeyPixelMatcher]:
    """Build a matcher on the combination's pixels and self-test it.

    Stops at the first sprite that is not matched back to its own index.

    Returns:
        The matcher if it tells every sprite apart, otherwise None.
    """
    key_pixels = [coordinate_from_index(index, width) for index in combination]
    matcher = SpriteKeyPixelMatcher.from_rasters(sprites, key_pixels)
    if matcher.matches_own_sprites(sprites):
        return matcher
    return None


class DiscoveryDriver:
    """Finds the smallest key pixel amount that uniquely identifies every sprite."""

    def __init__(self, sprites: Iterable, minimum: int, maximum: int,
                 max_workers: int = 0, batch_size: int = 256):
        """
        Args:
            sprites: The sprite collection to be told apart
            minimum: Smallest key pixel amount to try
            maximum: Largest key pixel amount to try
            max_workers: Worker threads for trials; 0 runs them inline
            batch_size: Trials submitted to the pool at a time
        """
        validate_search_range(minimum, maximum)
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 0:
            raise InvalidArgumentError(f"max_workers must be a non-negative integer, got {max_workers!r}.")
        if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
            raise InvalidArgumentError(f"batch_size must be a positive integer, got {batch_size!r}.")

        rasters, width, height, components = validate_rasters(sprites)
        self.sprites: Tuple[Raster, ...] = tuple(rasters)
        self.width = width
        self.height = height
        self.components = components
        self.minimum = minimum
        self.maximum = maximum
        self.max_workers = max_workers
        self.batch_size = batch_size
        self.stats = DiscoveryStats()

    @property
    def pixel_bound(self) -> int:
        return pixel_domain_bound(self.width, self.height)

    def run(self) -> Optional[SpriteKeyPixelMatcher]:
        """Search the key pixel amounts in ascending order.

        Returns:
            The first self-discriminating matcher found, or None if there is
            none within ``[minimum, maximum]`` key pixels.
        """
        self.stats = DiscoveryStats()
        started = time.perf_counter()

        with CorrelationContext() as run_id:
            self.stats.run_id = run_id
            logger.info(
                f"Searching key pixels for {len(self.sprites)} sprites of "
                f"{self.width}x{self.height}x{self.components}, "
                f"amounts {self.minimum}..{self.maximum}")

            executor: Optional[Executor] = None
            if self.max_workers > 0:
                executor = ThreadPoolExecutor(max_workers=self.max_workers,
                                              thread_name_prefix="KeyPixelTrial")
            try:
                matcher = self._search_all(executor)
            finally:
                if executor is not None:
                    executor.shutdown(wait=True, cancel_futures=True)

            self.stats.elapsed_seconds = time.perf_counter() - started
            if matcher is None:
                logger.warning(
                    f"No key pixel set of {self.minimum}..{self.maximum} pixels tells the "
                    f"sprites apart ({self.stats.trials} trials, {self.stats.elapsed_seconds:.2f}s)")
            else:
                self.stats.key_pixel_count = matcher.key_pixel_count
                logger.info(
                    f"Found {matcher.key_pixel_count} key pixels "
                    f"{[p.as_tuple() for p in matcher.key_pixels]} after {self.stats.trials} trials "
                    f"({self.stats.elapsed_seconds:.2f}s)")
            return matcher

    def _search_all(self, executor: Optional[Executor]) -> Optional[SpriteKeyPixelMatcher]:
        # no matcher can work with zero key pixels
        for amount in range(max(self.minimum, 1), self.maximum + 1):
            total = count_combinations(amount, self.pixel_bound)
            logger.info(f"Trying {amount} key pixels ({total} combinations)")
            enumerator = CombinationEnumerator(amount, self.pixel_bound)
            if executor is None:
                matcher = self._search_serial(enumerator)
            else:
                matcher = self._search_parallel(enumerator, executor)
            if matcher is not None:
                return matcher
        return None

    def _search_serial(self, enumerator: CombinationEnumerator) -> Optional[SpriteKeyPixelMatcher]:
        for combination in enumerator:
            self.stats.trials += 1
            matcher = run_trial(self.sprites, combination, self.width)
            if matcher is not None:
                return matcher
        return None

    def _search_parallel(self, enumerator: CombinationEnumerator,
                         executor: Executor) -> Optional[SpriteKeyPixelMatcher]:
        combinations = iter(enumerator)
        while True:
            batch = list(itertools.islice(combinations, self.batch_size))
            if not batch:
                return None
            logger.debug(f"Submitting {len(batch)} trials starting at {batch[0]}")
            futures: List[Future] = [
                executor.submit(contextvars.copy_context().run,
                                run_trial, self.sprites, combination, self.width)
                for combination in batch
            ]
            try:
                for future in futures:
                    matcher = future.result()
                    self.stats.trials += 1
                    if matcher is not None:
                        return matcher
            finally:
                for future in futures:
                    future.cancel()


def find_key_pixels(sprites: Iterable, minimum: int, maximum: int,
                    max_workers: int = 0, batch_size: int = 256) -> Optional[SpriteKeyPixelMatcher]:
    """Build a matcher with as few key pixels as possible, or None.

    See :class:`DiscoveryDriver`. The search is exhaustive, so its cost grows
    with the sprite area and with ``maximum``; callers choose feasible bounds.
    """
    driver = DiscoveryDriver(sprites, minimum, maximum,
                             max_workers=max_workers, batch_size=batch_size)
    return driver.run()

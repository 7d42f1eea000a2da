"""
Batch Scheduler - bounded-concurrency windows with a delay between them
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

ItemDoneCallback = Callable[[int, int, T, R], None]


async def run_in_batches(
    items: Sequence[T],
    concurrency: int,
    delay_ms: float,
    task: Callable[[T], Awaitable[R]],
    on_item_done: Optional[ItemDoneCallback] = None,
    cancel_event: Optional[asyncio.Event] = None
) -> List[R]:
    """
    Process items in consecutive windows of ``concurrency``

    Every task in a window runs concurrently and the whole window is awaited
    before the next one starts. The scheduler sleeps ``delay_ms`` between
    windows, never after the last one.

    ``on_item_done(completed, total, item, result)`` fires as each task
    settles, so callbacks arrive in completion order. The returned list is in
    input order.

    ``task`` must return a value for failures too; exceptions it raises are
    not caught here.

    If ``cancel_event`` is set when a window is about to start, the remaining
    windows are skipped and the results of the finished windows are returned.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")

    total = len(items)
    results: List[R] = []
    completed = 0

    async def run_one(item: T) -> R:
        nonlocal completed
        result = await task(item)
        # No await between the increment and the callback
        completed += 1
        if on_item_done is not None:
            on_item_done(completed, total, item, result)
        return result

    for start in range(0, total, concurrency):
        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Crawl cancelled after {len(results)}/{total} items")
            break

        window = items[start:start + concurrency]
        window_results = await asyncio.gather(*(run_one(item) for item in window))
        results.extend(window_results)

        if start + concurrency < total and delay_ms > 0:
            logger.debug(f"Window done ({len(results)}/{total}), waiting {delay_ms}ms")
            await asyncio.sleep(delay_ms / 1000)

    return results

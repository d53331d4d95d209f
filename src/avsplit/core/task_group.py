"""Run a handful of independent blocking operations in parallel.

``TaskGroup`` is a thin layer over ``ThreadPoolExecutor``: tasks are started
together, the first error in completion order is re-raised, and the group
never returns before every task has finished executing.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, Callable

logger = logging.getLogger(__name__)


class TaskGroup:
    """Collect named callables, then ``run()`` them all at once.

    Example:
        group = TaskGroup()
        group.add("audio", extract_audio, source, audio_out)
        group.add("video", extract_video, source, video_out)
        results = group.run()   # {"audio": ..., "video": ...}
    """

    def __init__(self):
        self._tasks: list[tuple[str, Callable[..., Any], tuple, dict]] = []

    def add(self, name: str, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> None:
        if any(existing == name for existing, *_ in self._tasks):
            raise ValueError(f"Duplicate task name: {name}")
        self._tasks.append((name, fn, args, kwargs))

    def __len__(self) -> int:
        return len(self._tasks)

    def run(self) -> dict[str, Any]:
        """Run all tasks; return results by name or raise the first error."""
        if not self._tasks:
            return {}

        results: dict[str, Any] = {}
        first_error: BaseException | None = None

        # Leaving the ``with`` block joins every worker, so stragglers are done
        # before the first error propagates.
        with ThreadPoolExecutor(max_workers=len(self._tasks), thread_name_prefix="avsplit") as pool:
            futures: dict[Future, str] = {
                pool.submit(fn, *args, **kwargs): name for name, fn, args, kwargs in self._tasks
            }
            for future in as_completed(futures):
                name = futures[future]
                exc = future.exception()
                if exc is None:
                    results[name] = future.result()
                    continue
                if first_error is None:
                    logger.error(f"Task '{name}' failed: {exc}")
                    first_error = exc
                else:
                    logger.warning(f"Task '{name}' also failed: {exc}")

        if first_error is not None:
            raise first_error
        return results

# core/stats.py

"""
Parallel stat aggregator for dashboard widgets.

Each tracked statistic owns its own {data, loading, error} state and
fetches independently on the running event loop. A failing fetch only
marks its own statistic as errored. Every issue bumps the statistic's
generation; a result is applied only if its generation is still the
latest, so a late response from a superseded fetch cannot overwrite a
newer one. There is no real cancellation of the underlying call.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Iterator, List, Mapping, Optional, Set, TypeVar

from core.errors import StatFetchError, extract_supabase_error
from core.logging_config import logger


T = TypeVar("T")
Fetcher = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class StatQueryState(Generic[T]):
    data: Optional[T] = None
    loading: bool = True
    error: Optional[StatFetchError] = None

    def to_dict(self) -> dict:
        return {
            "data": self.data,
            "loading": self.loading,
            "error": self.error.to_dict() if self.error else None,
        }


class TrackedStat(Generic[T]):
    """One statistic: its fetcher, current state and generation counter."""

    def __init__(self, name: str, fetcher: Fetcher) -> None:
        self.name = name
        self._fetcher = fetcher
        self._generation = 0
        self._state: StatQueryState[T] = StatQueryState()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def state(self) -> StatQueryState[T]:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def retry(self) -> "asyncio.Future[None]":
        """
        Re-issue this statistic's fetch only.

        The state flips to loading immediately (previous data is kept until
        the new result lands). Must be called with a running event loop.
        The returned future is shielded: cancelling it abandons the wait,
        not the fetch, so the statistic still settles.
        """
        loop = asyncio.get_running_loop()

        self._generation += 1
        generation = self._generation
        self._state = StatQueryState(data=self._state.data, loading=True, error=None)

        task = loop.create_task(self._run(generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return asyncio.shield(task)

    def invalidate(self) -> None:
        """Supersede any in-flight fetch without issuing a new one."""
        self._generation += 1

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug(
                f"Discarding stale result for {self.name} "
                f"(generation {generation}, current {self._generation})"
            )
            return False
        return True

    async def _run(self, generation: int) -> None:
        try:
            value = await self._fetcher()
        except asyncio.CancelledError as exc:
            # Task torn down (loop shutdown); settle as failed, then propagate.
            if self._is_current(generation):
                error = StatFetchError(self.name, f"Fetch for {self.name} was cancelled")
                error.__cause__ = exc
                self._state = StatQueryState(data=None, loading=False, error=error)
            raise
        except Exception as exc:
            if not self._is_current(generation):
                return
            error = StatFetchError(self.name, f"Failed to fetch {self.name}: {extract_supabase_error(exc)}")
            error.__cause__ = exc
            logger.error(f"Stat fetch failed for {self.name}: {exc}")
            self._state = StatQueryState(data=None, loading=False, error=error)
            return

        if self._is_current(generation):
            self._state = StatQueryState(data=value, loading=False, error=None)


class StatAggregator:
    """
    Fan-out of independent stat fetches.

    Usage:
        stats = StatAggregator({"total_villages": fetch_total, ...})
        await stats.refetch_all()
        stats.state("total_villages").data
    """

    def __init__(self, fetchers: Mapping[str, Fetcher]) -> None:
        self._stats: Dict[str, TrackedStat] = {
            name: TrackedStat(name, fetcher) for name, fetcher in fetchers.items()
        }

    def __getitem__(self, name: str) -> TrackedStat:
        return self._stats[name]

    def __contains__(self, name: str) -> bool:
        return name in self._stats

    def __iter__(self) -> Iterator[str]:
        return iter(self._stats)

    def __len__(self) -> int:
        return len(self._stats)

    @property
    def names(self) -> List[str]:
        return list(self._stats)

    @property
    def states(self) -> Dict[str, StatQueryState]:
        return {name: stat.state for name, stat in self._stats.items()}

    def state(self, name: str) -> StatQueryState:
        return self._stats[name].state

    def refetch_all(self) -> "asyncio.Future[List[None]]":
        """
        Reset every statistic to loading and issue all fetches concurrently.

        Returns a shielded future for the fetches issued by this call only;
        earlier stragglers are not awaited.
        """
        waiters = [stat.retry() for stat in self._stats.values()]
        return asyncio.shield(asyncio.gather(*waiters))

    def retry(self, name: str) -> "asyncio.Future[None]":
        return self._stats[name].retry()

    def close(self) -> None:
        """Drop every in-flight result; used when the owning session ends."""
        for stat in self._stats.values():
            stat.invalidate()

    def to_dict(self) -> Dict[str, dict]:
        return {name: state.to_dict() for name, state in self.states.items()}

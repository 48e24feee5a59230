import logging
from concurrent import futures
from typing import Callable, Dict, Optional, Sequence, TypeVar

from .errors import StageFailedError

LOG = logging.getLogger("mrindex.executor")

U = TypeVar("U")
R = TypeVar("R")


def pool_size(unit_count: int, max_workers: Optional[int] = None) -> int:
    """One thread per unit unless capped by max_workers."""
    size = max(unit_count, 1)
    if max_workers is not None:
        size = min(size, max_workers)
    return size


def run_units(
    stage: str,
    task: Callable[[U], R],
    units: Sequence[U],
    key: Callable[[U], str],
    max_workers: Optional[int] = None,
) -> Dict[str, R]:
    """Run ``task`` over every unit in parallel and return {unit key: result}.

    This is the stage barrier: it returns only after every submitted unit has
    finished. If any unit raised, a single StageFailedError carrying all
    failures is raised, chained from the first one in submission order.
    """
    if not units:
        LOG.info("[%s] no units to run", stage)
        return {}

    workers = pool_size(len(units), max_workers)
    LOG.info("[%s] starting %d units on %d threads", stage, len(units), workers)
    with futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix=stage) as pool:
        submitted = [(key(unit), pool.submit(task, unit)) for unit in units]
        futures.wait([fut for _, fut in submitted], return_when=futures.ALL_COMPLETED)

    results = {}
    failures = {}
    for unit_id, fut in submitted:
        exc = fut.exception()
        if exc is not None:
            LOG.error("[%s] unit %s failed: %s", stage, unit_id, exc, exc_info=exc)
            failures[unit_id] = exc
        else:
            results[unit_id] = fut.result()
            LOG.debug("[%s] unit %s complete", stage, unit_id)

    if failures:
        first = next(iter(failures.values()))
        raise StageFailedError(stage, failures, total=len(units)) from first
    LOG.info("[%s] all %d units complete", stage, len(units))
    return results

# src/wordtally/core/aggregator.py
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

from wordtally.errors import AggregationError
from wordtally.models import FrequencyTable, normalize


def count_partition(tokens: Sequence[str], offset: int = 0) -> Dict[str, List]:
    """
    Counts one slice of tokens into a worker-local map of
    normalized key -> [first casing seen, count].
    """
    partial: Dict[str, List] = {}
    for i, token in enumerate(tokens):
        if not isinstance(token, str):
            raise TypeError(
                f"Token at position {offset + i} is {type(token).__name__}, expected str"
            )
        if not token.strip():
            continue
        key = normalize(token)
        entry = partial.get(key)
        if entry is None:
            partial[key] = [token, 1]
        else:
            entry[1] += 1
    return partial


def split_partitions(size: int, parts: int) -> List[range]:
    """Splits [0, size) into at most `parts` contiguous, non-empty ranges."""
    if size <= 0:
        return []
    parts = max(1, min(parts, size))
    step, extra = divmod(size, parts)
    ranges = []
    start = 0
    for i in range(parts):
        end = start + step + (1 if i < extra else 0)
        ranges.append(range(start, end))
        start = end
    return ranges


class FrequencyAggregator:
    """
    Case-insensitive word counter. Each worker counts a disjoint slice into
    its own map; the maps are summed afterwards on the calling thread.
    """

    def __init__(self, max_workers: Optional[int] = None, logger: Optional[logging.Logger] = None):
        if max_workers is None:
            max_workers = os.cpu_count() or 1
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def aggregate(self, tokens: Sequence[str]) -> FrequencyTable:
        tokens = list(tokens)
        self.logger.info(
            f"Aggregating {len(tokens)} tokens with up to {self.max_workers} workers",
            extra={"operation": "aggregate"},
        )
        if not tokens:
            return FrequencyTable()

        partitions = split_partitions(len(tokens), self.max_workers)
        try:
            if len(partitions) == 1:
                partials = [count_partition(tokens)]
            else:
                partials = self._count_parallel(tokens, partitions)
        except Exception as e:
            self.logger.error(
                f"Error aggregating tokens: {e}",
                exc_info=True,
                extra={"operation": "aggregate"},
            )
            raise AggregationError(f"Failed to aggregate tokens: {e}") from e

        table = FrequencyTable.from_partials(partials)
        self.logger.debug(
            f"Aggregation completed: {len(table)} unique words, {table.total} total",
            extra={"operation": "aggregate"},
        )
        return table

    def _count_parallel(self, tokens: List[str], partitions: List[range]) -> List[Dict[str, List]]:
        with ThreadPoolExecutor(max_workers=len(partitions), thread_name_prefix="wordtally") as pool:
            futures = [
                pool.submit(count_partition, tokens[r.start:r.stop], r.start)
                for r in partitions
            ]
            try:
                # Results are collected in partition order so the merge is reproducible
                return [f.result() for f in futures]
            except Exception:
                for f in futures:
                    f.cancel()
                raise

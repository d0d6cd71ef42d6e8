"""
Run independent note batches (e.g. separate encounters) side by side.

Each batch gets its own pipeline, so batches share no mutable state.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from packages.shared.models import DedupConfig, DedupResult, load_config
from apps.worker.pipeline import DeduplicationPipeline

logger = logging.getLogger(__name__)


@dataclass
class BatchOutcome:
    index: int
    result: DedupResult | None = None
    error: str | None = None
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.error is None


def _run_one(index: int, notes: list[str], config: DedupConfig) -> BatchOutcome:
    t0 = time.monotonic()
    result = DeduplicationPipeline(config).run(notes)
    return BatchOutcome(index=index, result=result, duration_ms=int((time.monotonic() - t0) * 1000))


def deduplicate_batches(
    batches: list[list[str]],
    config: DedupConfig | dict | None = None,
    max_workers: int = 4,
    raise_on_error: bool = False,
) -> list[BatchOutcome]:
    """
    Deduplicate every batch; outcomes come back in batch order.
    A failing batch is reported in its outcome unless raise_on_error is set.
    """
    cfg = load_config(config)
    outcomes: dict[int, BatchOutcome] = {}
    workers = max(1, min(max_workers, len(batches) or 1))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_map = {executor.submit(_run_one, i, batch, cfg): i for i, batch in enumerate(batches)}
        for future in as_completed(future_map):
            i = future_map[future]
            try:
                outcomes[i] = future.result()
            except Exception as exc:
                logger.error(f"Batch {i} failed: {exc}")
                if raise_on_error:
                    raise
                outcomes[i] = BatchOutcome(index=i, error=str(exc))
            else:
                logger.info(f"Batch {i} completed in {outcomes[i].duration_ms}ms")

    return [outcomes[i] for i in range(len(batches))]

"""
Pipeline orchestrator: runs the six deduplication steps in sequence.
"""
from __future__ import annotations

import logging
import math
from typing import Any

from packages.shared.errors import InvalidInputError
from packages.shared.models import (
    AnalyzedNote,
    DecisionCode,
    DedupConfig,
    DedupMetadata,
    DedupResult,
    SkippedNote,
    Warning,
    load_config,
)
from apps.worker.lib.analysis_cache import AnalysisCache
from apps.worker.lib.similarity import SimilarityScorer
from apps.worker.lib.text_normalize import TextNormalizer
from apps.worker.steps.note_analyzer import NoteAnalyzer
from apps.worker.steps.step01_exact_dedup import remove_exact_duplicates
from apps.worker.steps.step02_analyze import analyze_notes
from apps.worker.steps.step03_near_dedup import collapse_near_duplicates
from apps.worker.steps.step04_sentence_dedup import deduplicate_sentences
from apps.worker.steps.step05_merge import merge_complementary_notes
from apps.worker.steps.step06_chronology import sort_by_chronology

logger = logging.getLogger(__name__)


def reduction_percent(original: int, final: int) -> int:
    if original <= 0:
        return 0
    # Half rounds up, not to even.
    return int(math.floor(100 * (original - final) / original + 0.5))


class DeduplicationPipeline:
    """
    Stateful only for the duration of run(); one instance may process many
    batches sequentially. The optional AnalysisCache belongs to the caller.
    """

    def __init__(
        self,
        config: DedupConfig | dict | None = None,
        cache: AnalysisCache | None = None,
        analysis_workers: int | None = None,
    ):
        self.config = load_config(config)
        self.normalizer = TextNormalizer(remove_boilerplate=self.config.remove_boilerplate)
        self.scorer = SimilarityScorer(self.config.similarity_method)
        self.analyzer = NoteAnalyzer(normalizer=self.normalizer, cache=cache)
        self.analysis_workers = analysis_workers

    def _validate(self, notes: Any) -> tuple[list[str], list[SkippedNote], list[Warning]]:
        if notes is None:
            return [], [], []
        if not isinstance(notes, (list, tuple)):
            raise InvalidInputError(None, notes)

        valid: list[str] = []
        skipped: list[SkippedNote] = []
        warnings: list[Warning] = []
        for idx, note in enumerate(notes):
            if isinstance(note, str):
                valid.append(note)
                continue
            if not self.config.skip_invalid:
                raise InvalidInputError(idx, note)
            reason = f"not a string (got {type(note).__name__})"
            skipped.append(SkippedNote(index=idx, reason=reason))
            warnings.append(Warning(
                code=DecisionCode.INPUT_SKIPPED,
                message=f"Input entry {idx} skipped: {reason}",
                note_index=idx,
            ))
        return valid, skipped, warnings

    def run(self, notes: list[str] | None) -> DedupResult:
        valid, skipped, warnings = self._validate(notes)
        original = len(notes) if notes else 0
        # Skipped entries were never deduplicated; the percentage covers valid notes only.
        considered = len(valid)

        if len(valid) <= 1:
            # Nothing to compare against: pass through untouched.
            final = len(valid)
            return DedupResult(
                deduplicated=list(valid),
                metadata=DedupMetadata(
                    original=original,
                    final=final,
                    reduction_percent=reduction_percent(considered, final),
                    skipped=skipped,
                ),
                warnings=warnings,
            )

        cfg = self.config
        logger.info(f"Dedup: processing {len(valid)} notes")

        # ── Step 1: Exact duplicates ──────────────────────────────────
        unique, step_warnings = remove_exact_duplicates(valid, self.normalizer)
        warnings.extend(step_warnings)
        exact_removed = len(valid) - len(unique)
        logger.info(f"Dedup: removed {exact_removed} exact duplicates")

        # ── Step 2: Analyze ───────────────────────────────────────────
        analyzed: list[AnalyzedNote] = analyze_notes(unique, self.analyzer, max_workers=self.analysis_workers)

        # ── Step 3: Near duplicates ───────────────────────────────────
        kept, step_warnings = collapse_near_duplicates(analyzed, cfg.similarity_threshold, self.scorer)
        warnings.extend(step_warnings)
        near_removed = len(analyzed) - len(kept)
        logger.info(f"Dedup: removed {near_removed} near-duplicates")

        # ── Step 4: Sentence-level dedup ──────────────────────────────
        condensed, step_warnings = deduplicate_sentences(kept, cfg.similarity_threshold, self.scorer, self.normalizer)
        warnings.extend(step_warnings)
        emptied_removed = len(kept) - len(condensed)
        if emptied_removed:
            logger.info(f"Dedup: removed {emptied_removed} notes emptied by sentence dedup")

        # ── Step 5: Complementary merge ───────────────────────────────
        final_notes = condensed
        merge_count = 0
        if cfg.merge_complementary:
            final_notes, merge_count, step_warnings = merge_complementary_notes(
                condensed, self.scorer, self.normalizer
            )
            warnings.extend(step_warnings)
            logger.info(f"Dedup: merged {merge_count} complementary note pairs")

        # ── Step 6: Chronology ────────────────────────────────────────
        if cfg.preserve_chronology:
            final_notes = sort_by_chronology(final_notes)

        final = len(final_notes)
        metadata = DedupMetadata(
            original=original,
            final=final,
            exact_duplicates_removed=exact_removed,
            near_duplicates_removed=near_removed,
            emptied_notes_removed=emptied_removed,
            merge_count=merge_count,
            reduction_percent=reduction_percent(considered, final),
            removed=exact_removed + near_removed + emptied_removed + merge_count,
            merged=merge_count,
            skipped=skipped,
        )
        logger.info(f"Dedup: {original} -> {final} notes ({metadata.reduction_percent}% reduction)")
        return DedupResult(
            deduplicated=[n.content for n in final_notes],
            metadata=metadata,
            warnings=warnings,
        )


def deduplicate_notes(
    notes: list[str] | None,
    config: DedupConfig | dict | None = None,
    cache: AnalysisCache | None = None,
) -> DedupResult:
    return DeduplicationPipeline(config, cache=cache).run(notes)

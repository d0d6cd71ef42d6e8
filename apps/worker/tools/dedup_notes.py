"""
CLI tool: deduplicate a JSON file of clinical notes.

Usage:
    python -m apps.worker.tools.dedup_notes --input notes.json --out result.json

The input is either a JSON list of note strings or {"batches": [[...], ...]}
for several independent encounters. Settings not given on the command line
fall back to NOTE_DEDUP_* environment variables, then to defaults.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from packages.shared.errors import NoteDedupError
from packages.shared.models import DedupConfig, DedupResult
from packages.shared.schema_validator import validate_result

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Collapse redundant clinical notes into a minimal chronological set.",
    )
    parser.add_argument("--input", required=True, help="JSON file with a list of notes or {'batches': [...]}")
    parser.add_argument("--out", help="Where to write the result JSON (default: stdout)")
    parser.add_argument("--threshold", type=float, default=None, help="Similarity threshold in [0, 1] (default: 0.85)")
    parser.add_argument("--similarity", choices=["jaccard", "hybrid"], default=None, help="Similarity method")
    parser.add_argument("--no-chronology", action="store_true", help="Keep survivor order instead of sorting")
    parser.add_argument("--no-merge", action="store_true", help="Skip complementary note merging")
    parser.add_argument("--keep-boilerplate", action="store_true", help="Do not strip header/signature boilerplate")
    parser.add_argument("--skip-invalid", action="store_true", help="Record non-string entries instead of failing")
    parser.add_argument("--workers", type=int, default=4, help="Parallel batches (default: 4)")
    parser.add_argument("--verbose", action="store_true", help="Log individual decisions")
    return parser


def _config_from_args(args: argparse.Namespace) -> DedupConfig:
    overrides: dict = {}
    if args.threshold is not None:
        overrides["similarity_threshold"] = args.threshold
    if args.similarity:
        overrides["similarity_method"] = args.similarity
    if args.no_chronology:
        overrides["preserve_chronology"] = False
    if args.no_merge:
        overrides["merge_complementary"] = False
    if args.keep_boilerplate:
        overrides["remove_boilerplate"] = False
    if args.skip_invalid:
        overrides["skip_invalid"] = True
    return DedupConfig.from_env(**overrides)


def _dump(result: DedupResult) -> dict:
    data, errors = validate_result(result)
    if errors:
        # A schema miss here is a bug in the engine, not in the input.
        raise RuntimeError("Result failed schema validation: " + "; ".join(errors[:5]))
    return data


def run(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    in_path = Path(args.input)
    if not in_path.exists():
        print(f"ERROR: input file not found: {in_path}", file=sys.stderr)
        return 2
    with open(in_path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as exc:
            print(f"ERROR: {in_path} is not valid JSON: {exc}", file=sys.stderr)
            return 2

    from apps.worker.batch import deduplicate_batches
    from apps.worker.pipeline import DeduplicationPipeline

    try:
        config = _config_from_args(args)
        if isinstance(payload, dict) and "batches" in payload:
            outcomes = deduplicate_batches(payload["batches"], config, max_workers=args.workers)
            output = {
                "batches": [
                    {
                        "index": o.index,
                        "durationMs": o.duration_ms,
                        "error": o.error,
                        "result": _dump(o.result) if o.result is not None else None,
                    }
                    for o in outcomes
                ]
            }
            failed = [o.index for o in outcomes if not o.success]
        else:
            output = _dump(DeduplicationPipeline(config).run(payload))
            failed = []
    except NoteDedupError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    text = json.dumps(output, indent=2, ensure_ascii=False)
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Wrote {out_path}")
    else:
        print(text)

    if failed:
        print(f"ERROR: batches failed: {failed}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()

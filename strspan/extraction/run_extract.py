"""CLI to run declarative extraction rules over a directory of JSON documents."""
from __future__ import annotations

import argparse
import json
import logging
from collections import Counter
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from tqdm import tqdm

from strspan import config
from strspan.extraction.rules import ExtractionRule, apply_rules, load_rules
from strspan.extraction.spans import validate_spans

LOGGER = logging.getLogger("extract")
DEFAULTS = config.ExtractionConfig()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract delimited spans from JSON documents.")
    parser.add_argument(
        "--input",
        type=Path,
        default=config.INPUT_DIR,
        help="Directory containing document JSON files.",
    )
    parser.add_argument("--rules", type=Path, required=True, help="JSON file holding the extraction rules.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.OUTPUT_DIR,
        help="Directory to write extraction JSON outputs.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULTS.max_documents,
        help="Maximum number of documents to process.",
    )
    parser.add_argument(
        "--text-field",
        default=DEFAULTS.text_field,
        help="Document field holding the text to extract from.",
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output.")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    parser.add_argument(
        "--log-file",
        type=Path,
        default=config.LOG_DIR / "extract.log",
        help="File to write execution logs.",
    )
    return parser.parse_args(argv)


def configure_logging(log_file: Path) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handlers = [
        logging.StreamHandler(),
        logging.FileHandler(log_file, mode="w", encoding="utf-8"),
    ]
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s", handlers=handlers)


def iter_document_paths(input_dir: Path, pattern: str = DEFAULTS.input_glob) -> Iterator[Path]:
    yield from sorted(input_dir.glob(pattern))


def process_document(
    document: dict,
    rules: Sequence[ExtractionRule],
    *,
    text_field: str = DEFAULTS.text_field,
) -> Tuple[dict, dict]:
    """Apply *rules* to one document; return (results by rule name, stats)."""

    text = document.get(text_field)
    if not isinstance(text, str):
        text = ""
    results = apply_rules(text, rules)
    spans = validate_spans(span for result in results for span in result.spans)
    hits = Counter(result.rule for result in results if result.found)
    stats = {
        "rules": len(rules),
        "rules_matched": len(hits),
        "values": sum(len(result.values) for result in results),
        "spans": len(spans),
        "errors": sorted(result.rule for result in results if result.error),
        "chars": len(text),
    }
    return {result.rule: result.to_dict() for result in results}, stats


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_file)
    if not args.input.exists():
        LOGGER.error("Input directory %s not found", args.input)
        return 1
    try:
        rules = load_rules(args.rules)
    except (OSError, ValueError) as exc:
        LOGGER.error("Failed to load rules from %s: %s", args.rules, exc)
        return 2

    args.output_dir.mkdir(parents=True, exist_ok=True)
    paths: List[Path] = list(iter_document_paths(args.input))
    if args.limit is not None:
        paths = paths[: args.limit]

    total_docs = 0
    total_values = 0
    for doc_path in tqdm(paths, desc="Extracting", disable=args.no_progress):
        with doc_path.open("r", encoding="utf-8") as fh:
            document = json.load(fh)
        if not isinstance(document, dict):
            LOGGER.warning("Skipping %s: expected a JSON object, got %s", doc_path, type(document).__name__)
            continue
        doc_id = document.get("doc_id") or doc_path.stem
        results, stats = process_document(document, rules, text_field=args.text_field)
        if stats["errors"]:
            LOGGER.warning("Doc %s had invalid patterns in rules: %s", doc_id, ", ".join(stats["errors"]))
        LOGGER.info(
            "Doc %s rules_matched=%s/%s values=%s spans=%s",
            doc_id,
            stats["rules_matched"],
            stats["rules"],
            stats["values"],
            stats["spans"],
        )
        payload = {
            "doc_id": doc_id,
            "source_path": str(doc_path),
            "stats": stats,
            "results": results,
        }
        # Named after the input file; doc_id may hold path separators.
        output_path = args.output_dir / f"{doc_path.stem}.json"
        with output_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2 if args.pretty else None)
        total_docs += 1
        total_values += stats["values"]

    LOGGER.info("Completed extraction for %s docs (total values: %s)", total_docs, total_values)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

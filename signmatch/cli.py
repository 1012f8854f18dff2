"""
Command-line comparison of a captured sequence against a sign library.

Usage:
    signmatch --candidate capture.json --library signs.json
    signmatch --candidate capture.json --library signs.json --top 3 --log-level DEBUG
    signmatch --candidate capture.json --library signs.json --threshold 0.92 --target-frames 60

Exit codes: 0 match found, 1 no match, 2 invalid input or config.
"""

import sys
import argparse
import logging

from .core.errors import SignMatchError
from .data.library import load_library, load_sequence
from .recognition.matcher import SignMatcher
from .utils.config import config_from_data, load_raw_config
from .utils.logger import RecognitionLogger, setup_logging

logger = logging.getLogger(__name__)

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Compare a captured sign against recorded signs"
    )
    parser.add_argument(
        "--candidate", required=True,
        help="JSON file with the captured keyframes"
    )
    parser.add_argument(
        "--library", required=True,
        help="JSON file with recorded signs"
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to comparison.yaml"
    )
    parser.add_argument(
        "--threshold", type=float, default=None,
        help="Override similarity threshold"
    )
    parser.add_argument(
        "--target-frames", type=int, default=None,
        help="Override resample length"
    )
    parser.add_argument(
        "--workers", type=int, default=None,
        help="Score library entries on N threads"
    )
    parser.add_argument(
        "--top", type=int, default=5,
        help="Number of ranked results to print"
    )
    parser.add_argument(
        "--log-level", type=str, default=None,
        help="Logging level (overrides config)"
    )
    return parser.parse_args(argv)


def _overrides(args) -> dict:
    overrides = {}
    if args.threshold is not None:
        overrides["similarity_threshold"] = args.threshold
    if args.target_frames is not None:
        overrides["target_frames"] = args.target_frames
    if args.workers is not None:
        overrides["max_workers"] = args.workers
    return overrides


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        data = load_raw_config(args.config)
        log_cfg = data.get("logging") or {}
        setup_logging(
            level=args.log_level or log_cfg.get("level", "INFO"),
            log_file=log_cfg.get("file"),
            max_size_mb=log_cfg.get("max_size_mb", 10),
            backup_count=log_cfg.get("backup_count", 3),
        )
        config = config_from_data(data, _overrides(args))
        candidate = load_sequence(args.candidate)
        library = load_library(args.library)
    except SignMatchError as e:
        logger.error("%s", e)
        return EXIT_ERROR

    matcher = SignMatcher(config)
    events = RecognitionLogger(threshold=config.similarity_threshold)

    results = matcher.compare_all(candidate, library)
    events.log_comparison_results(results)

    for rank, result in enumerate(results[:max(args.top, 0)], start=1):
        print("%2d. %-24s %6.1f%%  %s" % (
            rank, result.sign_name, result.similarity * 100,
            "MATCH" if result.is_match else ""))

    match = results[0] if results and results[0].is_match else None
    if match is None:
        events.log_no_match(results)
        print("No matching sign")
        return EXIT_NO_MATCH

    events.log_match(match)
    print("Recognised: %s (%s)" % (match.sign_name, match.sign_id))
    return EXIT_MATCH


if __name__ == "__main__":
    sys.exit(main())

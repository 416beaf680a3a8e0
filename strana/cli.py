"""
Command-line interface for Strana.

Usage:
    strana scan page.jpg --corpus en_50k.txt
    strana scan page.jpg --corpus en_50k.txt --strange-only --json
    strana tap page.jpg 120 340 --display-size 400 600 --corpus en_50k.txt
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from strana.config import StranaConfig
from strana.exceptions import StranaError
from strana.export import save_session, session_from_scan
from strana.models import Word
from strana.recognition import TesseractRecognizer
from strana.words.hittest import resolve_tap
from strana.words.pipeline import create_pipeline


def build_config(args: argparse.Namespace) -> StranaConfig:
    config = StranaConfig.from_yaml(args.config) if args.config else StranaConfig()
    overrides = {}
    if args.corpus:
        overrides["corpus_path"] = args.corpus
    if args.top_n is not None:
        overrides["top_n"] = args.top_n
    return replace(config, **overrides)


def format_word(word: Word) -> str:
    flags = []
    if word.is_strange:
        flags.append("strange")
    if not word.is_spelled_correctly:
        flags.append(f"misspelled -> {word.corrected_text or '?'}")
    bounds = word.bounds.to_tuple() if word.bounds else "-"
    suffix = f"  [{', '.join(flags)}]" if flags else ""
    return f"{word.original_text:<20} {word.tag:<6} {bounds}{suffix}"


def run_scan(args: argparse.Namespace) -> int:
    config = build_config(args)
    recognizer = TesseractRecognizer(config.recognition)
    pipeline = create_pipeline(config)

    ocr_result = recognizer.recognize(args.image)
    words, stats = pipeline.process_with_stats(ocr_result)
    pipeline.log_summary(words)

    if args.save_session:
        save_session(session_from_scan(ocr_result.full_text, words), args.save_session)

    shown = [w for w in words if w.is_strange] if args.strange_only else words
    if args.json:
        print(json.dumps([w.to_dict() for w in shown], indent=2))
    else:
        for word in shown:
            print(format_word(word))
        print(
            f"\n{stats.tokens_kept}/{stats.tokens_seen} tokens kept, "
            f"{stats.strange_words} strange, {stats.misspelled_words} misspelled "
            f"({stats.processing_time_ms:.0f} ms)"
        )
    return 0


def run_tap(args: argparse.Namespace) -> int:
    config = build_config(args)
    recognizer = TesseractRecognizer(config.recognition)
    pipeline = create_pipeline(config)

    ocr_result = recognizer.recognize(args.image)
    if ocr_result.image_size is None:
        raise StranaError("Recognizer did not report an image size")
    words = pipeline.process(ocr_result)

    word = resolve_tap(
        (args.x, args.y),
        tuple(args.display_size),
        ocr_result.image_size,
        words,
    )
    if word is None:
        print("No strange word at that point")
        return 1
    print(word.lookup_key)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="strana", description="Find strange words in a photographed page"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("image", type=Path, help="Image of a page of text")
    common.add_argument("--corpus", type=Path, help="Frequency list of '<word> <frequency>' lines")
    common.add_argument("--config", type=Path, help="YAML config file")
    common.add_argument("--top-n", type=int, help="Number of common words in the corpus")

    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", parents=[common], help="List recognized words")
    scan.add_argument("--strange-only", action="store_true", help="Only show strange words")
    scan.add_argument("--json", action="store_true", help="Print words as JSON")
    scan.add_argument("--save-session", type=Path, help="Directory to save the scan session in")
    scan.set_defaults(func=run_scan)

    tap = subparsers.add_parser("tap", parents=[common], help="Resolve a tap to a strange word")
    tap.add_argument("x", type=float, help="Tap x in display coordinates")
    tap.add_argument("y", type=float, help="Tap y in display coordinates")
    tap.add_argument(
        "--display-size",
        type=float,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        required=True,
        help="Size of the display surface",
    )
    tap.set_defaults(func=run_tap)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except StranaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

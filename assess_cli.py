#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Assess a transcript against its reference sentence and print the result as JSON.

    python assess_cli.py "there are two cats" "their are to cats"
    python assess_cli.py --strategy global --locale vi "hello world" "world hello"
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from speech_assessment import config
from speech_assessment.schemas import submission_payload
from speech_assessment.services.assessment_service import AssessmentService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Word-level transcript assessment")
    parser.add_argument("reference", help="Sentence the learner was asked to read")
    parser.add_argument("transcript", nargs="?", default="", help="Speech recognition output")
    parser.add_argument("--strategy", choices=config.ALIGNMENT_STRATEGIES, default=None)
    parser.add_argument("--locale", choices=config.SUPPORTED_LOCALES, default=None)
    parser.add_argument("--expand-contractions", action="store_true")
    parser.add_argument("--submission", action="store_true", help="Print the graded submission payload instead")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    overrides = {}
    if args.strategy:
        overrides["strategy"] = args.strategy
    if args.locale:
        overrides["locale"] = args.locale
    if args.expand_contractions:
        overrides["expand_contractions"] = True

    try:
        settings = config.AssessmentSettings.from_config(**overrides)
    except config.InvalidSettingsError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    result = AssessmentService(settings).assess(args.reference, args.transcript)
    data = submission_payload(result).model_dump() if args.submission else result.to_dict()
    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

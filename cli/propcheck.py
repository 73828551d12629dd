#!/usr/bin/env python3
"""
propcheck: check statements made in propositional logic.

Every proposition line of the input file except the last is an axiom; the
last one is the theorem to prove. Up to 32 variables can be used.

Usage:
    propcheck theory.txt
    propcheck theory.txt --strategy vectorized --json
    python -m cli theory.txt -v

Exit Codes:
    0: Theorem verified, or the axioms are not consistent
    1: Theorem is false, or any error (usage, file, syntax, nesting,
       variable limit, empty input, configuration)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from entailment.checker import EntailmentResult, Verdict, check_entailment
from entailment.config import STRATEGIES, CheckerConfig, load_config_from_env
from propositions.errors import PropcheckError, UsageError
from propositions.loader import load_propositions

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
NAME_COLUMN_WIDTH = 40


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="propcheck",
        description="Check whether the last proposition of a file follows from the others",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Notation:
    [name]                        variable
    ( [A] => [B] )  ( [A] implies [B] )  ( [A] then [B] )
    ( [A] <= [B] )  ( [A] if [B] )
    ( [A] <=> [B] ) ( [A] iff [B] )
    ( [A] & [B] )   ( [A] and [B] )
    ( [A] | [B] )   ( [A] or [B] )
    ( [A] ^ [B] )   ( [A] xor [B] )
    ![A]            not [A]
    T  true         F  false

Lines starting with // and blank lines are ignored.
        """,
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Proposition file; the last proposition is the theorem",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: $PROPCHECK_CONFIG or config/propcheck.yaml)",
    )
    parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default=None,
        help="Enumeration strategy (overrides configuration)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Assignments per chunk for the vectorized strategy",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of the text report",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v info, -vv debug)",
    )
    return parser


def configure_logging(config: CheckerConfig, verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.getLevelName(config.log_level or "WARNING")
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def format_report(result: EntailmentResult) -> str:
    """Human readable verdict, with the counterexample table when refuted."""
    if result.verdict == Verdict.AXIOMS_INCONSISTENT:
        return "Axioms are not consistent!"
    if result.verdict == Verdict.VERIFIED:
        return "Theorem has been verified!"

    lines = ["Theorem is false!"]
    rows = result.counterexample.bindings() if result.counterexample else []
    if rows:
        lines.append("Counterexample:")
        lines.append(f"{'Proposition':>{NAME_COLUMN_WIDTH}} Value")
        for name, value in rows:
            lines.append(f"{name:>{NAME_COLUMN_WIDTH}} {value}")
    return "\n".join(lines)


def exit_code_for(result: EntailmentResult) -> int:
    return 1 if result.verdict == Verdict.THEOREM_FALSE else 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0 when verified or the axioms are inconsistent, 1 otherwise.
    """
    args = build_parser().parse_args(argv)

    try:
        if args.path is None:
            raise UsageError()
        load_dotenv()
        config = load_config_from_env(args.config).with_overrides(
            strategy=args.strategy,
            batch_size=args.batch_size,
        )
        configure_logging(config, args.verbose)

        propositions = load_propositions(args.path)
        result = check_entailment(propositions, config)
    except PropcheckError as exc:
        logger.debug("aborting: %r", exc)
        print(exc)
        return 1

    if args.json:
        payload = result.to_dict()
        payload["source"] = str(args.path)
        payload["variables"] = list(propositions.variable_names)
        print(json.dumps(payload, indent=2))
    else:
        print(format_report(result))
    return exit_code_for(result)


if __name__ == "__main__":
    sys.exit(main())

"""
Command-line quotes for a single pool.

    cpswap quote-in --reserve-in 1000000 --reserve-out 2000000 --amount 1000 --trade-fee-rate 2500
    cpswap quote-out --reserve-in 1000000 --reserve-out 2000000 --amount 1000 --config amm.yaml
    cpswap deposit --supply 1000 --reserve-0 5000 --reserve-1 9000 --shares 10
    cpswap withdraw --supply 1000 --reserve-0 5000 --reserve-1 9000 --shares 10

Fee rates come from either `--config` or the `--*-fee-rate` flags, never both.
Prints one JSON object. Exit code 1 on a calculation failure or an unreadable
config, 2 on a usage error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Optional, Sequence

import yaml

from .core import calculator
from .core.config import AmmConfig, load_amm_config
from .core.types import RoundDirection
from .errors import CurveError

logger = logging.getLogger("cpswap")

RATE_FLAGS = ("trade_fee_rate", "protocol_fee_rate", "fund_fee_rate")


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logger


def _fee_config(args: argparse.Namespace) -> AmmConfig:
    if args.config:
        return load_amm_config(args.config)
    return AmmConfig(**{name: getattr(args, name) or 0 for name in RATE_FLAGS})


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="cpswap", description="Constant-product swap and liquidity quotes.")
    ap.add_argument("--log-level", type=str, default="WARNING")
    sub = ap.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("quote-in", "exact-input swap: output for a fixed input"),
        ("quote-out", "exact-output swap: input for a fixed output"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--reserve-in", type=int, required=True)
        p.add_argument("--reserve-out", type=int, required=True)
        p.add_argument("--amount", type=int, required=True)
        p.add_argument("--config", type=str, default="")
        p.add_argument("--trade-fee-rate", type=int, default=None)
        p.add_argument("--protocol-fee-rate", type=int, default=None)
        p.add_argument("--fund-fee-rate", type=int, default=None)

    for name, help_text in (
        ("deposit", "tokens owed for minting shares (rounded up)"),
        ("withdraw", "tokens paid for burning shares (rounded down)"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--supply", type=int, required=True)
        p.add_argument("--reserve-0", type=int, required=True)
        p.add_argument("--reserve-1", type=int, required=True)
        p.add_argument("--shares", type=int, required=True)

    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)
    if getattr(args, "config", "") and any(getattr(args, name) is not None for name in RATE_FLAGS):
        ap.error("--config cannot be combined with explicit fee-rate flags")
    configure_logging(getattr(logging, str(args.log_level).upper(), logging.WARNING))

    try:
        if args.command in ("quote-in", "quote-out"):
            cfg = _fee_config(args)
            swap = calculator.swap_exact_input if args.command == "quote-in" else calculator.swap_exact_output
            result = swap(
                args.amount,
                args.reserve_in,
                args.reserve_out,
                cfg.trade_fee_rate,
                cfg.protocol_fee_rate,
                cfg.fund_fee_rate,
            )
            calculator.check_invariant(args.reserve_in, args.reserve_out, result)
        else:
            direction = RoundDirection.CEILING if args.command == "deposit" else RoundDirection.FLOOR
            result = calculator.shares_to_reserves(
                args.shares,
                args.supply,
                args.reserve_0,
                args.reserve_1,
                direction,
            )
    except (CurveError, OSError, yaml.YAMLError, TypeError) as exc:
        logger.info("%s failed: %s", args.command, exc)
        print(f"[cpswap] FAIL ({args.command}): {exc}", file=sys.stderr)
        return 1

    print(json.dumps(asdict(result), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

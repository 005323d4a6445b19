from __future__ import annotations

# ruff: noqa: E402
import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
PYTHON_ROOT = REPO_ROOT / "python"
if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from lagrand import GeneratorConfig
from lagrand.trace import (
    BOUNDED_OPS,
    TRACE_OPS,
    JsonlTraceLogger,
    TraceRow,
    collect_trace,
    first_mismatch,
)

DEFAULT_SEEDS = (0, 1275028672939391351)


def _write_mismatch_bundle(
    bundle_dir: Path,
    expected: TraceRow,
    actual: TraceRow,
    mismatch: dict[str, object],
) -> Path:
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ")
    case_dir = bundle_dir / f"{timestamp}_op-{expected.op}_seed-{expected.seed}"
    case_dir.mkdir(parents=True, exist_ok=True)

    payload = {
        "seed": expected.seed,
        "op": expected.op,
        "arg": expected.arg,
        "mismatch": mismatch,
        "expected": expected.values,
        "actual": actual.values,
    }
    (case_dir / "mismatch.json").write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return case_dir


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Dump or check reproducible generator streams as JSON Lines."
    )
    parser.add_argument(
        "--seed",
        type=int,
        action="append",
        help="Seed to trace (repeat flag for multiple). Defaults to 0 and 1275028672939391351.",
    )
    parser.add_argument(
        "--op",
        action="append",
        choices=tuple(TRACE_OPS),
        help="Operation to trace (repeat flag for multiple). Defaults to all.",
    )
    parser.add_argument("--count", type=int, default=100, help="Outputs per trace.")
    parser.add_argument(
        "--arg",
        type=int,
        default=None,
        help="Bound for intn/int31n/int63n.",
    )
    parser.add_argument(
        "--length",
        type=int,
        default=None,
        help="Length for perm/read/shuffle.",
    )
    parser.add_argument("--int-bits", type=int, choices=(32, 64), default=64)
    parser.add_argument("--out", type=Path, default=None, help="JSONL file to append traces to.")
    parser.add_argument(
        "--compare",
        type=Path,
        default=None,
        help="Reference JSONL to check regenerated traces against.",
    )
    parser.add_argument(
        "--bundle-dir",
        type=Path,
        default=Path("artifacts/streams/mismatch_bundles"),
        help="Mismatch bundle directory.",
    )
    parser.add_argument("--allow-mismatch", action="store_true")
    args = parser.parse_args(argv)

    if args.count < 0:
        parser.error("--count must be non-negative")
    if args.length is not None and args.length < 0:
        parser.error("--length must be non-negative")
    if args.out is None and args.compare is None:
        parser.error("one of --out or --compare is required")
    return args


def _dump(args: argparse.Namespace, config: GeneratorConfig) -> int:
    logger = JsonlTraceLogger(path=args.out)
    seeds = args.seed if args.seed else list(DEFAULT_SEEDS)
    ops = args.op if args.op else list(TRACE_OPS)

    written = 0
    for seed in seeds:
        for op in ops:
            arg = args.arg if op in BOUNDED_OPS else args.length
            row = collect_trace(seed, op, args.count, arg=arg, config=config)
            logger.log_trace(row)
            written += 1

    print(f"Wrote {written} traces to {args.out}.")
    return 0


def _compare(args: argparse.Namespace, config: GeneratorConfig) -> int:
    reference = JsonlTraceLogger(path=args.compare).load()

    total_cases = 0
    failed_cases = 0
    for expected in reference:
        if args.seed and expected.seed not in args.seed:
            continue
        if args.op and expected.op not in args.op:
            continue

        total_cases += 1
        actual = collect_trace(
            expected.seed,
            expected.op,
            len(expected.values),
            arg=expected.arg,
            config=config,
        )
        mismatch = first_mismatch(expected, actual)
        if mismatch is None:
            print(f"PASS op={expected.op} seed={expected.seed} count={len(expected.values)}")
            continue

        failed_cases += 1
        bundle_path = _write_mismatch_bundle(args.bundle_dir, expected, actual, mismatch)
        print(
            "FAIL "
            f"op={expected.op} seed={expected.seed} "
            f"index={mismatch.get('index')} bundle={bundle_path}"
        )

    print(f"Completed {total_cases} stream cases. Failed: {failed_cases}.")

    if failed_cases > 0 and not args.allow_mismatch:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = GeneratorConfig(int_bits=args.int_bits)

    if args.compare is not None:
        return _compare(args, config)
    return _dump(args, config)


if __name__ == "__main__":
    raise SystemExit(main())

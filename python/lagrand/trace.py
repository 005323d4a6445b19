"""Recorded output streams for parity checks, stored as JSON Lines."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .generator import GeneratorConfig, Random

Draw = Callable[[Random], Any]


def _swap(items: list[int], i: int, j: int) -> None:
    items[i], items[j] = items[j], items[i]


def _plain(method: str) -> Callable[[int | None], Draw]:
    def factory(arg: int | None) -> Draw:
        del arg
        return lambda rng: getattr(rng, method)()

    return factory


def _bounded(method: str) -> Callable[[int | None], Draw]:
    def factory(arg: int | None) -> Draw:
        bound = int(arg if arg is not None else DEFAULT_BOUND)
        return lambda rng: getattr(rng, method)(bound)

    return factory


def _float32(arg: int | None) -> Draw:
    del arg
    return lambda rng: float(rng.float32())


def _perm(arg: int | None) -> Draw:
    count = int(arg if arg is not None else DEFAULT_LENGTH)
    return lambda rng: rng.perm(count)


def _read(arg: int | None) -> Draw:
    size = int(arg if arg is not None else DEFAULT_LENGTH)
    return lambda rng: rng.fill(bytearray(size)).hex()


def _shuffle(arg: int | None) -> Draw:
    deck = list(range(int(arg if arg is not None else DEFAULT_LENGTH)))

    def draw(rng: Random) -> list[int]:
        rng.shuffle(len(deck), lambda i, j: _swap(deck, i, j))
        return list(deck)

    return draw


DEFAULT_BOUND = 100_000_000
DEFAULT_LENGTH = 10

TRACE_OPS: dict[str, Callable[[int | None], Draw]] = {
    "int63": _plain("int63"),
    "int31": _plain("int31"),
    "uint32": _plain("uint32"),
    "uint64": _plain("uint64"),
    "int": _plain("int_"),
    "intn": _bounded("intn"),
    "int31n": _bounded("int31n"),
    "int63n": _bounded("int63n"),
    "float64": _plain("float64"),
    "float32": _float32,
    "expfloat64": _plain("expfloat64"),
    "normfloat64": _plain("normfloat64"),
    "perm": _perm,
    "read": _read,
    "shuffle": _shuffle,
}

BOUNDED_OPS = frozenset({"intn", "int31n", "int63n"})
LENGTH_OPS = frozenset({"perm", "read", "shuffle"})
TAKES_ARG = BOUNDED_OPS | LENGTH_OPS


@dataclass(frozen=True)
class TraceRow:
    seed: int
    op: str
    arg: int | None
    values: list[Any]

    def to_dict(self) -> dict[str, Any]:
        return {"seed": self.seed, "op": self.op, "arg": self.arg, "values": self.values}

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> TraceRow:
        missing = {"seed", "op", "values"} - set(row)
        if missing:
            raise ValueError(f"trace row missing keys: {sorted(missing)}")
        if row["op"] not in TRACE_OPS:
            raise ValueError(f"Unsupported trace op: {row['op']}")
        if not isinstance(row["values"], list):
            raise ValueError("trace row values must be a list")

        arg = row.get("arg")
        return cls(
            seed=int(row["seed"]),
            op=str(row["op"]),
            arg=None if arg is None else int(arg),
            values=list(row["values"]),
        )

    @property
    def key(self) -> tuple[int, str, int | None]:
        return (self.seed, self.op, self.arg)


def collect_trace(
    seed: int,
    op: str,
    count: int,
    *,
    arg: int | None = None,
    config: GeneratorConfig | None = None,
) -> TraceRow:
    """Run ``op`` ``count`` times on a fresh generator seeded with ``seed``."""
    if op not in TRACE_OPS:
        raise ValueError(f"Unsupported trace op: {op}")
    if count < 0:
        raise ValueError("count must be non-negative")

    row_arg = None
    if op in TAKES_ARG:
        row_arg = int(arg if arg is not None else _default_arg(op))

    rng = Random.from_seed(seed, config=config)
    draw = TRACE_OPS[op](row_arg)
    return TraceRow(seed=int(seed), op=op, arg=row_arg, values=[draw(rng) for _ in range(count)])


def _default_arg(op: str) -> int:
    return DEFAULT_BOUND if op in BOUNDED_OPS else DEFAULT_LENGTH


def first_mismatch(expected: TraceRow, actual: TraceRow) -> dict[str, Any] | None:
    if expected.key != actual.key:
        raise ValueError(f"cannot compare traces {expected.key} and {actual.key}")

    for index, (want, got) in enumerate(zip(expected.values, actual.values)):
        if want != got:
            return {"index": index, "expected": want, "actual": got}

    if len(expected.values) != len(actual.values):
        index = min(len(expected.values), len(actual.values))
        return {
            "index": index,
            "expected_count": len(expected.values),
            "actual_count": len(actual.values),
        }
    return None


def append_jsonl(path: Path, row: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(row, separators=(",", ":")))
        handle.write("\n")


def read_jsonl(path: Path) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ValueError(f"{path}:{line_no}: invalid JSON") from exc
            if not isinstance(payload, dict):
                raise ValueError(f"{path}:{line_no}: expected an object")
            rows.append(payload)
    return rows


class JsonlTraceLogger:
    def __init__(self, *, path: Path) -> None:
        self.path = path

    def log_trace(self, row: TraceRow) -> None:
        append_jsonl(self.path, row.to_dict())

    def load(self) -> list[TraceRow]:
        return [TraceRow.from_dict(row) for row in read_jsonl(self.path)]

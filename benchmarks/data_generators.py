"""
Benchmark documents.

Every generator draws from its own seeded Random so repeated runs compare
the same text. Documents are serialized with rawjson.dumps; the JSONC
variants add comments and trailing commas on top.
"""

import random
import string
from collections.abc import Callable
from typing import Any

import rawjson

DOCUMENT_TYPES = (
    "small_object",
    "record_array",
    "mixed_array",
    "nested_structure",
    "string_heavy",
)

_ESCAPE_PROBABILITY = 0.3
_ESCAPES = ('"', "\\", "\n", "\t", "\b", "\u00e9", "\u65e5", "\U0001f600")


def generate_document(document_type: str, seed: int = 0) -> str:
    """Returns the JSON text for one of DOCUMENT_TYPES."""
    generators: dict[str, Callable[[random.Random], Any]] = {
        "small_object": _small_object,
        "record_array": _record_array,
        "mixed_array": _mixed_array,
        "nested_structure": _nested_structure,
        "string_heavy": _string_heavy,
    }
    if document_type not in generators:
        raise ValueError(f"Unknown document type: {document_type}")

    rng = random.Random(f"{document_type}:{seed}")
    return rawjson.dumps(generators[document_type](rng), indent=2)


def generate_jsonc_document(document_type: str, seed: int = 0) -> str:
    """
    Returns the same document with a line comment after every line that
    ends a value and a trailing comma before each closing bracket.
    """
    lines = generate_document(document_type, seed).splitlines()
    annotated = []
    for number, line in enumerate(lines):
        following = ""
        if number + 1 < len(lines):
            following = lines[number + 1].lstrip()
        if following[:1] in ("]", "}") and line.rstrip()[-1:] not in "[{":
            line += ","
        if number % 4 == 0:
            line += f" // line {number}"
        annotated.append(line)
    return "/* generated */\n" + "\n".join(annotated)


def _small_object(rng: random.Random) -> dict[str, Any]:
    return {
        "id": rng.randint(10_000, 99_999),
        "name": _word(rng, 12),
        "email": f"{_word(rng, 8)}@example.com",
        "active": rng.random() < 0.5,
        "balance": round(rng.uniform(0, 10_000), 2),
        "tags": [_word(rng, 5) for _ in range(3)],
    }


def _record_array(rng: random.Random) -> list[dict[str, Any]]:
    return [
        {
            "id": f"txn_{i:06d}",
            "amount": round(rng.uniform(1.0, 1000.0), 2),
            "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
            "status": rng.choice(["completed", "pending", "failed"]),
            "retries": rng.randint(0, 5),
            "note": None if rng.random() < 0.5 else _word(rng, 20),
        }
        for i in range(500)
    ]


def _mixed_array(rng: random.Random) -> list[Any]:
    makers: list[Callable[[], Any]] = [
        lambda: rng.randint(-(2**40), 2**40),
        lambda: rng.uniform(-1e6, 1e6),
        lambda: _word(rng, rng.randint(5, 30)),
        lambda: rng.random() < 0.5,
        lambda: None,
        lambda: {"score": rng.random(), "label": _word(rng, 6)},
    ]
    return [rng.choice(makers)() for _ in range(2_000)]


def _nested_structure(rng: random.Random) -> dict[str, Any]:
    def level(depth: int) -> dict[str, Any]:
        if depth == 0:
            return {"value": _word(rng, 10)}
        return {
            "depth": depth,
            "items": [level(depth - 1) for _ in range(3)],
            "nested": level(depth - 1),
        }

    return level(6)


def _string_heavy(rng: random.Random) -> dict[str, Any]:
    def escaped(length: int) -> str:
        return "".join(
            rng.choice(_ESCAPES)
            if rng.random() < _ESCAPE_PROBABILITY
            else rng.choice(string.ascii_letters + " ")
            for _ in range(length)
        )

    return {
        "strings": [escaped(60) for _ in range(200)],
        "paths": {
            f"file_{i}": f"C:\\Users\\{_word(rng, 8)}\\file_{i}.txt"
            for i in range(50)
        },
    }


def _word(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))

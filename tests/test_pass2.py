"""
JSON specification pass2 test from json.org test suite.

Validates indexing of a deeply nested array structure and of nesting far
deeper than the interpreter's recursion limit.
"""

import sys

import rawjson

# from https://json.org/JSON_checker/test/pass2.json
JSON = r"""
[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]
"""


def test_parse() -> None:
    """
    Validates JSON parsing and round-trip encoding for deeply nested arrays.

    Tests the indexer's handling of 19 nesting levels and proper
    reconstruction through serialization.
    """
    document = rawjson.parse(JSON)
    assert len(document) == 20

    innermost = document.value()
    for _ in range(19):
        (innermost,) = innermost.to_fixed_array(1)
    assert innermost.try_to(str) == "Not too deep"
    assert len(list(innermost.ancestors())) == 19

    res = rawjson.loads(JSON)
    out = rawjson.dumps(res)
    assert res == rawjson.loads(out)


def test_nesting_beyond_recursion_limit() -> None:
    """
    Validates that depth is limited by memory rather than the call stack.
    """
    depth = sys.getrecursionlimit() * 5
    text = "[" * depth + "]" * depth

    document = rawjson.parse(text)
    assert len(document) == depth
    assert document.entries[-1].text_range == rawjson.TextRange(
        depth - 1, depth + 1
    )

    tree = rawjson.loads(text)
    for _ in range(depth - 1):
        (tree,) = tree
    assert tree == []

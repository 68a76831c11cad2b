"""
Pytest configuration and shared fixtures for rawjson tests.

Provides immutable test case records for the JSON_checker suites, the
basic value table and the JSONC dialect.
"""

from dataclasses import dataclass
from typing import Any

import pytest


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    note: str = ""


# https://json.org/JSON_checker/test/fail*.json, in order.
JSON_CHECKER_FAIL_DOCS = [
    '"A JSON payload should be an object or array, not a string."',
    '["Unclosed array"',
    '{unquoted_key: "keys must be quoted"}',
    '["extra comma",]',
    '["double extra comma",,]',
    '[   , "<-- missing value"]',
    '["Comma after the close"],',
    '["Extra close"]]',
    '{"Extra comma": true,}',
    '{"Extra value after close": true} "misplaced quoted value"',
    '{"Illegal expression": 1 + 2}',
    '{"Illegal invocation": alert()}',
    '{"Numbers cannot have leading zeroes": 013}',
    '{"Numbers cannot be hex": 0x14}',
    '["Illegal backslash escape: \\x15"]',
    "[\\naked]",
    '["Illegal backslash escape: \\017"]',
    '[[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]]]',
    '{"Missing colon" null}',
    '{"Double colon":: null}',
    '{"Comma instead of colon", null}',
    '["Colon instead of comma": false]',
    '["Bad value", truth]',
    "['single quote']",
    '["\ttab\tcharacter\tin\tstring\t"]',
    '["tab\\   character\\   in\\  string\\  "]',
    '["line\nbreak"]',
    '["line\\\nbreak"]',
    "[0e]",
    "[0e+]",
    "[0e+-1]",
    '{"Comma instead if closing brace": true,',
    '["mismatch"}',
]

# Documents JSON_checker rejects that are valid JSON text.
JSON_CHECKER_ACCEPTED = {
    1: "any value may be the root",
    18: "nesting depth is not limited",
}


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides JSON_checker documents with the expected verdict.

    All but two must be rejected; the two exceptions are valid JSON text
    and are expected to parse.
    """
    cases = [
        JsonTestCase(
            description=f"fail{number}.json",
            input_data=doc,
            should_fail=number not in JSON_CHECKER_ACCEPTED,
            note=JSON_CHECKER_ACCEPTED.get(number, ""),
        )
        for number, doc in enumerate(JSON_CHECKER_FAIL_DOCS, start=1)
    ]
    # https://code.google.com/archive/p/simplejson/issues/3
    cases.append(
        JsonTestCase(
            description="raw control character in string",
            input_data='["A\u001fZ control characters in string"]',
            should_fail=True,
        )
    )
    return cases


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must parse successfully.

    These are the JSON_checker pass documents.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]""",
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
            expected_output=[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]],
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
            expected_output={
                "JSON Test Pattern pass3": {
                    "The outermost value": "must be an object or array.",
                    "In this test": "It is an object.",
                }
            },
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic JSON value test cases for fundamental parsing.

    Covers all JSON primitive types and basic container structures.
    """
    return [
        JsonTestCase("null value", "null", False, None),
        JsonTestCase("true boolean", "true", False, True),
        JsonTestCase("false boolean", "false", False, False),
        JsonTestCase("integer", "42", False, 42),
        JsonTestCase("negative integer", "-17", False, -17),
        JsonTestCase("float", "3.14", False, 3.14),
        JsonTestCase("exponent", "1e3", False, 1000.0),
        JsonTestCase("empty string", '""', False, ""),
        JsonTestCase("simple string", '"hello"', False, "hello"),
        JsonTestCase("escaped string", '"a\\nb"', False, "a\nb"),
        JsonTestCase("empty array", "[]", False, []),
        JsonTestCase("empty object", "{}", False, {}),
        JsonTestCase("simple array", "[1, 2, 3]", False, [1, 2, 3]),
        JsonTestCase(
            "simple object", '{"key": "value"}', False, {"key": "value"}
        ),
    ]


@pytest.fixture
def jsonc_documents() -> list[JsonTestCase]:
    """
    Provides JSONC documents with the number of comments each contains.

    `expected_output` holds the comment count.
    """
    return [
        JsonTestCase(
            description="line comments around values",
            input_data="""// leading
[
    1, // one
    2
]""",
            expected_output=2,
        ),
        JsonTestCase(
            description="block comments and a trailing comma",
            input_data="""{
    /* name */ "name": "rawjson",
    "tags": [/* first */ "json", "jsonc",],
}""",
            expected_output=2,
        ),
        JsonTestCase(
            description="comments everywhere",
            input_data=(
                "/*a*/{/*b*/\"k\"/*c*/:/*d*/[/*e*/1/*f*/]//g\n}//end"
            ),
            expected_output=8,
        ),
        JsonTestCase(
            description="comment markers inside strings",
            input_data='["// not a comment", "/* nor this */"]',
            expected_output=0,
        ),
    ]

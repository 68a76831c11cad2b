"""
Benchmark suite for rawjson.

Compares indexing and conversion against the standard library json,
orjson and ujson, and tracks the memory cost of the flat value index.
"""

# pairs.py
# Reads generator output - {"pairs": [{"x0":..,"y0":..,"x1":..,"y1":..}, ...]} -
# into CoordinatePair records on top of the lexer and parser.

from typing import List, NamedTuple

from json_model import JsonObject, Value
from json_parser import load_file

PAIR_KEYS = ("x0", "y0", "x1", "y1")


class PairsFormatError(ValueError):
    """Document parsed fine but is not shaped like generator output."""


class CoordinatePair(NamedTuple):
    x0: float
    y0: float
    x1: float
    y1: float


def _coordinate(entry: JsonObject, key: str, index: int) -> float:
    if key not in entry:
        raise PairsFormatError(f"pairs[{index}] is missing '{key}'")
    value = entry[key]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PairsFormatError(f"pairs[{index}].{key} is not a number: {value!r}")
    return float(value)


def extract_pairs(document: Value) -> List[CoordinatePair]:
    """
    Pull the coordinate pairs out of a parsed document.

    Duplicate keys resolve last-one-wins. Extra keys in an entry are
    ignored. Any missing or non-numeric coordinate raises PairsFormatError.
    """
    if not isinstance(document, JsonObject):
        raise PairsFormatError("root must be an object")
    if "pairs" not in document:
        raise PairsFormatError("root object has no 'pairs' member")
    entries = document["pairs"]
    if not isinstance(entries, list):
        raise PairsFormatError("'pairs' must be an array")

    result = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, JsonObject):
            raise PairsFormatError(f"pairs[{index}] is not an object")
        result.append(CoordinatePair(*(_coordinate(entry, k, index) for k in PAIR_KEYS)))
    return result


def parse_coordinate_pairs(path, **options) -> List[CoordinatePair]:
    """Load a generator file and return its pairs in file order."""
    return extract_pairs(load_file(path, **options))

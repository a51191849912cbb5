import re

from .errors import ParseError
from .log import pxlog


#---------------------------------------------------------------------------#
#   Deserialization helpers                                                 #
#       pixiv represents some collections as objects keyed by numeric-      #
#       string IDs, e.g. {"illusts": {"110": {...}, "108": null}}.          #
#       Two adapters turn them into lists:                                  #
#           value mode  keeps values, skips entries that fail to build.     #
#           key mode    keeps keys as ints, a bad key fails the whole call. #
#---------------------------------------------------------------------------#


INT32_MIN = -2**31
INT32_MAX = 2**31 - 1

_pat_int = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_int32(text):
    """Parse a decimal string as a signed 32-bit int, None if it is not one."""
    if not isinstance(text, str) or not _pat_int.fullmatch(text):
        return None
    value = int(text)
    if not (INT32_MIN <= value <= INT32_MAX):
        return None
    return value

def _keyed_items(content):
    #   The platform sends "[]" instead of "{}" for an empty collection.
    if isinstance(content, list) and not content:
        return []
    if not isinstance(content, dict):
        raise ParseError(
            "Expected an object keyed by ID, got {}".format(
                type(content).__name__
            )
        )
    return content.items()

def dict_values_to_list(content, make_item):
    """
    Convert an object keyed by ID into a list of its values.

    Args:
        content     dict
            Deserialized JSON object, keys are ID strings.
        make_item   callable
            Builds one entity from a value, raises `ParseError` if it can't.

    Returns:
        list of built entities, in the iteration order of `content`.
        Entries `make_item` rejects (the platform uses null as a
        placeholder) are skipped.

    Raises:
        ParseError
            `content` itself is not an object.
    """
    items = []
    for key, value in _keyed_items(content):
        try:
            items.append(make_item(value))
        except ParseError as e:
            pxlog.debug(f"Skipping entry {key}: {e}")
    return items

def dict_keys_to_list(content):
    """
    Convert an object keyed by ID into a list of int IDs.

    Returns:
        list of int, in the iteration order of `content`.

    Raises:
        ParseError
            `content` is not an object, or a key is not a 32-bit integer.
    """
    ids = []
    for key, _ in _keyed_items(content):
        value = parse_int32(key)
        if value is None:
            raise ParseError(f"Invalid ID key: {key!r}")
        ids.append(value)
    return ids


#---------------------------------------------------------------------------#
#   Typed field readers                                                     #
#---------------------------------------------------------------------------#


def read_value(content, key):
    if not isinstance(content, dict):
        raise ParseError(
            f"Expected an object holding {key!r}, "
            f"got {type(content).__name__}"
        )
    try:
        return content[key]
    except KeyError:
        raise ParseError(f"Missing field {key!r}") from None

def _mismatch(key, expected, value):
    return ParseError(
        f"Field {key!r}: expected {expected}, got {type(value).__name__}"
    )

def read_str(content, key):
    value = read_value(content, key)
    if not isinstance(value, str):
        raise _mismatch(key, "string", value)
    return value

def read_opt_str(content, key):
    """Like `read_str`, but a missing key or null reads as None."""
    if isinstance(content, dict) and content.get(key) is None:
        return None
    return read_str(content, key)

def read_bool(content, key):
    value = read_value(content, key)
    if not isinstance(value, bool):
        raise _mismatch(key, "boolean", value)
    return value

def read_int(content, key):
    value = read_value(content, key)
    #   bool is an int subclass, but JSON true is not a number.
    if isinstance(value, bool) or not isinstance(value, int):
        raise _mismatch(key, "integer", value)
    if not (INT32_MIN <= value <= INT32_MAX):
        raise ParseError(f"Field {key!r}: {value} out of range")
    return value

def read_id(content, key):
    """Read an ID the platform sends either as a number or as a string."""
    value = read_value(content, key)
    if isinstance(value, str):
        parsed = parse_int32(value)
        if parsed is None:
            raise ParseError(f"Field {key!r}: invalid ID {value!r}")
        return parsed
    return read_int(content, key)

def read_str_list(content, key):
    value = read_value(content, key)
    if not isinstance(value, list):
        raise _mismatch(key, "array", value)
    for v in value:
        if not isinstance(v, str):
            raise _mismatch(key, "array of strings", v)
    return value

def read_enum(content, key, enum_type):
    value = read_int(content, key)
    try:
        return enum_type(value)
    except ValueError:
        raise ParseError(
            f"Field {key!r}: unknown {enum_type.__name__} {value}"
        ) from None

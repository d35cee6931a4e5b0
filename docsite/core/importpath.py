# docsite/core/importpath.py
import string

from .errors import InvalidPathError

# Module path of the standard library.
STDLIB_MODULE_PATH = "std"

_ALLOWED = frozenset(string.ascii_letters + string.digits + "-._~+")

_RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)


def _check_elem(elem: str) -> None:
    if elem == "":
        raise InvalidPathError("empty path element")
    if elem.strip(".") == "":
        raise InvalidPathError(f"disallowed path element {elem!r}")
    if elem[0] == ".":
        raise InvalidPathError("leading dot in path element")
    if elem[-1] == ".":
        raise InvalidPathError("trailing dot in path element")
    for ch in elem:
        if ch not in _ALLOWED:
            raise InvalidPathError(f"invalid char {ch!r}")
    short = elem.split(".", 1)[0]
    if short.upper() in _RESERVED_NAMES:
        raise InvalidPathError(f"disallowed path element {elem!r}")
    tilde = short.rfind("~")
    if tilde >= 0 and short[tilde + 1:].isdigit():
        raise InvalidPathError("trailing tilde and digits in path element")


def check_import_path(path: str) -> None:
    """Raise InvalidPathError unless path is a well-formed import path."""
    if path == "":
        raise InvalidPathError("empty string")
    if path[0] == "-":
        raise InvalidPathError("leading dash")
    if "//" in path:
        raise InvalidPathError("double slash")
    if path[-1] == "/":
        raise InvalidPathError("trailing slash")
    for elem in path.split("/"):
        _check_elem(elem)


def in_stdlib(path: str) -> bool:
    """
    Report whether path belongs to the standard library.

    Import paths hosted elsewhere have a dot in their first element; those
    without one are assumed to be standard library packages.
    """
    return "." not in path.split("/", 1)[0]

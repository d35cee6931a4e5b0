"""Tests for import path validation."""

import pytest

from docsite.core.errors import InvalidPathError
from docsite.core.importpath import check_import_path, in_stdlib


@pytest.mark.parametrize(
    "path",
    [
        "fmt",
        "net/http",
        "github.com/user/repo",
        "gopkg.in/yaml.v2",
        "example.com/a_b/c-d/e~f/g+h",
        "github.com/user/console",
    ],
)
def test_valid_import_paths(path):
    check_import_path(path)


@pytest.mark.parametrize(
    "path, reason",
    [
        ("", "empty string"),
        ("-x/y", "leading dash"),
        ("a//b", "double slash"),
        ("a/b/", "trailing slash"),
        ("a/../b", "disallowed path element"),
        ("a/.b", "leading dot"),
        ("a/b.", "trailing dot"),
        ("a/b c", "invalid char"),
        ("a/b@c", "invalid char"),
        ("a/NUL", "disallowed path element"),
        ("a/lpt1.txt", "disallowed path element"),
        ("a/foo~12", "trailing tilde"),
    ],
)
def test_invalid_import_paths(path, reason):
    with pytest.raises(InvalidPathError) as exc:
        check_import_path(path)
    assert reason in str(exc.value)


def test_in_stdlib():
    assert in_stdlib("fmt")
    assert in_stdlib("net/http")
    assert in_stdlib("std")
    assert not in_stdlib("github.com/x/y")
    assert not in_stdlib("golang.org/x/tools")
    # Only the first element counts.
    assert in_stdlib("cmd/go.mod")

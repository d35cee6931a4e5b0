# docsite/core/errors.py


class DocsiteError(Exception):
    """Base class for errors raised by the page-serving layer."""


class NotFoundError(DocsiteError):
    """The requested package, module, version or directory does not exist."""


class InvalidPathError(DocsiteError, ValueError):
    """A URL path could not be parsed into a valid import path."""


class UnknownTabError(DocsiteError, LookupError):
    """A tab was selected that has no detail fetcher. Always a bug."""

"""
Base exception for user-facing errors.

Errors that the user can fix (a broken tree document, an invalid config
file, a missing path) inherit from TplcUserError and are printed by the
CLI as clean messages without a stack trace.

Programming errors and bugs should NOT inherit from TplcUserError:
they propagate with full tracebacks.
"""

from __future__ import annotations


class TplcUserError(Exception):
    """
    Base class for all user-facing errors in tplc.

    These errors indicate problems that the user can fix:
    malformed tree documents, configuration issues, missing files.
    """
    pass


__all__ = ["TplcUserError"]

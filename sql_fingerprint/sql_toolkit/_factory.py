"""SQL toolkit factory.

:func:`get_sql_toolkit` is the single entry point for consumer code.  The
returned toolkit is stateless (it only holds immutable dialect objects), so
one instance is shared by every thread and every fingerprinting call.
"""

from __future__ import annotations

import threading
from typing import Callable

from ._protocols import SqlToolkit

_lock = threading.Lock()
_toolkit: SqlToolkit | None = None
_builder: Callable[[], SqlToolkit] | None = None


def register_implementation(builder: Callable[[], SqlToolkit]) -> None:
    """Use *builder* to create the toolkit from now on.

    The current instance is discarded; the next :func:`get_sql_toolkit`
    call builds a fresh one.
    """
    global _builder, _toolkit
    with _lock:
        _builder = builder
        _toolkit = None


def get_sql_toolkit() -> SqlToolkit:
    """Return the shared :class:`SqlToolkit`, building it on first use.

    Falls back to the SQLGlot implementation when nothing was registered.
    """
    global _toolkit
    toolkit = _toolkit
    if toolkit is not None:
        return toolkit

    with _lock:
        if _toolkit is None:
            if _builder is not None:
                _toolkit = _builder()
            else:
                from .impl.sqlglot_impl import SqlGlotToolkit

                _toolkit = SqlGlotToolkit()
        return _toolkit


def reset_toolkit() -> None:
    """Forget the shared toolkit and any registered builder.  **For testing only.**"""
    global _toolkit, _builder
    with _lock:
        _toolkit = None
        _builder = None

"""Error types for store access.

Adapters raise ``RepositoryError`` for any failure reading node, property or
type structure. Triple generators read the store only while the consumer is
iterating; at that boundary the failure is rewrapped as the single
``RepositoryRuntimeError`` kind that stream consumers need to handle.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """A failure reported by the content store while reading structure."""


class RepositoryRuntimeError(RuntimeError):
    """Store access failure surfaced to the consumer of a triple stream.

    The originating ``RepositoryError`` is kept as ``__cause__``.
    """


@contextmanager
def store_access(what: str = "") -> Iterator[None]:
    """Rewrap ``RepositoryError`` raised inside the block."""
    try:
        yield
    except RepositoryError as e:
        logger.debug("Store access failed%s: %s", f" ({what})" if what else "", e)
        raise RepositoryRuntimeError(str(e)) from e

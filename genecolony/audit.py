"""Audit — explicit post-construction logging of new entities.

Construction never logs by itself.  Factories that build long-lived
entities (organisms, ecologies, colonies) call ``audit`` once the entity
exists; records carry ``audit=True`` so a sink can filter on them.
"""

from __future__ import annotations

from typing import TypeVar

from loguru import logger

E = TypeVar("E")


def audit(entity: E) -> E:
    """Log a rendering of ``entity`` at DEBUG and hand it back."""
    logger.bind(audit=True).debug("{}: {}", type(entity).__name__, entity)
    return entity

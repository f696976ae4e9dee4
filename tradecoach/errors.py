"""Exceptions raised by the scenario generator and coaching scorer."""

from __future__ import annotations


class GenerationError(RuntimeError):
    """Reference data needed for a run could not be resolved."""


class ValidationError(ValueError):
    """Caller-supplied input was rejected before generation started."""

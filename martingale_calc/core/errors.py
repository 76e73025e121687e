"""Errors raised by the calculation engine. None of them is retryable."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for ladder/position calculation failures."""


class ZeroPositionSize(EngineError, ZeroDivisionError):
    """Raised when a position fold reaches a cumulative amount of exactly zero."""


class LadderDivergence(EngineError, RuntimeError):
    """Raised when ladder generation does not reach its target price within the row cap."""


class InvalidSettings(EngineError, ValueError):
    """Raised when settings are non-numeric or entry price / leverage are not positive."""

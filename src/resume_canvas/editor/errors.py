"""Exceptions raised by the canvas editor core."""

from __future__ import annotations


class EditorError(Exception):
    """Base class for editor errors."""


class SaveFailedError(EditorError):
    """A manual save could not reach the persistence API.

    The project stays dirty, so the user can retry.
    """

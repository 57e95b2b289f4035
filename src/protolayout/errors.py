# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""Exceptions raised by the positioning engine."""

from typing import Iterable


class LayoutError(Exception):
    """Base class for layout engine errors."""


class PositionMapError(LayoutError):
    """
    A previous-frame position map is missing nodes that exist in the topology.

    This is an integration bug on the caller's side, so it is raised rather
    than defaulted.
    """

    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        preview = ", ".join(self.missing[:5])
        more = "" if len(self.missing) <= 5 else f" (+{len(self.missing) - 5} more)"
        super().__init__(
            f"Previous positions missing {len(self.missing)} node(s): {preview}{more}"
        )


class UnknownLayoutError(LayoutError, ValueError):
    """Requested layout algorithm is not registered."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = list(available)
        super().__init__(
            f"Unknown layout: {name!r}. Available: {', '.join(self.available)}"
        )


class ConfigError(LayoutError):
    """Configuration file is missing or malformed."""

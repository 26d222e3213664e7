# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing issue processors."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ..models import Issue


@runtime_checkable
class Processor(Protocol):
    """Stage of the post-analysis issue pipeline."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the identifier used in diagnostics and configuration.

        Returns:
            str: Stable processor identifier.
        """
        raise NotImplementedError

    @abstractmethod
    def process(self, issues: Sequence[Issue]) -> list[Issue]:
        """Transform the full issue set.

        Args:
            issues: Issues that survived every earlier stage, in order.

        Returns:
            list[Issue]: Replacement issue list.

        Raises:
            ProcessingError: If the stage cannot process the issues; the
                whole run is aborted.
        """
        raise NotImplementedError

    @abstractmethod
    def finish(self) -> None:
        """Release resources or emit summaries once the run is over."""
        raise NotImplementedError


__all__ = ["Processor"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Ordered chain of issue processors."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..cache.source_cache import SourceCache
from ..config import ProcessingConfig
from ..interfaces.processors import Processor
from ..logging import debug_logger
from ..models import Issue, RunReport
from .autogenerated_exclude import AutogeneratedExclude


class PipelineError(RuntimeError):
    """Raised when a stage aborts the run.

    Attributes:
        stage: Name of the stage whose ``process`` or ``finish`` failed.
        finish_failures: ``finish`` errors of other stages, rendered as
            ``"<stage>: <error>"``, that did not become the reported failure.
    """

    def __init__(self, stage: str, cause: BaseException, *, finish_failures: Sequence[str] = ()) -> None:
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.finish_failures = tuple(finish_failures)


class ProcessorPipeline:
    """Feed issues through processors in order.

    Stage ``N`` only sees the issues that survived stages ``1..N-1``. The run is
    all-or-nothing: the first failing stage aborts it and no partial issue
    list is returned. ``finish`` runs on every stage that was reached, the
    failing one included.

    Args:
        processors: Stages in execution order.
        logger: Debug logger; defaults to the ``pipeline`` tagged logger.
    """

    def __init__(self, processors: Sequence[Processor], *, logger: logging.Logger | None = None) -> None:
        self._processors = tuple(processors)
        self._logger = logger or debug_logger("pipeline")

    def processor_names(self) -> list[str]:
        """Return stage names in execution order."""
        return [processor.name for processor in self._processors]

    def run(self, issues: Sequence[Issue]) -> list[Issue]:
        """Process ``issues`` through every stage.

        Args:
            issues: Issues produced by the analyzers, in reporting order.

        Returns:
            list[Issue]: Issues surviving every stage.

        Raises:
            PipelineError: If a stage fails; the original exception is chained.
        """

        current = list(issues)
        reached: list[Processor] = []
        failed: tuple[str, Exception] | None = None
        for processor in self._processors:
            reached.append(processor)
            before = len(current)
            try:
                current = processor.process(current)
            except Exception as exc:
                self._logger.debug("processor %s failed: %s", processor.name, exc)
                failed = (processor.name, exc)
                break
            self._logger.debug("processor %s: %d/%d issues left", processor.name, len(current), before)

        finish_failures = self._finish(reached)
        if failed is None and finish_failures:
            failed = finish_failures.pop(0)
        if failed is not None:
            stage, cause = failed
            raise PipelineError(
                stage,
                cause,
                finish_failures=[f"{name}: {exc}" for name, exc in finish_failures],
            ) from cause
        return current

    def _finish(self, reached: Sequence[Processor]) -> list[tuple[str, Exception]]:
        failures: list[tuple[str, Exception]] = []
        for processor in reached:
            try:
                processor.finish()
            except Exception as exc:
                self._logger.warning("processor %s failed to finish: %s", processor.name, exc)
                failures.append((processor.name, exc))
        return failures

    def execute(self, issues: Sequence[Issue]) -> RunReport:
        """Run the pipeline and capture the outcome in a :class:`RunReport`."""

        try:
            surviving = self.run(issues)
        except PipelineError as exc:
            return RunReport(error=str(exc), finish_failures=exc.finish_failures)
        return RunReport(issues=tuple(surviving))


def build_pipeline(
    config: ProcessingConfig,
    *,
    source_cache: SourceCache,
    logger: logging.Logger | None = None,
) -> ProcessorPipeline:
    """Assemble the stage list described by ``config``.

    Args:
        config: Processing toggles.
        source_cache: Cache shared by every stage that needs syntax trees.
        logger: Optional debug logger for the pipeline itself.

    Returns:
        ProcessorPipeline: Pipeline ready to run.
    """

    processors: list[Processor] = []
    if config.exclude_generated:
        processors.append(AutogeneratedExclude(source_cache))
    return ProcessorPipeline(processors, logger=logger)


__all__ = ["PipelineError", "ProcessorPipeline", "build_pipeline"]

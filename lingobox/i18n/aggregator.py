"""Aggregation of inline diagnostics into a single verdict."""

import logging
from collections.abc import Iterable

from lingobox.i18n.models import DiagnosticSeverity, TransformResult
from lingobox.i18n.protocols import (
    DiagnosticReporterProtocol,
    ProgressIndicatorProtocol,
)


logger = logging.getLogger(__name__)


class LoggingDiagnosticReporter:
    """Report diagnostics through the application logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("lingobox.i18n.diagnostics")

    def error(self, message: str) -> None:
        self.logger.error(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)


class ResultAggregator:
    """Consume inline results, report every diagnostic, compute success.

    Failure is cumulative: an error never stops consumption of the stream.
    """

    def __init__(
        self,
        reporter: DiagnosticReporterProtocol | None = None,
        progress: ProgressIndicatorProtocol | None = None,
    ) -> None:
        self.reporter = reporter or LoggingDiagnosticReporter()
        self.progress = progress
        self.error_count = 0
        self.warning_count = 0
        self.files_processed = 0

    @property
    def success(self) -> bool:
        return self.error_count == 0

    def aggregate(self, results: Iterable[TransformResult]) -> bool:
        for result in results:
            self.files_processed += 1
            logger.debug("i18n file processed: %s", result.file)

            for diagnostic in result.diagnostics:
                if self.progress is not None:
                    self.progress.stop()

                if diagnostic.type is DiagnosticSeverity.ERROR:
                    self.error_count += 1
                    self.reporter.error(diagnostic.message)
                else:
                    self.warning_count += 1
                    self.reporter.warning(diagnostic.message)

                if self.progress is not None:
                    self.progress.start()

        return self.success

"""Localized bundle generation from emitted build files."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from lingobox.adapters import create_file_adapter
from lingobox.core.logging import get_logger
from lingobox.core.spinner import NoOpSpinner
from lingobox.i18n.aggregator import ResultAggregator
from lingobox.i18n.classifier import ArtifactClassifier
from lingobox.i18n.consumer import ArtifactConsumer
from lingobox.i18n.executor import BundleActionExecutor
from lingobox.i18n.models import (
    EmittedArtifact,
    I18nOptions,
    InlineRequest,
    MissingTranslationPolicy,
)
from lingobox.i18n.protocols import (
    DiagnosticReporterProtocol,
    ProgressIndicatorProtocol,
    TransformExecutorProtocol,
)
from lingobox.i18n.reconciler import PassthroughReconciler
from lingobox.protocols import FileAdapterProtocol


logger = get_logger(__name__)

ExecutorFactory = Callable[[I18nOptions], TransformExecutorProtocol]


class InlineState(str, Enum):
    """Stages of one inline run."""

    IDLE = "idle"
    CLASSIFYING = "classifying"
    CONSUMING = "consuming"
    TRANSFORMING = "transforming"
    RECONCILING = "reconciling"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class InlineSummary:
    """Counters describing the last inline run."""

    requests: int = 0
    consumed_paths: frozenset[Path] = frozenset()
    copied_paths: list[Path] = field(default_factory=list)
    files_processed: int = 0
    errors: int = 0
    warnings: int = 0
    success: bool = False
    failure: str | None = None


class I18nInlineService:
    """Inline translations into emitted scripts and complete every output tree.

    Scripts are consumed from the emitted directory, inlined per locale by a
    worker pool, and every file that was not consumed is copied unchanged into
    each locale output directory. Translation problems are reported per file
    and make the run fail without stopping it; structural faults abort it.
    """

    def __init__(
        self,
        i18n: I18nOptions,
        executor_factory: ExecutorFactory | None = None,
        file_adapter: FileAdapterProtocol | None = None,
        progress: ProgressIndicatorProtocol | None = None,
        reporter: DiagnosticReporterProtocol | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.i18n = i18n
        self.max_workers = max_workers
        self.executor_factory = executor_factory or self._default_executor
        self.file_adapter = file_adapter or create_file_adapter()
        self.progress: ProgressIndicatorProtocol = progress or NoOpSpinner()
        self.reporter = reporter
        self.state = InlineState.IDLE
        self.state_history: list[InlineState] = [InlineState.IDLE]
        self.summary = InlineSummary()

    def _default_executor(self, i18n: I18nOptions) -> TransformExecutorProtocol:
        return BundleActionExecutor(i18n, max_workers=self.max_workers)

    def _transition(self, state: InlineState) -> None:
        logger.debug(
            "inline_state_changed", previous=self.state.value, state=state.value
        )
        self.state = state
        self.state_history.append(state)

    def inline_emitted_files(
        self,
        emitted_files: Iterable[EmittedArtifact],
        emitted_path: Path,
        base_output_path: Path,
        output_paths: Iterable[Path] | None = None,
        excluded_entry_points: Iterable[str] = (),
        es5: bool = False,
        missing_translation: MissingTranslationPolicy = MissingTranslationPolicy.WARNING,
    ) -> bool:
        """Generate localized bundles.

        Args:
            emitted_files: Artifacts produced by the build
            emitted_path: Intermediate directory holding the emitted files
            base_output_path: Root below which locale directories are written
            output_paths: Locale output directories, defaults to one per
                inlined locale below ``base_output_path``
            excluded_entry_points: Entry point names never inlined
            es5: Render legacy (ES5) syntax
            missing_translation: Policy for messages without translation

        Returns:
            True if no error diagnostic was reported and no fatal error occurred
        """
        self.summary = InlineSummary()
        locale_output_paths = (
            list(output_paths)
            if output_paths is not None
            else self.i18n.output_paths(base_output_path)
        )
        executor: TransformExecutorProtocol | None = None
        self.progress.start("Generating localized bundles...")

        try:
            executor = self.executor_factory(self.i18n)

            self._transition(InlineState.CLASSIFYING)
            eligible = ArtifactClassifier(excluded_entry_points).classify(emitted_files)

            self._transition(InlineState.CONSUMING)
            consumer = ArtifactConsumer(
                emitted_path,
                base_output_path,
                es5=es5,
                missing_translation=missing_translation,
                file_adapter=self.file_adapter,
            )
            requests, consumed_paths = consumer.consume_all(eligible)
            self.summary.requests = len(requests)
            self.summary.consumed_paths = consumed_paths

            self._transition(InlineState.TRANSFORMING)
            success = self._transform(
                executor, requests, emitted_path, locale_output_paths, consumed_paths
            )

            self._transition(InlineState.RECONCILING)
            self._reconcile(emitted_path, locale_output_paths, consumed_paths)
        except Exception as e:
            exc_info = logging.getLogger(__name__).isEnabledFor(logging.DEBUG)
            logger.error(
                "localized_bundle_generation_failed",
                state=self.state.value,
                error=str(e),
                exc_info=exc_info,
            )
            self._transition(InlineState.ABORTED)
            self.summary.failure = str(e)
            self.progress.fail(f"Localized bundle generation failed: {e}")
            return False
        finally:
            if executor is not None:
                executor.stop()

        self._transition(InlineState.DONE)
        self.summary.success = success
        if success:
            self.progress.succeed("Localized bundle generation complete.")
        else:
            self.progress.fail("Localized bundle generation failed.")
        return success

    def _transform(
        self,
        executor: TransformExecutorProtocol,
        requests: list[InlineRequest],
        emitted_path: Path,
        output_paths: list[Path],
        consumed_paths: frozenset[Path],
    ) -> bool:
        aggregator = ResultAggregator(self.reporter, self.progress)
        try:
            success = aggregator.aggregate(executor.inline_all(requests))
        except Exception:
            # Keep the output trees complete even though inlining failed
            self._reconcile_best_effort(emitted_path, output_paths, consumed_paths)
            raise
        finally:
            self.summary.files_processed = aggregator.files_processed
            self.summary.errors = aggregator.error_count
            self.summary.warnings = aggregator.warning_count
        return success

    def _reconcile(
        self,
        emitted_path: Path,
        output_paths: list[Path],
        consumed_paths: frozenset[Path],
    ) -> None:
        result = PassthroughReconciler(self.file_adapter).reconcile(
            emitted_path, output_paths, consumed_paths
        )
        self.summary.copied_paths = result.copied_paths

    def _reconcile_best_effort(
        self,
        emitted_path: Path,
        output_paths: list[Path],
        consumed_paths: frozenset[Path],
    ) -> None:
        try:
            self._reconcile(emitted_path, output_paths, consumed_paths)
        except Exception as e:
            logger.warning("passthrough_copy_failed", error=str(e))


def create_i18n_inline_service(
    i18n: I18nOptions,
    executor_factory: ExecutorFactory | None = None,
    file_adapter: FileAdapterProtocol | None = None,
    progress: ProgressIndicatorProtocol | None = None,
    reporter: DiagnosticReporterProtocol | None = None,
    max_workers: int | None = None,
) -> I18nInlineService:
    """Create localized bundle service instance."""
    return I18nInlineService(
        i18n,
        executor_factory=executor_factory,
        file_adapter=file_adapter,
        progress=progress,
        reporter=reporter,
        max_workers=max_workers,
    )


def i18n_inline_emitted_files(
    emitted_files: Iterable[EmittedArtifact],
    i18n: I18nOptions,
    base_output_path: Path,
    output_paths: Iterable[Path],
    excluded_entry_points: Iterable[str],
    emitted_path: Path,
    es5: bool = False,
    missing_translation: MissingTranslationPolicy = MissingTranslationPolicy.WARNING,
    progress: ProgressIndicatorProtocol | None = None,
) -> bool:
    """Functional entry point mirroring the service call."""
    service = create_i18n_inline_service(i18n, progress=progress)
    return service.inline_emitted_files(
        emitted_files,
        emitted_path,
        base_output_path,
        output_paths=output_paths,
        excluded_entry_points=excluded_entry_points,
        es5=es5,
        missing_translation=missing_translation,
    )

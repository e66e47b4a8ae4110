"""Locale inlining of emitted build artifacts."""

from lingobox.i18n.aggregator import LoggingDiagnosticReporter, ResultAggregator
from lingobox.i18n.classifier import ArtifactClassifier, create_artifact_classifier
from lingobox.i18n.consumer import (
    ArtifactConsumer,
    consume_file,
    create_artifact_consumer,
)
from lingobox.i18n.executor import BundleActionExecutor, create_bundle_action_executor
from lingobox.i18n.inliner import TranslationInliner, create_translation_inliner
from lingobox.i18n.manifest import load_emitted_files, load_translation_file
from lingobox.i18n.models import (
    Diagnostic,
    DiagnosticSeverity,
    EmittedArtifact,
    I18nOptions,
    InlineRequest,
    LocaleOptions,
    MissingTranslationPolicy,
    TransformResult,
)
from lingobox.i18n.reconciler import (
    PassthroughReconciler,
    create_passthrough_reconciler,
)
from lingobox.i18n.service import (
    I18nInlineService,
    InlineState,
    InlineSummary,
    create_i18n_inline_service,
    i18n_inline_emitted_files,
)


__all__: list[str] = [
    # Models
    "Diagnostic",
    "DiagnosticSeverity",
    "EmittedArtifact",
    "I18nOptions",
    "InlineRequest",
    "LocaleOptions",
    "MissingTranslationPolicy",
    "TransformResult",
    # Pipeline components
    "ArtifactClassifier",
    "ArtifactConsumer",
    "BundleActionExecutor",
    "LoggingDiagnosticReporter",
    "PassthroughReconciler",
    "ResultAggregator",
    "TranslationInliner",
    "consume_file",
    "load_emitted_files",
    "load_translation_file",
    # Orchestration
    "I18nInlineService",
    "InlineState",
    "InlineSummary",
    "i18n_inline_emitted_files",
    # Factory functions
    "create_artifact_classifier",
    "create_artifact_consumer",
    "create_bundle_action_executor",
    "create_i18n_inline_service",
    "create_passthrough_reconciler",
    "create_translation_inliner",
]

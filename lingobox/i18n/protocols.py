"""Protocol definitions for the locale inlining pipeline."""

from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable

from lingobox.i18n.models import I18nOptions, InlineRequest, TransformResult


@runtime_checkable
class InlinerProtocol(Protocol):
    """Rewrites translation placeholders in one script for every locale."""

    def inline(self, request: InlineRequest, i18n: I18nOptions) -> TransformResult:
        """Inline all locales for ``request`` and write the outputs."""
        ...


@runtime_checkable
class TransformExecutorProtocol(Protocol):
    """Bounded worker pool that runs inline requests."""

    def inline_all(
        self, requests: Iterable[InlineRequest]
    ) -> Iterator[TransformResult]:
        """Submit all requests, yield results in completion order."""
        ...

    def stop(self) -> None:
        """Release the worker pool. Safe to call more than once."""
        ...


@runtime_checkable
class ProgressIndicatorProtocol(Protocol):
    """Spinner-like progress indicator with terminal states."""

    def start(self, text: str | None = None) -> None: ...

    def stop(self) -> None: ...

    def succeed(self, text: str | None = None) -> None: ...

    def fail(self, text: str | None = None) -> None: ...


@runtime_checkable
class DiagnosticReporterProtocol(Protocol):
    """Sink for diagnostics, one channel per severity."""

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

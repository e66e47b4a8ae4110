"""Models for emitted artifacts, inline requests and their results."""

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator

from lingobox.models.base import LingoboxBaseModel


SCRIPT_EXTENSION = ".js"
SOURCE_MAP_SUFFIX = ".map"

# Entry points that establish the active locale at runtime
SET_LOCALE_ENTRY_NAMES = frozenset({"main", "vendor"})


class MissingTranslationPolicy(str, Enum):
    """How a message without a translation is reported."""

    ERROR = "error"
    WARNING = "warning"
    IGNORE = "ignore"


class DiagnosticSeverity(str, Enum):
    """Severity of a single transformation diagnostic."""

    ERROR = "error"
    WARNING = "warning"


class EmittedArtifact(LingoboxBaseModel):
    """One output file produced by the build phase.

    ``file`` is relative to the intermediate (emitted) root.
    """

    name: str | None = None
    file: str
    extension: str = ""
    asset: bool = False

    @field_validator("extension", mode="before")
    @classmethod
    def normalize_extension(cls, v: str | None) -> str:
        if not v:
            return ""
        return v if v.startswith(".") else f".{v}"

    def model_post_init(self, __context: object) -> None:
        if not self.extension:
            self.extension = Path(self.file).suffix


class InlineRequest(LingoboxBaseModel):
    """A single script queued for locale inlining."""

    filename: str
    code: str
    map: str | None = None
    es5: bool = False
    output_path: Path
    missing_translation: MissingTranslationPolicy = MissingTranslationPolicy.WARNING
    set_locale: bool = False


class Diagnostic(LingoboxBaseModel):
    """A severity-tagged message produced while inlining one file."""

    type: DiagnosticSeverity
    message: str

    @classmethod
    def error(cls, message: str) -> "Diagnostic":
        return cls(type=DiagnosticSeverity.ERROR, message=message)

    @classmethod
    def warning(cls, message: str) -> "Diagnostic":
        return cls(type=DiagnosticSeverity.WARNING, message=message)


class TransformResult(LingoboxBaseModel):
    """Outcome of inlining one request."""

    file: str
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.type is DiagnosticSeverity.ERROR for d in self.diagnostics)


class LocaleOptions(LingoboxBaseModel):
    """Translation table and output location for one locale."""

    translation: dict[str, str] = Field(default_factory=dict)
    subpath: str | None = None


class I18nOptions(LingoboxBaseModel):
    """Locale configuration handed to the inline executor."""

    source_locale: str = "en-US"
    inline_locales: list[str] = Field(default_factory=list)
    locales: dict[str, LocaleOptions] = Field(default_factory=dict)
    flat_output: bool = False

    def output_subpath(self, locale: str) -> str:
        """Directory, relative to the output root, that receives ``locale``."""
        if self.flat_output:
            return ""
        options = self.locales.get(locale)
        if options is not None and options.subpath is not None:
            return options.subpath
        return locale

    def output_paths(self, base_output_path: Path) -> list[Path]:
        """One output directory per inlined locale, without duplicates."""
        paths = [
            base_output_path / self.output_subpath(locale)
            for locale in self.inline_locales
        ]
        return list(dict.fromkeys(paths))

    def translations_for(self, locale: str) -> dict[str, str]:
        options = self.locales.get(locale)
        return dict(options.translation) if options is not None else {}

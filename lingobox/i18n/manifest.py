"""Loading of emitted-file manifests and translation files."""

import logging
from pathlib import Path

from pydantic import ValidationError

from lingobox.adapters import create_file_adapter
from lingobox.core.errors import FileSystemError, ManifestError
from lingobox.i18n.models import EmittedArtifact
from lingobox.protocols import FileAdapterProtocol


logger = logging.getLogger(__name__)


def load_emitted_files(
    manifest_path: Path, file_adapter: FileAdapterProtocol | None = None
) -> list[EmittedArtifact]:
    """Load the artifacts listed in a build manifest.

    The manifest is either a JSON list of artifacts or an object with a
    ``files`` list. Each artifact has ``file`` and optionally ``name``,
    ``extension`` and ``asset``.

    Raises:
        ManifestError: If the manifest cannot be read or is malformed
    """
    adapter = file_adapter or create_file_adapter()
    try:
        data = adapter.read_json(manifest_path)
    except FileSystemError as e:
        raise ManifestError(f"Unable to read manifest: {e}") from e

    entries = data.get("files") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ManifestError(
            f"Manifest {manifest_path} must contain a list of emitted files"
        )

    try:
        artifacts = [EmittedArtifact.model_validate(entry) for entry in entries]
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest entry in {manifest_path}: {e}") from e

    logger.debug("Loaded %d emitted file(s) from %s", len(artifacts), manifest_path)
    return artifacts


def load_translation_file(
    path: Path, file_adapter: FileAdapterProtocol | None = None
) -> tuple[str | None, dict[str, str]]:
    """Load a JSON translation file.

    Format: ``{"locale": "fr", "translations": {"messageId": "text"}}``.

    Returns:
        The declared locale (if any) and the message table

    Raises:
        ManifestError: If the file cannot be read or is malformed
    """
    adapter = file_adapter or create_file_adapter()
    try:
        data = adapter.read_json(path)
    except FileSystemError as e:
        raise ManifestError(f"Unable to read translation file: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("translations"), dict):
        raise ManifestError(
            f"Translation file {path} must be an object with a 'translations' object"
        )

    translations = data["translations"]
    invalid = [key for key, value in translations.items() if not isinstance(value, str)]
    if invalid:
        raise ManifestError(
            f"Translation file {path} has non-string messages: {', '.join(invalid)}"
        )

    locale = data.get("locale")
    return (locale if isinstance(locale, str) else None), dict(translations)

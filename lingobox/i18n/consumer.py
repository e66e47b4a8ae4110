"""One-shot consumption of emitted scripts into inline requests."""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from lingobox.adapters import create_file_adapter
from lingobox.core.errors import ConsumptionError, FileSystemError
from lingobox.i18n.models import (
    SET_LOCALE_ENTRY_NAMES,
    SOURCE_MAP_SUFFIX,
    EmittedArtifact,
    InlineRequest,
    MissingTranslationPolicy,
)
from lingobox.protocols import FileAdapterProtocol


logger = logging.getLogger(__name__)


@contextmanager
def consume_file(file_adapter: FileAdapterProtocol, path: Path) -> Iterator[str]:
    """Read ``path`` and delete it once the body of the block has run.

    The delete is only attempted after a successful read. A failed delete is
    logged and never raised, the content has already been captured.
    """
    content = file_adapter.read_text(path)
    try:
        yield content
    finally:
        try:
            file_adapter.remove_file(path)
        except FileSystemError as e:
            logger.debug("Unable to delete i18n temporary file [%s]: %s", path, e)


class ArtifactConsumer:
    """Turn eligible artifacts into inline requests, consuming their files.

    Every path read here is recorded in ``consumed_paths`` so that the
    pass-through copy never duplicates it.
    """

    def __init__(
        self,
        emitted_path: Path,
        output_path: Path,
        es5: bool = False,
        missing_translation: MissingTranslationPolicy = MissingTranslationPolicy.WARNING,
        file_adapter: FileAdapterProtocol | None = None,
    ) -> None:
        self.emitted_path = emitted_path
        self.output_path = output_path
        self.es5 = es5
        self.missing_translation = MissingTranslationPolicy(missing_translation)
        self.file_adapter = file_adapter or create_file_adapter()
        self.consumed_paths: set[Path] = set()

    def consume(self, artifact: EmittedArtifact) -> InlineRequest:
        """Read and delete one artifact (and its map) and build its request.

        Raises:
            ConsumptionError: If the script itself cannot be read
        """
        original_path = self.emitted_path / artifact.file

        try:
            with consume_file(self.file_adapter, original_path) as code:
                self.consumed_paths.add(original_path)
        except FileSystemError as e:
            raise ConsumptionError(
                f"Unable to read emitted file '{artifact.file}': {e.cause}",
                {"path": str(original_path)},
            ) from e

        map_path = original_path.with_name(original_path.name + SOURCE_MAP_SUFFIX)
        request = InlineRequest(
            filename=artifact.file,
            code=code,
            map=self._consume_map(map_path),
            es5=self.es5,
            output_path=self.output_path,
            missing_translation=self.missing_translation,
            set_locale=artifact.name in SET_LOCALE_ENTRY_NAMES,
        )

        logger.debug("i18n file queued for processing: %s", request.filename)
        return request

    def _consume_map(self, map_path: Path) -> str | None:
        try:
            with consume_file(self.file_adapter, map_path) as source_map:
                self.consumed_paths.add(map_path)
                return source_map
        except FileSystemError as e:
            if isinstance(e.cause, FileNotFoundError):
                return None
            logger.warning(
                "Unable to read source map [%s], continuing without it: %s",
                map_path,
                e,
            )
            # A stale map must not be passed through next to the inlined script
            self.consumed_paths.add(map_path)
            try:
                self.file_adapter.remove_file(map_path)
            except FileSystemError as remove_error:
                logger.debug(
                    "Unable to delete i18n temporary file [%s]: %s",
                    map_path,
                    remove_error,
                )
            return None

    def consume_all(
        self, artifacts: Iterable[EmittedArtifact]
    ) -> tuple[list[InlineRequest], frozenset[Path]]:
        """Consume every artifact; returns the requests and the consumed paths."""
        requests = [self.consume(artifact) for artifact in artifacts]
        return requests, frozenset(self.consumed_paths)


def create_artifact_consumer(
    emitted_path: Path,
    output_path: Path,
    es5: bool = False,
    missing_translation: MissingTranslationPolicy = MissingTranslationPolicy.WARNING,
    file_adapter: FileAdapterProtocol | None = None,
) -> ArtifactConsumer:
    """Create artifact consumer instance."""
    return ArtifactConsumer(
        emitted_path, output_path, es5, missing_translation, file_adapter
    )

"""Selection of emitted artifacts that need locale inlining."""

import logging
from collections.abc import Iterable

from lingobox.i18n.models import SCRIPT_EXTENSION, EmittedArtifact


logger = logging.getLogger(__name__)


class ArtifactClassifier:
    """Split emitted artifacts into inline-eligible scripts and pass-through files.

    An artifact is eligible when it is not an asset, carries the script
    extension, and is not one of the excluded entry points (auxiliary bundles
    such as runtime-only scripts that must never be rewritten).
    """

    def __init__(
        self,
        excluded_entry_points: Iterable[str] = (),
        script_extension: str = SCRIPT_EXTENSION,
    ) -> None:
        self.excluded_entry_points = frozenset(excluded_entry_points)
        self.script_extension = script_extension

    def is_eligible(self, artifact: EmittedArtifact) -> bool:
        if artifact.asset:
            return False
        if artifact.extension != self.script_extension:
            return False
        return not (artifact.name and artifact.name in self.excluded_entry_points)

    def classify(self, artifacts: Iterable[EmittedArtifact]) -> list[EmittedArtifact]:
        """Return the artifacts that must be inlined."""
        eligible = [artifact for artifact in artifacts if self.is_eligible(artifact)]
        logger.debug("Classified %d artifact(s) for inlining", len(eligible))
        return eligible

    def passthrough(
        self, artifacts: Iterable[EmittedArtifact]
    ) -> list[EmittedArtifact]:
        """Return the artifacts that are copied unchanged."""
        return [artifact for artifact in artifacts if not self.is_eligible(artifact)]


def create_artifact_classifier(
    excluded_entry_points: Iterable[str] = (),
) -> ArtifactClassifier:
    """Create artifact classifier instance."""
    return ArtifactClassifier(excluded_entry_points)

"""Copy of non-inlined emitted files into every locale output directory."""

import logging
import time
from collections.abc import Iterable
from pathlib import Path

from lingobox.adapters import create_file_adapter
from lingobox.models.results import CopyResult
from lingobox.protocols import FileAdapterProtocol


logger = logging.getLogger(__name__)


class PassthroughReconciler:
    """Copy every remaining emitted file to each output root.

    Files consumed for inlining are excluded, so together with the inliner's
    outputs each output root receives every emitted file exactly once.
    """

    def __init__(self, file_adapter: FileAdapterProtocol | None = None) -> None:
        self.file_adapter = file_adapter or create_file_adapter()

    def reconcile(
        self,
        intermediate_root: Path,
        output_roots: Iterable[Path],
        consumed_paths: Iterable[Path] = (),
    ) -> CopyResult:
        """Copy pass-through files.

        Args:
            intermediate_root: Directory holding the emitted files
            output_roots: Locale output directories to populate
            consumed_paths: Paths already consumed, absolute or relative to
                ``intermediate_root``

        Raises:
            FileSystemError: If any file cannot be copied
        """
        start_time = time.time()
        result = CopyResult()
        roots = list(output_roots)
        ignored = {self._relative(intermediate_root, p) for p in consumed_paths}

        for src_file in self.file_adapter.iter_files(intermediate_root):
            rel_path = src_file.relative_to(intermediate_root)
            if rel_path in ignored:
                result.skipped_paths.append(rel_path)
                continue

            for output_root in roots:
                result.bytes_copied += self.file_adapter.copy_file(
                    src_file, output_root / rel_path
                )
                result.files_copied += 1
            result.copied_paths.append(rel_path)

        result.elapsed_time = time.time() - start_time
        logger.debug(
            "Copied %d pass-through file(s) into %d output location(s) in %.2f seconds (%.1f MB/s)",
            len(result.copied_paths),
            len(roots),
            result.elapsed_time,
            result.speed_mbps,
        )
        return result

    @staticmethod
    def _relative(root: Path, path: Path) -> Path:
        try:
            return path.relative_to(root)
        except ValueError:
            # Already relative to the intermediate root
            return path


def create_passthrough_reconciler(
    file_adapter: FileAdapterProtocol | None = None,
) -> PassthroughReconciler:
    """Create pass-through reconciler instance."""
    return PassthroughReconciler(file_adapter)

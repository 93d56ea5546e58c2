"""Writing project bundles to disk."""

import logging
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path

from decorpack.core.assembler import ProjectBundle

logger = logging.getLogger(__name__)

# Fixed entry timestamp so equal bundles produce byte-identical archives.
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


class ArchiveWriter(ABC):
    """Abstract sink for assembled projects."""

    @abstractmethod
    def write(self, project: ProjectBundle, destination: Path) -> Path:
        """Persist a bundle.

        Args:
            project: Assembled project files
            destination: Directory to write into

        Returns:
            Path of the written archive
        """
        ...


class ZipArchiveWriter(ArchiveWriter):
    """Writes ``{Project}_Project.zip`` with every file under a ``{Project}/`` folder."""

    def write(self, project: ProjectBundle, destination: Path) -> Path:
        if destination.exists() and not destination.is_dir():
            raise NotADirectoryError(f"Output path is not a directory: {destination}")
        destination.mkdir(parents=True, exist_ok=True)

        archive_path = destination / project.archive_name
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for relative_path, content in project.files.items():
                info = zipfile.ZipInfo(f"{project.project_name}/{relative_path}", _ZIP_EPOCH)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                archive.writestr(info, content)

        logger.info("Wrote %d files to %s", len(project.files), archive_path)
        return archive_path

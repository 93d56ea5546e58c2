"""Tests for writing project archives."""

import zipfile
from pathlib import Path

import pytest

from decorpack.core.archive import ZipArchiveWriter
from decorpack.core.assembler import bundle
from decorpack.core.types import Item, Pack


@pytest.fixture
def project():
    pack = Pack(id="com.jane.cozy", display_name="Cozy Pack", items=(Item(internal_key="lamp"),))
    return bundle(pack, year=2024)


class TestZipArchiveWriter:
    """Tests for the zip writer."""

    def test_entries_under_project_folder(self, tmp_path: Path, project) -> None:
        path = ZipArchiveWriter().write(project, tmp_path / "dist")

        assert path == tmp_path / "dist" / "CozyPack_Project.zip"
        with zipfile.ZipFile(path) as archive:
            names = archive.namelist()
            assert names == [f"CozyPack/{name}" for name in project.paths()]
            assert archive.read("CozyPack/src/CozyPackPlugin.cs") == project.files[
                "src/CozyPackPlugin.cs"
            ]

    def test_identical_bundles_give_identical_archives(self, tmp_path: Path, project) -> None:
        first = ZipArchiveWriter().write(project, tmp_path / "one")
        second = ZipArchiveWriter().write(project, tmp_path / "two")

        assert first.read_bytes() == second.read_bytes()

    def test_destination_must_be_directory(self, tmp_path: Path, project) -> None:
        blocker = tmp_path / "file.txt"
        blocker.write_text("x", encoding="utf-8")

        with pytest.raises(NotADirectoryError):
            ZipArchiveWriter().write(project, blocker)

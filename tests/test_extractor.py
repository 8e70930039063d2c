import asyncio
import zipfile

import pytest

from modextract.exceptions import ArchiveError
from modextract.extractor import ArchiveExtractor
from tests.conftest import make_pack, sample_manifest


def test_extracts_next_to_archive(tmp_path):
    archive = make_pack(tmp_path / "downloads" / "Pack-1.0.zip", sample_manifest())

    working_dir = asyncio.run(ArchiveExtractor().extract(str(archive)))

    assert working_dir == archive.parent.resolve()
    assert (working_dir / "manifest.json").is_file()
    assert (working_dir / "modlist.html").is_file()
    assert (working_dir / "overrides" / "config" / "test.cfg").is_file()


def test_skip_extract_reuses_directory(tmp_path):
    archive = tmp_path / "Pack.zip"

    working_dir = asyncio.run(ArchiveExtractor().extract(str(archive), skip_extract=True))

    assert working_dir == tmp_path.resolve()
    assert not (tmp_path / "manifest.json").exists()


def test_missing_archive(tmp_path):
    with pytest.raises(ArchiveError):
        asyncio.run(ArchiveExtractor().extract(str(tmp_path / "nope.zip")))


def test_not_a_zip(tmp_path):
    bogus = tmp_path / "bogus.zip"
    bogus.write_text("definitely not a zip")

    with pytest.raises(ArchiveError):
        asyncio.run(ArchiveExtractor().extract(str(bogus)))


def test_refuses_members_outside_working_dir(tmp_path):
    archive = tmp_path / "inner" / "evil.zip"
    archive.parent.mkdir()
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("../escaped.txt", "x")

    with pytest.raises(ArchiveError):
        asyncio.run(ArchiveExtractor().extract(str(archive)))
    assert not (tmp_path / "escaped.txt").exists()


@pytest.mark.parametrize(
    "error",
    [
        RuntimeError("File 'manifest.json' is encrypted, password required for extraction"),
        NotImplementedError("That compression method is not supported"),
    ],
)
def test_unreadable_members_become_archive_error(tmp_path, monkeypatch, error):
    archive = make_pack(tmp_path / "Pack.zip", sample_manifest())

    def fail(self, path=None, members=None, pwd=None):
        raise error

    monkeypatch.setattr(zipfile.ZipFile, "extractall", fail)

    with pytest.raises(ArchiveError):
        asyncio.run(ArchiveExtractor().extract(str(archive)))

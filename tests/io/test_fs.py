import os
import stat

import pytest

from bmcbuilder.io import DiskFileSystem
from bmcbuilder.exceptions import BMCBPathExistsError, BMCBPathNotFoundError


@pytest.fixture
def fs():
    return DiskFileSystem()


class TestDiskFileSystem:

    def test_write_creates_parents_and_reads_back(self, fs, tmp_path):
        path = tmp_path / "a" / "b" / "build.sh"
        fs.write_text(path, "#!/bin/bash\n")
        assert fs.read_text(path) == "#!/bin/bash\n"
        assert fs.exists(path)
        assert fs.is_dir(tmp_path / "a" / "b")

    def test_read_missing_file_raises_error(self, fs, tmp_path):
        with pytest.raises(BMCBPathNotFoundError):
            fs.read_text(tmp_path / "missing")

    def test_mkdir_is_idempotent_by_default(self, fs, tmp_path):
        path = tmp_path / "x" / "y"
        fs.mkdir(path)
        fs.mkdir(path)
        assert fs.is_dir(path)

    def test_mkdir_without_exist_ok_raises_error(self, fs, tmp_path):
        with pytest.raises(BMCBPathExistsError):
            fs.mkdir(tmp_path, exist_ok=False)

    def test_chmod(self, fs, tmp_path):
        path = tmp_path / "build.sh"
        path.write_text("")
        fs.chmod(path, 0o755)
        assert stat.S_IMODE(path.stat().st_mode) == 0o755

    def test_chown_to_current_user(self, fs, tmp_path):
        fs.chown(tmp_path, os.getuid(), os.getgid())
        assert tmp_path.stat().st_uid == os.getuid()

    def test_chmod_missing_path_raises_error(self, fs, tmp_path):
        with pytest.raises(BMCBPathNotFoundError):
            fs.chmod(tmp_path / "missing", 0o755)


class TestSymlink:

    def test_link_may_dangle(self, fs, tmp_path):
        link = tmp_path / "deploy"
        fs.symlink(tmp_path / "xtrct" / "deploy", link)
        assert link.is_symlink()
        assert os.readlink(link) == str(tmp_path / "xtrct" / "deploy")

    def test_existing_link_is_replaced(self, fs, tmp_path):
        link = tmp_path / "deploy"
        fs.symlink(tmp_path / "old", link)
        fs.symlink(tmp_path / "new", link)
        assert os.readlink(link) == str(tmp_path / "new")

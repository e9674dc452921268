"""path_utils 测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from derpy.core.exceptions import FailedToCreateDirectoryError, UnableToChangeDirError
from derpy.utils.path_utils import determine_cwd, ensure_dir, resolve_work_dir


class TestDetermineCwd:
    def test_default_is_process_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert determine_cwd(None).resolve() == tmp_path.resolve()

    def test_absolute_override(self, tmp_path: Path) -> None:
        assert determine_cwd(str(tmp_path)) == tmp_path

    def test_relative_override_joined(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert determine_cwd("proj").resolve() == (tmp_path / "proj").resolve()


class TestEnsureDir:
    def test_creates_recursively(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "c"
        ensure_dir(target)
        ensure_dir(target)  # 已存在不报错
        assert target.is_dir()

    def test_path_is_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "deps"
        blocker.write_text("x")
        with pytest.raises(FailedToCreateDirectoryError) as exc_info:
            ensure_dir(blocker)
        assert exc_info.value.code == "FAILED_TO_CREATE_DIRECTORY"


class TestResolveWorkDir:
    def test_existing_dir(self, tmp_path: Path) -> None:
        assert resolve_work_dir(tmp_path) == str(tmp_path)

    def test_missing_dir(self, tmp_path: Path) -> None:
        with pytest.raises(UnableToChangeDirError, match="不存在"):
            resolve_work_dir(tmp_path / "nope")

    def test_not_a_dir(self, tmp_path: Path) -> None:
        f = tmp_path / "file"
        f.write_text("x")
        with pytest.raises(UnableToChangeDirError, match="不是目录"):
            resolve_work_dir(f)

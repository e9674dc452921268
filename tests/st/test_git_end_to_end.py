"""系统测试 — 使用真实 git 和本地仓库走完 拉取 / 升级 / 锁定 全流程"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from derpy.core.acquire import (
    Acquire,
    Acquired,
    Ignored,
    LockTo,
    NoChange,
    Restored,
    Upgrade,
    UpgradedTo,
    acquire,
)
from derpy.core.models import Dependency
from derpy.services.acquire_service import AcquireService
from derpy.services.manifest_service import ManifestService

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git 未安装")

_IDENTITY = ["-c", "user.name=derpy", "-c", "user.email=derpy@example.com"]


def _git(repo: Path, *args: str) -> str:
    r = subprocess.run(
        ["git", *_IDENTITY, *args], cwd=str(repo),
        capture_output=True, text=True, check=True,
    )
    return r.stdout.strip()


def _commit(repo: Path, content: str) -> str:
    (repo / "README").write_text(content)
    _git(repo, "add", "README")
    _git(repo, "commit", "-q", "-m", content)
    return _git(repo, "rev-parse", "HEAD")


@pytest.fixture()
def upstream(tmp_path: Path) -> Path:
    repo = tmp_path / "upstream"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    return repo


class TestGitLifecycle:
    def test_acquire_upgrade_lock(self, tmp_path: Path, upstream: Path, registry) -> None:
        first = _commit(upstream, "one")
        dep = Dependency("foo", "git", str(upstream), "main", str(tmp_path / "deps"))

        assert acquire(dep, Acquire(), registry=registry) == Acquired(first)
        assert (tmp_path / "deps" / "foo" / "README").read_text() == "one"
        assert acquire(dep, Acquire(), registry=registry) == Ignored(first)

        second = _commit(upstream, "two")
        assert acquire(dep, Upgrade(), registry=registry) == UpgradedTo(first, second)
        assert acquire(dep, Upgrade(), registry=registry) == NoChange(second)

        assert acquire(dep, LockTo(first), registry=registry) == Restored(second, first)
        assert acquire(dep, LockTo(first), registry=registry) == NoChange(first)
        assert (tmp_path / "deps" / "foo" / "README").read_text() == "one"


class TestProjectWorkflow:
    def test_init_add_acquire(self, tmp_path: Path, upstream: Path, registry) -> None:
        rev = _commit(upstream, "one")
        project = tmp_path / "project"
        project.mkdir()

        manifest = ManifestService(project, registry=registry)
        manifest.init()
        manifest.add("git", "foo", str(upstream))

        svc = AcquireService(project, registry=registry, echo=lambda _: None)
        report = svc.acquire_all()
        assert report.outcomes == [("foo", Acquired(rev))]
        assert (project / "deps" / "foo" / "README").is_file()

        # 再次 acquire 走锁定版本，无变化
        assert svc.acquire_all().outcomes == [("foo", NoChange(rev))]

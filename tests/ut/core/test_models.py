"""核心数据模型 / 清单读写测试"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from derpy.core.derpyfile import load_config, load_lock, save_config
from derpy.core.exceptions import ConfigError, ConfigNotFoundError
from derpy.core.models import DerpyFile, Dependency


def _dep(name: str = "foo", **kw: object) -> Dependency:
    data = {
        "name": name, "vcs": "git", "url": f"https://example.com/{name}.git",
        "version": "main", "target": "deps/",
    }
    data.update(kw)
    return Dependency(**data)  # type: ignore[arg-type]


class TestDependency:
    def test_full_path(self) -> None:
        assert _dep().full_path == Path("deps") / "foo"

    def test_macro_map(self) -> None:
        dep = _dep(options={"depth": "1", "remote": "upstream"})
        assert dep.build_macro_map() == {
            "DEP_NAME": "foo",
            "DEP_URL": "https://example.com/foo.git",
            "DEP_VERSION": "main",
            "DEP_OPT_depth": "1",
            "DEP_OPT_remote": "upstream",
        }

    def test_macro_map_fresh_each_call(self) -> None:
        dep = _dep()
        dep.build_macro_map()["DEP_VERSION"] = "other"
        assert dep.build_macro_map()["DEP_VERSION"] == "main"

    def test_from_dict_missing_field(self) -> None:
        with pytest.raises(ConfigError, match="url"):
            Dependency.from_dict({"name": "foo", "vcs": "git", "version": "x", "target": "d"})

    def test_from_dict_bad_options(self) -> None:
        data = {**_dep().to_dict(), "options": ["a"]}
        with pytest.raises(ConfigError, match="options"):
            Dependency.from_dict(data)

    def test_from_dict_options_optional(self) -> None:
        data = _dep().to_dict()
        del data["options"]
        assert Dependency.from_dict(data).options == {}


class TestDerpyFile:
    def test_save_load_sorted(self, tmp_path: Path) -> None:
        path = tmp_path / "derpy.yml"
        config = DerpyFile(dependencies={"zeta": _dep("zeta"), "alpha": _dep("alpha")})
        save_config(config, path)

        loaded = load_config(path)
        assert list(loaded.dependencies) == ["alpha", "zeta"]
        assert loaded.dependencies["zeta"] == _dep("zeta")

    def test_load_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "derpy.yml")

    def test_load_lock_missing_is_empty(self, tmp_path: Path) -> None:
        assert load_lock(tmp_path / "derpy.lock.yml") == DerpyFile()

    def test_load_broken(self, tmp_path: Path) -> None:
        path = tmp_path / "derpy.yml"
        path.write_text("dependencies: {foo: [")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_load_json_manifest(self, tmp_path: Path) -> None:
        """旧的 JSON 清单可以直接读取"""
        path = tmp_path / "derpy.json"
        path.write_text(json.dumps({"dependencies": {"foo": _dep().to_dict()}}))
        assert load_config(path).dependencies["foo"].url == "https://example.com/foo.git"

    def test_empty_manifest(self, tmp_path: Path) -> None:
        path = tmp_path / "derpy.yml"
        save_config(DerpyFile(), path)
        assert load_config(path).dependencies == {}

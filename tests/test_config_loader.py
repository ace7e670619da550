"""Tests for config_loader.py: interpolation, !include, discovery, merging."""

import textwrap

import pytest
import yaml

from goiki.config_loader import (
    _interpolate_recursive,
    discover_config_files,
    interpolate_env_vars,
    load_hierarchical_config,
    load_yaml_file,
)


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Point CWD and HOME at empty temporary directories."""
    cwd = tmp_path / "project"
    home = tmp_path / "home"
    cwd.mkdir()
    home.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.setenv("HOME", str(home))
    return cwd, home


class TestInterpolateEnvVars:
    def test_replaces_set_var(self, monkeypatch):
        monkeypatch.setenv("WIKI_ROOT", "/srv/wiki")
        assert interpolate_env_vars("${WIKI_ROOT}/pages") == "/srv/wiki/pages"

    def test_unset_var_replaced_with_empty(self, monkeypatch):
        monkeypatch.delenv("UNSET_VAR_XYZ", raising=False)
        assert interpolate_env_vars("${UNSET_VAR_XYZ}") == ""

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("UNSET_VAR_XYZ", raising=False)
        assert interpolate_env_vars("${UNSET_VAR_XYZ:-md}") == "md"

    def test_default_ignored_when_set(self, monkeypatch):
        monkeypatch.setenv("EXT", "txt")
        assert interpolate_env_vars("${EXT:-md}") == "txt"

    def test_recursive(self, monkeypatch):
        monkeypatch.setenv("EXT", "txt")
        data = {"wiki": {"file_extension": "${EXT}", "init": True}, "l": ["${EXT}", 3]}

        assert _interpolate_recursive(data) == {
            "wiki": {"file_extension": "txt", "init": True},
            "l": ["txt", 3],
        }


class TestLoadYamlFile:
    def test_plain(self, tmp_path):
        path = _write(tmp_path / "c.yml", """\
            wiki:
              data_dir: /srv/wiki
            """)

        assert load_yaml_file(path) == {"wiki": {"data_dir": "/srv/wiki"}}

    def test_include_relative(self, tmp_path):
        _write(tmp_path / "parts" / "wiki.yml", """\
            data_dir: /srv/wiki
            file_extension: txt
            """)
        path = _write(tmp_path / "c.yml", """\
            wiki: !include parts/wiki.yml
            """)

        assert load_yaml_file(path) == {
            "wiki": {"data_dir": "/srv/wiki", "file_extension": "txt"}
        }

    def test_missing_include(self, tmp_path):
        path = _write(tmp_path / "c.yml", "wiki: !include nope.yml\n")

        with pytest.raises(FileNotFoundError, match="Include file not found"):
            load_yaml_file(path)

    def test_circular_include(self, tmp_path):
        _write(tmp_path / "a.yml", "b: !include b.yml\n")
        _write(tmp_path / "b.yml", "a: !include a.yml\n")

        with pytest.raises(ValueError, match="Circular include detected"):
            load_yaml_file(tmp_path / "a.yml")

    def test_safe_loader(self, tmp_path):
        path = _write(tmp_path / "c.yml", "x: !!python/object/apply:os.system ['true']\n")

        with pytest.raises(yaml.YAMLError):
            load_yaml_file(path)


class TestDiscovery:
    def test_none(self, isolated_dirs):
        assert discover_config_files() == []
        assert load_hierarchical_config() == {}

    def test_order(self, isolated_dirs, tmp_path, monkeypatch):
        cwd, home = isolated_dirs
        explicit = _write(tmp_path / "explicit.yml", "a: 1\n")
        project = _write(cwd / ".goiki" / "config.yml", "a: 2\n")
        global_ = _write(home / ".config" / "goiki" / "config.yml", "a: 3\n")
        monkeypatch.setenv("GOIKI_CONFIG", str(explicit))

        found = discover_config_files()

        assert [p.resolve() for p in found] == [
            explicit.resolve(), project.resolve(), global_.resolve()
        ]

    def test_missing_explicit_path_ignored(self, isolated_dirs, tmp_path, monkeypatch):
        monkeypatch.setenv("GOIKI_CONFIG", str(tmp_path / "absent.yml"))

        assert discover_config_files() == []


class TestLoadHierarchicalConfig:
    def test_project_wins_per_top_level_key(self, isolated_dirs):
        cwd, home = isolated_dirs
        _write(home / ".config" / "goiki" / "config.yml", """\
            wiki:
              data_dir: /global
            logging:
              level: DEBUG
            """)
        _write(cwd / ".goiki" / "config.yml", """\
            wiki:
              data_dir: /project
            """)

        raw = load_hierarchical_config()

        assert raw == {"wiki": {"data_dir": "/project"}, "logging": {"level": "DEBUG"}}

    def test_interpolation_after_merge(self, isolated_dirs, monkeypatch):
        cwd, _ = isolated_dirs
        monkeypatch.setenv("WIKI_DIR", "/from/env")
        monkeypatch.delenv("WIKI_NAME", raising=False)
        _write(cwd / ".goiki" / "config.yml", """\
            wiki:
              data_dir: ${WIKI_DIR}
              name: ${WIKI_NAME:-Goiki}
            """)

        assert load_hierarchical_config() == {
            "wiki": {"data_dir": "/from/env", "name": "Goiki"}
        }

    def test_non_dict_root_skipped(self, isolated_dirs, caplog):
        cwd, _ = isolated_dirs
        _write(cwd / ".goiki" / "config.yml", "- a\n- b\n")

        assert load_hierarchical_config() == {}
        assert "non-dict root" in caplog.text

"""
Tests for the JSON registry store.
"""

import json

import pytest

from adapters.registry_store import JsonRegistryStore
from core.domain.errors import ConfigLoadError
from core.domain.models import ProjectRecord, Registry
from core.interfaces.registry import RegistryStorage

from conftest import write_registry


def test_store_satisfies_protocol(tmp_path):
    assert isinstance(JsonRegistryStore(tmp_path / "config.json"), RegistryStorage)


def test_load_parses_registry(tmp_path, recorded):
    path = write_registry(
        tmp_path / "config.json",
        {"projects": {"foo": {"Repo": "foo-repo", "Version": "v1.0", "Origin": "./out/foo"}}},
    )
    registry = JsonRegistryStore(path, recorded.hooks()).load()

    assert registry.get_project("foo").repo == "foo-repo"
    assert recorded.messages == []


def test_numeric_version_keeps_whole_registry(tmp_path, recorded):
    path = write_registry(
        tmp_path / "config.json",
        {
            "projects": {
                "foo": {"Repo": "foo-repo", "Version": 2, "Origin": "./out/foo"},
                "bar": {"Repo": "bar-repo", "Version": "v0.1", "Origin": "./out/bar"},
            }
        },
    )
    registry = JsonRegistryStore(path, recorded.hooks()).load()

    assert set(registry.projects) == {"foo", "bar"}
    assert registry.get_project("foo").version == "2"
    assert recorded.of("error") == []


def test_missing_file_falls_back_to_empty_registry(tmp_path, recorded):
    registry = JsonRegistryStore(tmp_path / "missing.json", recorded.hooks()).load()

    assert registry.projects == {}
    assert recorded.of("error")[0].startswith("Failed to load config file:")
    assert recorded.of("warning") == ["Using default empty configuration."]


def test_malformed_json_falls_back_to_empty_registry(tmp_path, recorded):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    registry = JsonRegistryStore(path, recorded.hooks()).load()

    assert registry.projects == {}
    assert len(recorded.of("error")) == 1


def test_wrong_shape_falls_back_to_empty_registry(tmp_path, recorded):
    path = write_registry(tmp_path / "config.json", {"projects": ["foo"]})

    assert JsonRegistryStore(path, recorded.hooks()).load().projects == {}
    assert recorded.of("warning") == ["Using default empty configuration."]


def test_load_or_raise_raises_config_load_error(tmp_path):
    with pytest.raises(ConfigLoadError):
        JsonRegistryStore(tmp_path / "missing.json").load_or_raise()


def test_save_overwrites_document(tmp_path):
    path = write_registry(tmp_path / "config.json", {"projects": {"old": {"Repo": "old"}}})
    registry = Registry(projects={"new": ProjectRecord(repo="n", version="v1", origin="./n")})

    assert JsonRegistryStore(path).save(registry) is True

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "projects": {"new": {"Repo": "n", "Version": "v1", "Origin": "./n"}}
    }


def test_save_failure_is_reported_not_raised(tmp_path, recorded):
    # The target is a directory, so writing the file fails.
    path = tmp_path / "config.json"
    path.mkdir()

    assert JsonRegistryStore(path, recorded.hooks()).save(Registry()) is False
    assert recorded.of("error")[0].startswith("Error updating config file:")

"""Tests for configuration loading, merging and option building."""

from pathlib import Path

import pytest
import yaml

from globals_transform.compute_options_hash import (
    compute_options_hash,
    describe_options,
)
from globals_transform.deep_merge import deep_merge
from globals_transform.errors import ConfigurationError
from globals_transform.load_config import load_config
from globals_transform.naming_policy import ComputedPath, FixedRoot
from globals_transform.transform_options import TransformOptions


def naming_policy_for_tests(
    context: object, path: str, name: str | None, wildcard: bool
) -> str:
    """Naming function loaded by import string in the tests below."""
    return "custom.path"


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    merged = deep_merge(base, update)
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    merged = deep_merge(base, update)
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    base = {"extensions": [".js"]}
    update = {"extensions": [".mjs"]}
    assert deep_merge(base, update) == {"extensions": [".mjs"]}


def test_deep_merge_externals_additive() -> None:
    """Verify that externals are merged additively and can be removed."""
    base = {"externals": {"jquery": "jQuery", "lodash": "_"}}
    update = {"externals": {"react": "React", "lodash": None}}
    merged = deep_merge(base, update)
    assert merged["externals"] == {"jquery": "jQuery", "react": "React"}
    assert base["externals"] == {"jquery": "jQuery", "lodash": "_"}


def test_options_hash_ignores_externals_order() -> None:
    """Verify that the options hash is stable regardless of key order."""
    first = TransformOptions.from_config(
        {"namespace_root": "app", "externals": {"jquery": "jQuery", "react": "React"}}
    )
    second = TransformOptions.from_config(
        {"namespace_root": "app", "externals": {"react": "React", "jquery": "jQuery"}}
    )
    assert compute_options_hash(first) == compute_options_hash(second)


def test_options_hash_tracks_output_shaping_options() -> None:
    """Verify that options changing the output change the hash."""
    base = TransformOptions.from_config({"namespace_root": "app"})
    dropped = TransformOptions.from_config(
        {"namespace_root": "app", "export_all": "drop"}
    )
    renamed = TransformOptions.from_config({"namespace_root": "lib"})
    hashes = {compute_options_hash(o) for o in (base, dropped, renamed)}
    assert len(hashes) == 3


def test_describe_options_names_naming_function() -> None:
    """Verify that a naming function is described by its import path."""
    options = TransformOptions.from_config(
        {"naming_policy": f"{__name__}:naming_policy_for_tests"}
    )
    description = describe_options(options)
    assert description["naming_policy"] == f"{__name__}:naming_policy_for_tests"
    assert "namespace_root" not in description


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config["export_all"] == "copy"
    assert config["externals"] == {}
    assert config["namespace_root"] is None


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "config.yml"
    config_data = {"namespace_root": "app", "externals": {"jquery": "jQuery"}}
    config_file.write_text(yaml.dump(config_data))

    loaded = load_config(str(config_file))
    assert loaded["namespace_root"] == "app"
    assert loaded["externals"] == {"jquery": "jQuery"}
    assert loaded["transform_only_modules"] is False  # Default


def test_load_config_does_not_share_defaults(tmp_path: Path) -> None:
    """Verify that loaded configs can be modified without touching defaults."""
    config = load_config(None)
    config["externals"]["x"] = "X"
    assert load_config(None)["externals"] == {}


def test_load_config_missing_file() -> None:
    """Verify that an explicit but missing config file is an error."""
    with pytest.raises(ConfigurationError, match="not found"):
        load_config("/nonexistent/config.yml")


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    """Verify that a YAML list is not accepted as configuration."""
    config_file = tmp_path / "config.yml"
    config_file.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError, match="mapping"):
        load_config(str(config_file))


def test_options_from_config() -> None:
    """Verify that options are built and tagged from a config mapping."""
    options = TransformOptions.from_config(
        {
            "namespace_root": "app",
            "externals": {"jquery": "jQuery"},
            "transform_only_modules": True,
            "export_all": "drop",
        }
    )
    assert options.naming_policy == FixedRoot("app")
    assert options.externals == {"jquery": "jQuery"}
    assert options.transform_only_modules is True
    assert options.export_all == "drop"


def test_options_require_namespace_root() -> None:
    """Verify that a namespace root or naming policy is mandatory."""
    with pytest.raises(ConfigurationError, match="namespace_root"):
        TransformOptions.from_config(load_config(None))


def test_options_reject_unknown_export_all() -> None:
    """Verify that only the known export-all policies are accepted."""
    with pytest.raises(ConfigurationError, match="export_all"):
        TransformOptions.from_config({"namespace_root": "app", "export_all": "merge"})


def test_options_load_naming_policy_by_import_string() -> None:
    """Verify that a naming function can be referenced from configuration."""
    options = TransformOptions.from_config(
        {"naming_policy": f"{__name__}:naming_policy_for_tests"}
    )
    assert options.naming_policy == ComputedPath(naming_policy_for_tests)


def test_options_reject_bad_naming_policy() -> None:
    """Verify that unloadable naming policies are configuration errors."""
    with pytest.raises(ConfigurationError):
        TransformOptions.from_config({"naming_policy": "no_such_module_xyz:policy"})
    with pytest.raises(ConfigurationError):
        TransformOptions.from_config({"naming_policy": "missing-colon"})

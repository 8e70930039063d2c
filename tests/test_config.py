import json

import pytest

from modextract.config import CURSEFORGE_DOWNLOAD_URL, ExtractorConfig, load_config
from modextract.exceptions import ConfigError, ConfigParseError


def test_defaults():
    config = ExtractorConfig()
    assert config.download_url == CURSEFORGE_DOWNLOAD_URL
    assert config.timeout == 3.0
    assert config.max_concurrent == 1
    assert config.forbidden_is_missing is True
    assert config.archive_suffix == "MultiMC"


def test_from_dict_ignores_unknown_keys():
    config = ExtractorConfig.from_dict({"max_concurrent": 4, "something": "else"})
    assert config.max_concurrent == 4


def test_from_dict_none_gives_defaults():
    assert ExtractorConfig.from_dict(None) == ExtractorConfig()


@pytest.mark.parametrize(
    "data",
    [
        {"max_concurrent": 0},
        {"max_concurrent": "4"},
        {"timeout": -1},
        {"timeout": "fast"},
        {"download_url": "https://example.invalid/download"},
    ],
)
def test_invalid_values(data):
    with pytest.raises(ConfigError):
        ExtractorConfig.from_dict(data)


def test_from_dict_rejects_non_mapping():
    with pytest.raises(ConfigError):
        ExtractorConfig.from_dict(["timeout", 3])


def test_load_toml(tmp_path):
    path = tmp_path / "modextract.toml"
    path.write_text('timeout = 5.0\narchive_suffix = "Prism"\n', encoding="utf-8")

    config = ExtractorConfig.from_dict(load_config(str(path)))

    assert config.timeout == 5.0
    assert config.archive_suffix == "Prism"


def test_load_yaml(tmp_path):
    path = tmp_path / "modextract.yml"
    path.write_text("max_concurrent: 2\ncleanup: false\n", encoding="utf-8")

    config = ExtractorConfig.from_dict(load_config(str(path)))

    assert config.max_concurrent == 2
    assert config.cleanup is False


def test_load_json(tmp_path):
    path = tmp_path / "modextract.json"
    path.write_text(json.dumps({"open_output": True}), encoding="utf-8")

    assert load_config(str(path)) == {"open_output": True}


def test_load_unsupported_suffix(tmp_path):
    path = tmp_path / "modextract.ini"
    path.write_text("[x]", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        load_config(str(path))


def test_load_broken_toml(tmp_path):
    path = tmp_path / "modextract.toml"
    path.write_text("timeout = = 3", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        load_config(str(path))


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigParseError):
        load_config(str(tmp_path / "absent.toml"))

import logging

import pytest

from common.config import Config, load_config
from exceptions.exceptions import ArgumentError


def test_defaults_without_path():
    cfg = load_config(None)
    assert cfg == Config()
    assert cfg.extraction.delimiter == "|"
    assert cfg.clustering.backend == "open3d"
    assert cfg.clustering.print_progress is True
    assert cfg.output.separator == " "


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    cfg = load_config(str(tmp_path / "missing.yaml"))
    assert cfg == Config()
    assert "Config file not found" in caplog.text


def test_partial_sections_are_merged(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "extraction:\n"
        "  delimiter: ','\n"
        "clustering:\n"
        "  backend: sklearn\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    cfg = load_config(str(path))
    assert cfg.extraction.delimiter == ","
    assert cfg.extraction.strict_lines is False
    assert cfg.clustering.backend == "sklearn"
    assert cfg.clustering.print_progress is True
    assert cfg.logging.level == "DEBUG"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(str(path)) == Config()


def test_unknown_key_is_an_argument_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("clustering:\n  radius: 0.5\n")
    with pytest.raises(ArgumentError) as exc:
        load_config(str(path))
    assert exc.value.code == "INVALID_CONFIG"


def test_invalid_yaml_is_an_argument_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("extraction: [unclosed\n")
    with pytest.raises(ArgumentError):
        load_config(str(path))


def test_non_mapping_is_an_argument_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ArgumentError):
        load_config(str(path))


@pytest.mark.parametrize("yaml_text, field", [
    ("extraction:\n  delimiter: 1\n", "extraction.delimiter"),
    ("extraction:\n  strict_lines: 'yes'\n", "extraction.strict_lines"),
    ("logging:\n  level: 10\n", "logging.level"),
    ("clustering:\n  print_progress: 1\n", "clustering.print_progress"),
    ("output:\n  separator: 0\n", "output.separator"),
])
def test_mistyped_values_are_argument_errors(tmp_path, yaml_text, field):
    path = tmp_path / "config.yaml"
    path.write_text(yaml_text)
    with pytest.raises(ArgumentError) as exc:
        load_config(str(path))
    assert exc.value.code == "INVALID_CONFIG"
    assert field in str(exc.value)


def test_section_must_be_a_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("extraction: ','\n")
    with pytest.raises(ArgumentError) as exc:
        load_config(str(path))
    assert "extraction" in str(exc.value)

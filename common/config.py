import logging
import os
import yaml
from dataclasses import dataclass, fields, replace
from typing import Optional

from exceptions.exceptions import ArgumentError

logger = logging.getLogger(__name__)


def _read(path: str):
    with open(path, "r") as f:
        return yaml.safe_load(f)


def _merge(section, name: str, values):
    """Override a config section with YAML values, checking each against its field type."""
    values = values or {}
    if not isinstance(values, dict):
        raise TypeError(f"section '{name}' must be a mapping, got {type(values).__name__}")
    merged = replace(section, **values)
    for f in fields(merged):
        value = getattr(merged, f.name)
        if not isinstance(value, f.type):
            raise TypeError(f"{name}.{f.name} must be {f.type.__name__}, got {type(value).__name__} ({value!r})")
    return merged


@dataclass(frozen=True)
class Logging:
    level: str = "INFO"

@dataclass(frozen=True)
class Extraction:
    delimiter: str = "|"
    strict_lines: bool = False

@dataclass(frozen=True)
class Clustering:
    backend: str = "open3d"
    print_progress: bool = True

@dataclass(frozen=True)
class Output:
    separator: str = " "


@dataclass(frozen=True)
class Config:
    logging: Logging = Logging()
    extraction: Extraction = Extraction()
    clustering: Clustering = Clustering()
    output: Output = Output()


def load_config(path: Optional[str]) -> Config:
    cfg = Config()
    if not path:
        return cfg
    if not os.path.isfile(path):
        logger.warning("Config file not found, using defaults: %s", path)
        return cfg
    try:
        data = _read(path) or {}
        if not isinstance(data, dict):
            raise TypeError(f"expected a mapping at the top level, got {type(data).__name__}")
        logging_ = _merge(cfg.logging, "logging", data.get("logging"))
        extraction = _merge(cfg.extraction, "extraction", data.get("extraction"))
        clustering = _merge(cfg.clustering, "clustering", data.get("clustering"))
        output = _merge(cfg.output, "output", data.get("output"))
    except (OSError, yaml.YAMLError, TypeError) as e:
        raise ArgumentError("INVALID_CONFIG", f"Cannot load config {path}: {e}", context="load_config") from e
    return replace(cfg, logging=logging_, extraction=extraction, clustering=clustering, output=output)

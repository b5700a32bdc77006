"""Configuration for reconciliation runs.

Defaults reproduce the conventional layout: ``passed/`` and ``failed/``
report folders and one ``master_*.xml`` next to them, with
``passed.xml``, ``failed.xml`` and ``remaining.xml`` written alongside.
A YAML file may override any field; it is validated against the packaged
``schemas/config.json``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
import yaml

from tareconcile.classify import DEFAULT_PASS_TOKEN, DEFAULT_REPORT_PREFIX
from tareconcile.discovery import DEFAULT_MASTER_PATTERN
from tareconcile.errors import SetupError
from tareconcile.logging import get_logger
from tareconcile.model.outcome import CLASSIFICATIONS

logger = get_logger(__name__)

# Looked up in the run root when no explicit config path is given
DEFAULT_CONFIG_NAME = "tareconcile.yaml"


def _default_outputs() -> Dict[str, str]:
    return {name: f"{name}.xml" for name in CLASSIFICATIONS}


@dataclass
class ReconcileConfig:
    """Settings for one reconciliation run."""

    # Report folders, relative to the run root, walked recursively
    report_dirs: List[str] = field(default_factory=lambda: ["passed", "failed"])

    # Regex for the master manifest name, matched in the run root only
    master_pattern: str = DEFAULT_MASTER_PATTERN

    # Report name tokens
    report_prefix: str = DEFAULT_REPORT_PREFIX
    pass_token: str = DEFAULT_PASS_TOKEN

    # Output file name per classification
    outputs: Dict[str, str] = field(default_factory=_default_outputs)

    # Output directory, relative to the run root; None means the run root
    output_dir: Optional[str] = None

    # Optional log mirror, relative to the run root
    log_file: Optional[str] = None

    def output_name(self, classification: str) -> str:
        return self.outputs.get(classification, f"{classification}.xml")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReconcileConfig":
        """Build a config from a validated mapping, filling defaults."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if "outputs" in kwargs:
            outputs = _default_outputs()
            outputs.update(kwargs["outputs"] or {})
            kwargs["outputs"] = outputs
        return cls(**kwargs)


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("tareconcile.schemas")
        .joinpath("config.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def parse_config(yaml_str: str, source: str = "<string>") -> ReconcileConfig:
    """Parse and validate a YAML configuration string.

    Raises:
        SetupError: If the YAML is malformed or fails schema validation.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise SetupError(f"Invalid YAML in config {source}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SetupError(f"Config {source} must map to a dictionary at top-level.")

    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise SetupError(
            f"Invalid config {source} at '{location}': {exc.message}"
        ) from exc

    config = ReconcileConfig.from_dict(data)
    names = list(config.outputs.values())
    if len(set(names)) != len(names):
        raise SetupError(f"Config {source}: output file names must be distinct")
    return config


def load_config(root: Path, path: Optional[Path] = None) -> ReconcileConfig:
    """Resolve the configuration for a run rooted at ``root``.

    Uses ``path`` when given, else ``<root>/tareconcile.yaml`` when present,
    else the defaults.
    """
    if path is None:
        candidate = root / DEFAULT_CONFIG_NAME
        if not candidate.is_file():
            logger.debug("No config file found; using defaults")
            return ReconcileConfig()
        path = candidate
    if not path.is_file():
        raise SetupError(f"Config file not found: {path}")
    logger.info(f"Loading config from: {path}")
    return parse_config(path.read_text(encoding="utf-8"), source=str(path))

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional
import os

import yaml


DEFAULT_CONFIG_PATH = os.path.join("configs", "mission.yaml")


@dataclass
class MissionConfig:
    """Runtime options for a plateau mission.

    Attributes
    ----------
    telemetry_path : str, optional
        JSONL file receiving per-step and final rover records. Disabled if None.
    render : bool
        Print a text map of the plateau after all rovers have run.
    prompts : bool
        Print a prompt before each line read in interactive mode.
    echo_errors : bool
        Report malformed input lines before re-prompting.
    """

    telemetry_path: Optional[str] = None
    render: bool = False
    prompts: bool = False
    echo_errors: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MissionConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown mission config keys: {sorted(unknown)}")
        cfg = cls(**data)
        cfg.render = bool(cfg.render)
        cfg.prompts = bool(cfg.prompts)
        cfg.echo_errors = bool(cfg.echo_errors)
        return cfg


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: Optional[str] = None) -> MissionConfig:
    """Load the ``mission`` section of a YAML config file.

    A missing default config yields the built-in defaults; a missing
    explicitly requested file is an error.
    """
    if path is None:
        if not os.path.isfile(DEFAULT_CONFIG_PATH):
            return MissionConfig()
        path = DEFAULT_CONFIG_PATH
    try:
        cfg = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ValueError(f"Cannot parse config {path}: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a mapping")
    section = cfg.get("mission") or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config {path}: 'mission' must be a mapping")
    return MissionConfig.from_dict(section)

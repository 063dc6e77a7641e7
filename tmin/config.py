from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .lang import language_for_path

DEFAULT_STRATEGY = "greedy"
DEFAULT_INVARIANT = "dummy"

# --------------------------------------------------------------------------- #
# Defaults for the job file
# --------------------------------------------------------------------------- #
_DEFAULT_CFG: Dict[str, Any] = {
    "language": None,
    "charset": "utf-8",
    "output_dir": None,
    "files": [],
    "strategy": {"name": DEFAULT_STRATEGY},
    "invariant": {"name": DEFAULT_INVARIANT},
}

_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class FileMapping:
    """Input file and the working copy that ends up minimized."""
    input: Path
    output: Path


@dataclass
class ComponentCfg:
    """Name of a strategy/invariant plus its options (all other keys)."""
    name: str
    options: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_dict(d: Any, kind: str, default: str) -> ComponentCfg:
        if d is None:
            return ComponentCfg(default)
        if isinstance(d, str):
            return ComponentCfg(d)
        if not isinstance(d, dict):
            raise ConfigError(f"'{kind}' must be a name or a mapping, got {type(d).__name__}")
        options = dict(d)
        name = options.pop("name", default)
        if not isinstance(name, str) or not name:
            raise ConfigError(f"'{kind}.name' must be a non-empty string")
        return ComponentCfg(name, options)


@dataclass
class JobConfig:
    files: List[FileMapping]
    language: Optional[str] = None
    charset: str = "utf-8"
    strategy: ComponentCfg = field(default_factory=lambda: ComponentCfg(DEFAULT_STRATEGY))
    invariant: ComponentCfg = field(default_factory=lambda: ComponentCfg(DEFAULT_INVARIANT))

    @staticmethod
    def from_dict(raw: Dict[str, Any], base_dir: Path) -> JobConfig:
        """Build a job from a YAML dictionary; relative paths are resolved against base_dir."""
        cfg = _DEFAULT_CFG.copy()
        cfg.update(raw)

        charset = str(cfg["charset"])
        try:
            codecs.lookup(charset)
        except LookupError:
            raise ConfigError(f"Unknown charset '{charset}'")

        output_dir = cfg.get("output_dir")
        files = [_file_mapping(item, base_dir, output_dir) for item in cfg["files"] or []]
        if not files:
            raise ConfigError("No files to minimize: 'files' is empty")
        outputs = [m.output.resolve() for m in files]
        if len(set(outputs)) != len(outputs):
            raise ConfigError("Several files map to the same output")

        invariant = ComponentCfg.from_dict(cfg["invariant"], "invariant", DEFAULT_INVARIANT)
        cwd = invariant.options.get("cwd")
        invariant.options["cwd"] = str(base_dir / cwd) if cwd else str(base_dir)

        return JobConfig(
            files=files,
            language=cfg.get("language"),
            charset=charset,
            strategy=ComponentCfg.from_dict(cfg["strategy"], "strategy", DEFAULT_STRATEGY),
            invariant=invariant,
        )

    def resolve_language(self) -> str:
        """Configured language, or the one registered for the first input's extension."""
        if self.language:
            return self.language
        detected = language_for_path(self.files[0].input)
        if detected is None:
            raise ConfigError(f"Cannot detect the language of {self.files[0].input}; set 'language'")
        return detected


def _file_mapping(item: Any, base_dir: Path, output_dir: Optional[str]) -> FileMapping:
    if isinstance(item, str):
        item = {"input": item}
    if not isinstance(item, dict) or "input" not in item:
        raise ConfigError(f"Invalid file entry {item!r}: expected a path or a mapping with 'input'")
    src = base_dir / item["input"]
    if "output" in item:
        dst = base_dir / item["output"]
    elif output_dir:
        dst = base_dir / output_dir / Path(item["input"]).name
    else:
        raise ConfigError(f"No output for {item['input']}: set 'output' or 'output_dir'")
    if not src.is_file():
        raise ConfigError(f"Input file not found: {src}")
    return FileMapping(src, dst)


def load_job(path: Path) -> JobConfig:
    """
    Load a job file.

    • Unknown keys are ignored.
    • Relative paths are relative to the job file's directory.
    """
    if not path.is_file():
        raise ConfigError(f"Job file not found: {path}")
    try:
        with path.open(encoding="utf-8") as f:
            raw = _yaml.load(f) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return JobConfig.from_dict(raw, path.parent)


__all__ = ["FileMapping", "ComponentCfg", "JobConfig", "load_job"]

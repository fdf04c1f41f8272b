from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_ENV_VAR = "INVOKEKIT_CONFIG"
LOCAL_OVERLAY_NAME = "config.local.yaml"
REPO_ROOT_MARKERS = ("pyproject.toml", ".git")


@dataclass(frozen=True)
class ConfigSource:
    """Where a loaded config came from.

    `mode` is one of "explicit", "env", "base" or "base+local".
    """

    mode: str
    paths: tuple[Path, ...]
    env_var: str | None = None
    repo_root: Path | None = None

    def describe(self) -> str:
        if self.mode == "env":
            return f"env {self.env_var}={self.paths[0]}"
        if self.mode == "explicit":
            return f"explicit path={self.paths[0]}"
        if len(self.paths) > 1:
            return f"base={self.paths[0]} local={self.paths[1]}"
        return f"base={self.paths[0]}"


def find_repo_root(start: str | os.PathLike[str] | None = None) -> Path:
    start_path = Path(start or os.getcwd()).resolve()
    if start_path.is_file():
        start_path = start_path.parent

    for candidate in (start_path, *start_path.parents):
        if any((candidate / marker).exists() for marker in REPO_ROOT_MARKERS):
            return candidate

    raise FileNotFoundError(
        f"Cannot locate repo root: searched from {start_path} for {', '.join(REPO_ROOT_MARKERS)}"
    )


def _read_yaml_mapping(path: Path) -> dict[str, Any]:
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"Config file must contain a YAML mapping: {path}")
    return dict(payload)


def _merge_overlay(base: Mapping[str, Any], overlay: Mapping[str, Any], *, path: str) -> dict[str, Any]:
    # Sections merge key by key; every other value is replaced wholesale.
    merged = dict(base)
    for key, value in overlay.items():
        key_path = f"{path}.{key}" if path else str(key)
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge_overlay(current, value, path=key_path)
            continue
        if current is not None and value is not None and (
            isinstance(current, Mapping) != isinstance(value, Mapping)
        ):
            raise ValueError(
                f"Invalid config overlay merge at {key_path}: "
                f"base is {type(current).__name__} but overlay is {type(value).__name__}"
            )
        merged[key] = value
    return merged


def load_config(
    *,
    config_path: str | os.PathLike[str] | None = None,
    env_var: str | None = DEFAULT_ENV_VAR,
    config_dir: str | os.PathLike[str] = "config",
    start_dir: str | os.PathLike[str] | None = None,
) -> tuple[dict[str, Any], ConfigSource]:
    """Load the config mapping and report where it came from.

    An explicit `config_path` (or the `env_var` environment variable) loads exactly one
    file. Otherwise `<config_dir>/config.yaml` is required, `config_dir` being taken
    relative to the repo root unless absolute, and `config.local.yaml` next to it is
    merged on top when present.
    """

    explicit = str(config_path).strip() if config_path is not None else ""
    if not explicit and config_path is None and env_var:
        explicit = os.environ.get(env_var, "").strip()

    if explicit:
        resolved = Path(os.path.expandvars(explicit)).expanduser().resolve()
        mode = "explicit" if config_path is not None else "env"
        return _read_yaml_mapping(resolved), ConfigSource(mode, (resolved,), env_var=env_var)

    directory = Path(config_dir)
    repo_root = None
    if not directory.is_absolute():
        repo_root = find_repo_root(start_dir)
        directory = repo_root / directory

    base_path = (directory / "config.yaml").resolve()
    if not base_path.is_file():
        raise FileNotFoundError(f"Missing base config file: {base_path}")
    cfg = _read_yaml_mapping(base_path)

    local_path = base_path.with_name(LOCAL_OVERLAY_NAME)
    if not local_path.is_file():
        return cfg, ConfigSource("base", (base_path,), env_var=env_var, repo_root=repo_root)

    cfg = _merge_overlay(cfg, _read_yaml_mapping(local_path), path="")
    source = ConfigSource("base+local", (base_path, local_path), env_var=env_var, repo_root=repo_root)
    return cfg, source

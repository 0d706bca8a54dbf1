"""Configuration loading for sigaudit (.sigaudit.yml and environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .logging import get_logger
from .owners import DEFAULT_PRIMARY_REPOSITORY

CONFIG_FILENAME = ".sigaudit.yml"

ENV_KUBERNETES_DIRECTORY = "SIGAUDIT_KUBERNETES_DIRECTORY"
ENV_SIGS_FILE = "SIGAUDIT_SIGS_FILE"
ENV_PRIMARY_REPOSITORY = "SIGAUDIT_PRIMARY_REPOSITORY"
ENV_REQUEST_TIMEOUT = "SIGAUDIT_REQUEST_TIMEOUT"

_LOGGER = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AuditConfig:
    """Effective settings for one audit run."""

    root: Path
    sigs_file: Optional[Path] = None
    kubernetes_directory: Optional[Path] = None
    primary_repository: str = DEFAULT_PRIMARY_REPOSITORY
    request_timeout: Optional[float] = None


def default_kubernetes_directory(env: Mapping[str, str] | None = None) -> Optional[Path]:
    """Guess the kubernetes checkout from ``GOPATH``, as the Go tooling lays it out."""
    env = os.environ if env is None else env
    gopath = env.get("GOPATH")
    if not gopath:
        return None
    return Path(gopath) / "src" / "k8s.io" / "kubernetes"


def load_config(root: Path, env: Mapping[str, str] | None = None) -> AuditConfig:
    """Load ``.sigaudit.yml`` from ``root`` and apply environment overrides.

    A missing file yields defaults. Environment variables take precedence over
    the file; command-line flags are applied later by the caller.
    """
    env = os.environ if env is None else env
    root = root.expanduser().resolve()
    config = AuditConfig(root=root, kubernetes_directory=default_kubernetes_directory(env))

    config_file = root / CONFIG_FILENAME
    if config_file.exists():
        config = _apply_file(config, _read_config(config_file))

    return _apply_env(config, env)


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _apply_file(config: AuditConfig, data: Dict[str, Any]) -> AuditConfig:
    _LOGGER.debug("Applying %s from %s", CONFIG_FILENAME, config.root)
    sigs_file = _as_str(data.get("sigs_file"))
    kubernetes_directory = _as_str(data.get("kubernetes_directory"))
    primary_repository = _as_str(data.get("primary_repository"))
    request_timeout = _as_float(data.get("request_timeout"))
    return replace(
        config,
        sigs_file=_resolve(config.root, sigs_file) if sigs_file else config.sigs_file,
        kubernetes_directory=(
            _resolve(config.root, kubernetes_directory)
            if kubernetes_directory
            else config.kubernetes_directory
        ),
        primary_repository=primary_repository or config.primary_repository,
        request_timeout=request_timeout if request_timeout is not None else config.request_timeout,
    )


def _apply_env(config: AuditConfig, env: Mapping[str, str]) -> AuditConfig:
    kubernetes_directory = env.get(ENV_KUBERNETES_DIRECTORY)
    if kubernetes_directory:
        config = replace(config, kubernetes_directory=Path(kubernetes_directory).expanduser())
    sigs_file = env.get(ENV_SIGS_FILE)
    if sigs_file:
        config = replace(config, sigs_file=Path(sigs_file).expanduser())
    primary_repository = env.get(ENV_PRIMARY_REPOSITORY)
    if primary_repository:
        config = replace(config, primary_repository=primary_repository)
    request_timeout = _as_float(env.get(ENV_REQUEST_TIMEOUT))
    if request_timeout is not None:
        config = replace(config, request_timeout=request_timeout)
    return config


def _resolve(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else root / path


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


__all__ = [
    "AuditConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "default_kubernetes_directory",
    "load_config",
]

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import yaml


DEFAULT_BASE_URL = "http://localhost:14265"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """
    Settings for talking to one node.

    The HTTP transport itself is not part of the config: it is injected
    into the client so callers can share one across clients.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    headers: Dict[str, str] = field(default_factory=dict)


def _parse_timeout(raw: object) -> float:
    try:
        timeout = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValueError(f"Invalid node API timeout: {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"Node API timeout must be positive, got {timeout}")
    return timeout


def load_client_config(path: str | Path | None = None) -> ClientConfig:
    """
    Load the client config from the `node_api` section of a YAML file, then
    apply `NODE_API_URL` / `NODE_API_TIMEOUT` from the environment.

    A missing file is not an error: defaults are used instead.
    """
    section: Dict[str, object] = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            section = raw.get("node_api") or {}

    base_url = os.getenv("NODE_API_URL") or str(section.get("base_url") or DEFAULT_BASE_URL)
    timeout = _parse_timeout(os.getenv("NODE_API_TIMEOUT") or section.get("timeout", DEFAULT_TIMEOUT))
    headers = {str(k): str(v) for k, v in (section.get("headers") or {}).items()}  # type: ignore[union-attr]

    return ClientConfig(base_url=base_url, timeout=timeout, headers=headers)

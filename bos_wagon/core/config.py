"""
Settings for the BOS wagon.

Sources, in priority order:
1. an explicit JSON config file
2. the file named by ``BOS_WAGON_CONFIG``
3. an auto-discovered ``bos_config.json``
4. environment variables only

Credentials missing from the file are filled from ``BCE_ACCESS_KEY_ID`` /
``BOS_AK``, ``BCE_SECRET_ACCESS_KEY`` / ``BOS_SK`` and ``BCE_ENDPOINT``.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import RepositoryConfigurationError
from .logger import logger

DEFAULT_ENDPOINT = "bj.bcebos.com"
CONFIG_ENV_VAR = "BOS_WAGON_CONFIG"


@dataclass(frozen=True)
class BosSettings:
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint: str = DEFAULT_ENDPOINT
    connection_timeout_in_mills: int = 60 * 1000
    send_buf_size: int = 1024 * 1024
    recv_buf_size: int = 10 * 1024 * 1024
    list_page_size: int = 1000
    max_list_pages: int = 10000
    # raise instead of logging when a download fails
    strict_download: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)


def _default_search_paths() -> List[Path]:
    return [
        Path.cwd() / "config" / "bos_config.json",
        Path.home() / ".bos_wagon" / "bos_config.json",
    ]


def settings_from_dict(data: Mapping[str, Any]) -> BosSettings:
    """Build settings from a parsed config mapping, ignoring unknown keys."""
    known = {f.name for f in fields(BosSettings)}
    values = {k: v for k, v in data.items() if k in known and v is not None}
    return BosSettings(**values)


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise RepositoryConfigurationError(str(path), f"cannot read config file: {e}") from e
    if not isinstance(data, dict):
        raise RepositoryConfigurationError(str(path), "config file must contain a JSON object")
    return data


def _apply_env(settings: BosSettings, environ: Mapping[str, str]) -> BosSettings:
    updates: Dict[str, Any] = {}
    if not settings.access_key_id:
        ak = environ.get("BCE_ACCESS_KEY_ID") or environ.get("BOS_AK")
        if ak:
            updates["access_key_id"] = ak
    if not settings.secret_access_key:
        sk = environ.get("BCE_SECRET_ACCESS_KEY") or environ.get("BOS_SK")
        if sk:
            updates["secret_access_key"] = sk
    endpoint = environ.get("BCE_ENDPOINT")
    if endpoint and settings.endpoint == DEFAULT_ENDPOINT:
        updates["endpoint"] = endpoint
    return replace(settings, **updates) if updates else settings


def load_settings(
    config_file: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    search_paths: Optional[List[Path]] = None,
) -> BosSettings:
    """
    Load wagon settings.

    Args:
        config_file: JSON config path; must exist when given
        environ: environment mapping, ``os.environ`` by default
        search_paths: candidate files for auto-discovery

    Returns:
        BosSettings

    Raises:
        RepositoryConfigurationError: the explicit or env-named file is
            missing or is not a JSON object
    """
    environ = os.environ if environ is None else environ
    data: Dict[str, Any] = {}

    explicit = config_file or environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise RepositoryConfigurationError(str(path), "config file not found")
        data = _read_config_file(path)
        logger.info(f"✓ Settings loaded from {path}")
    else:
        for candidate in search_paths if search_paths is not None else _default_search_paths():
            if candidate.is_file():
                data = _read_config_file(candidate)
                logger.info(f"✓ Settings loaded from {candidate}")
                break

    settings = _apply_env(settings_from_dict(data), environ)
    if not settings.has_credentials:
        logger.debug("No BOS credentials in settings; they must come from the caller")
    return settings

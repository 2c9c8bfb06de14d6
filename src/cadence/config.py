"""
YAML configuration.

The defaults below are merged with the user's file, so a config only needs
the keys it wants to change.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_YAML = """\
clock:
  type: "offline"      # offline, realtime, interval, worker, frame or audio
  rate: 10.0           # ticks per second

audio:                 # only used by the audio clock
  sr: 44100
  blocksize: 512
  channels: 1
  latency: "high"

scheduler:
  window: null         # seconds; null = the clock's tick duration

interval_logger:
  enabled: true
  num_ticks: 72000     # twenty minutes at 60 fps

logging:
  level: "INFO"

demo:
  bpm: 60.0
  ticks: 30            # offline clock
  duration: 5.0        # seconds, realtime clocks
"""

DEFAULTS: Dict[str, Any] = yaml.safe_load(DEFAULT_CONFIG_YAML)


def _deep_merge(dst: dict, src: dict) -> dict:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _deep_merge(dst[k], v)
        else:
            dst[k] = v
    return dst


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load ``path`` over the defaults. With no path, return the defaults."""
    cfg = copy.deepcopy(DEFAULTS)
    if path is None:
        return cfg

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    user_cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(user_cfg, dict):
        raise ConfigError(f"{cfg_path} must contain a mapping at the top level")
    return _deep_merge(cfg, user_cfg)


def write_default_config(path: Union[str, Path]) -> Path:
    cfg_path = Path(path)
    cfg_path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    return cfg_path


def cfg_get(cfg: Dict[str, Any], path: str, default=None):
    cur = cfg
    for p in path.split("."):
        if not isinstance(cur, dict) or p not in cur:
            return default
        cur = cur[p]
    return cur

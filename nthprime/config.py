"""
Engine configuration.

Read once at startup (YAML file plus the NTHPRIME_DEBUG environment toggle)
into an immutable SieveConfig, which is then passed to the engine.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

DEBUG_ENV_VAR = 'NTHPRIME_DEBUG'
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / 'config' / 'default.yaml'

# Values of the environment toggle that leave debugging off
_FALSE_VALUES = {'', '0', 'false', 'no', 'off'}


@dataclass(frozen=True)
class SieveConfig:
    """
    Parameters
    ----------
    debug : bool
        Emit a SieveSnapshot to the sink after every query.
    preview : int
        Primes shown from each end of the sequence by the default sink.
    """
    debug: bool = False
    preview: int = 10

    def __post_init__(self):
        if not isinstance(self.debug, bool):
            raise TypeError(f"debug must be a bool, got {self.debug!r}")
        if isinstance(self.preview, bool) or not isinstance(self.preview, int) or self.preview < 0:
            raise ValueError(f"preview must be a non-negative int, got {self.preview!r}")


def read_yaml(path) -> Dict[str, Any]:
    """Load a YAML config file; an empty file gives an empty dict."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(data).__name__}")
    return data


def read_settings(path=None) -> Dict[str, Any]:
    """
    Settings from path, or from the default file when path is None.

    The default file lives beside the package in a source checkout and is
    absent from a plain install; that case gives an empty dict. An explicit
    path that does not exist still raises.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return {}
        path = DEFAULT_CONFIG_PATH
    return read_yaml(path)


def debug_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[bool]:
    """Debug toggle from the environment, or None when the variable is unset."""
    if environ is None:
        environ = os.environ
    value = environ.get(DEBUG_ENV_VAR)
    if value is None:
        return None
    return value.strip().lower() not in _FALSE_VALUES


def config_from_mapping(settings: Mapping[str, Any],
                        environ: Optional[Mapping[str, str]] = None) -> SieveConfig:
    """Build a SieveConfig from parsed settings; the environment overrides 'debug'."""
    debug = settings.get('debug', False)
    env_debug = debug_from_env(environ)
    if env_debug is not None:
        debug = env_debug
    return SieveConfig(debug=debug, preview=settings.get('preview', 10))


def load_config(path=None, environ: Optional[Mapping[str, str]] = None) -> SieveConfig:
    """
    Load the engine configuration.

    Parameters
    ----------
    path : str or Path, optional
        YAML file to read. Without one only the environment is consulted.
    environ : mapping, optional
        Environment to read the toggle from. Defaults to os.environ.
    """
    settings = read_yaml(path) if path is not None else {}
    return config_from_mapping(settings, environ)

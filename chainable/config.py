"""
Strict-mode configuration.

A ChainConfig is handed to wrap() explicitly or taken from the process
default at the moment a handle is created. Handles keep the config they
were created with, so changing the default never reaches back into
existing handles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

DEFAULT_STRICT = True


@dataclass(frozen=True)
class ChainConfig:
    """
    Settings for a chain handle.
    
    strict: Reject members that are not declared anywhere on the wrapped
            value's capability chain instead of producing an accessor.
    """
    strict: bool = DEFAULT_STRICT


_default_config = ChainConfig()


def get_default_config() -> ChainConfig:
    """Get the config that new handles pick up when none is given."""
    return _default_config


def set_default_config(config: ChainConfig) -> None:
    """Replace the process default. Existing handles are unaffected."""
    global _default_config
    if not isinstance(config, ChainConfig):
        raise TypeError(f"config must be ChainConfig, got {type(config)}")
    logger.debug("default chain config changed: %r -> %r", _default_config, config)
    _default_config = config


def configure(*, strict: bool) -> ChainConfig:
    """
    Update the process default and return the previous one.
    
    The returned config can be passed to set_default_config() to restore it.
    """
    previous = _default_config
    set_default_config(replace(previous, strict=bool(strict)))
    return previous

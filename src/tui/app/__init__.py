"""Application layer: bootstrap, shutdown and option persistence."""

from .bootstrap import (  # noqa: F401
    AppContext,
    create_app,
    shutdown_app,
    single_instance,
)
from .config_store import (  # noqa: F401
    OptionConfig,
    load_config,
    save_config,
    CONFIG_VERSION,
)

__all__ = [
    "AppContext",
    "create_app",
    "shutdown_app",
    "single_instance",
    "OptionConfig",
    "load_config",
    "save_config",
    "CONFIG_VERSION",
]

from __future__ import annotations
import logging
from pathlib import Path
import yaml
from typing import Optional


def configure_logging(config_path: Optional[Path] = None, default_level: int = logging.WARNING) -> logging.Logger:
    """Configure root logging for a process hosting the object container.

    An early NOTSET basic config lets imports emit while the container YAML is
    read; the root logger is then reconfigured to the `log_level` found in
    that file, or `default_level` when the file or key is absent. Returns a
    module logger for the caller.
    """
    logging.basicConfig(level=logging.NOTSET, format='%(asctime)s INFO %(message)s')
    level = default_level

    if config_path is not None and Path(config_path).exists():
        try:
            with Path(config_path).open('r', encoding='utf-8') as _f:
                _cfg = yaml.safe_load(_f) or {}
            _lvl = _cfg.get('log_level') if isinstance(_cfg, dict) else None
            if isinstance(_lvl, str):
                _numeric = getattr(logging, _lvl.upper(), None)
                if isinstance(_numeric, int):
                    level = _numeric
        except (OSError, yaml.YAMLError):
            # If config parse fails, fall back to default level
            level = default_level

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)

    # Keep known noisy libraries quiet by default
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logger.info("Log level set to: %s", logging.getLevelName(level))

    return logger

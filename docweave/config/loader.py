"""Locate, read and validate ``docweave.yaml``.

Search order is the ``--config`` path, then ``./docweave.yaml``, then
``~/.docweave/config.yaml``. An explicit ``--config`` path must exist and is
used even when empty; the implicit locations are skipped when missing or
empty. String values may reference ``${VAR}`` or ``${VAR:-fallback}``.
"""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import DocweaveConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG = Path("docweave.yaml")

_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def load_config(cli_path: str | None = None) -> DocweaveConfig:
    """Return the first config found, or defaults when there is none.

    Raises ValueError when an explicit *cli_path* is missing, or when the
    chosen file holds invalid YAML or invalid settings.
    """
    if cli_path:
        path = Path(cli_path).expanduser()
        if not path.is_file():
            raise ValueError(f"Config file not found: {path}")
        return _read(path) or DocweaveConfig()

    for path in (PROJECT_CONFIG, Path.home() / ".docweave" / "config.yaml"):
        if path.is_file():
            config = _read(path)
            if config is not None:
                return config

    logger.debug("no config file found, using defaults")
    return DocweaveConfig()


def _read(path: Path) -> DocweaveConfig | None:
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Unable to read config {path}: {e}") from e
    if raw is None:
        logger.debug("config %s is empty", path)
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping at the top level")
    try:
        config = DocweaveConfig(**_expand_env_vars(raw))
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e
    logger.debug("loaded config from %s", path)
    return config


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ``${VAR}`` and ``${VAR:-fallback}`` in strings.

    An unset variable without a fallback expands to an empty string.
    """
    if isinstance(obj, str):
        return _ENV_REF.sub(_env_value, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def _env_value(m: re.Match) -> str:
    name, fallback = m.group(1), m.group(2)
    value = os.environ.get(name)
    if value is not None:
        return value
    if fallback is None:
        logger.warning("config references unset environment variable %s", name)
        return ""
    return fallback


# Default YAML template for `docweave config init`
DEFAULT_CONFIG_TEMPLATE = """\
# docweave.yaml

transformer:
  source: "structure.xml"        # path to the parser's structure file
  target: "output"               # must exist and be writable
  templates:
    - "default"                  # theme name or path to a template directory
  # themes_path: "/opt/docweave/themes"
  parse_private: false           # false hides @internal and private members
  template_conflicts: "skip"     # skip | shadow

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""

r"""Document loaders keyed by file extension.

Each loader takes a path and returns the parsed document. The CLI picks a
loader from the file suffix::

    loader = get_loader(Path("settings.yaml"))
    document = loader(Path("settings.yaml"))
"""

from __future__ import annotations

import json as json_lib
import logging
from pathlib import Path
from typing import Any, Callable, Dict

import yaml as yaml_lib

from .utils import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = ["LOADERS", "get_loader", "load_document"]

Loader = Callable[[Path], Any]


def json(filepath: Path) -> Any:
    """Load a JSON document."""
    with open(filepath, "r", encoding="utf-8") as f:
        return json_lib.load(f)


def yaml(filepath: Path) -> Any:
    """Load a YAML document."""
    with open(filepath, "r", encoding="utf-8") as f:
        return yaml_lib.safe_load(f)


LOADERS: Dict[str, Loader] = {
    "json": json,
    "yaml": yaml,
    "yml": yaml,
}


def get_loader(filepath: Path) -> Loader:
    """Return the loader for `filepath`'s extension.

    Raises:
        ConfigurationError: if the extension is missing or unsupported.
    """
    ext = filepath.suffix.lstrip(".").lower()
    if ext not in LOADERS:
        raise ConfigurationError(
            f"Unsupported document type: {filepath.name}",
            [f"Use one of: {', '.join('.' + e for e in LOADERS)}"],
            {"path": str(filepath), "extension": ext},
        )
    return LOADERS[ext]


def load_document(filepath: Path) -> Any:
    """Load `filepath` with the loader matching its extension."""
    loader = get_loader(filepath)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Loading %s with %s loader", filepath, loader.__name__)
    return loader(filepath)

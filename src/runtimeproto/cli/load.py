"""Loading of Pydantic model classes named on the command line."""

from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Type

from pydantic import BaseModel

_log = logging.getLogger(__name__)


def load_model(target: str) -> Type[BaseModel]:
    """Load a Pydantic model class from ``path/to/file.py:Model`` or ``module:Model``.

    Args:
        target: File path or dotted module name, a colon, and the class name

    Returns:
        The model class

    Raises:
        FileNotFoundError: If a file path is given and does not exist
        ValueError: If the target is malformed or does not name a model class
    """
    location, sep, class_name = target.rpartition(":")
    if not sep or not location or not class_name:
        raise ValueError(f"Target must look like FILE.py:Model or module:Model, got {target!r}")

    if location.endswith(".py"):
        module = _load_file(Path(location))
    else:
        module = importlib.import_module(location)

    model = getattr(module, class_name, None)
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise ValueError(f"{class_name} is not a Pydantic model class in {location}")

    _log.debug("Loaded model %s from %s", class_name, location)
    return model


def _load_file(file_path: Path):  # type: ignore[no-untyped-def]
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    module_name = file_path.stem
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    # Registered before execution so Pydantic can resolve forward references
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module

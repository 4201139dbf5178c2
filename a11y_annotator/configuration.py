"""
Configuration Loader

Loads the text templates and skipper definitions used by the annotation
components.

Two JSON resources are read:
- configuration.json: an object mapping parameter names to localized text
  (e.g. "aria-checked-true-after": " (checked)")
- skippers.json: a list of {"selector", "description", "shortcut"} objects

Defaults ship in the package data directory. A missing or malformed file is
fatal and raises ConfigurationError; a missing parameter is not, it reads as
an empty string.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .dom import split_tokens

logger = logging.getLogger(__name__)

DATA_DIRECTORY = Path(__file__).parent / 'data'
DEFAULT_PARAMETERS_PATH = DATA_DIRECTORY / 'configuration.json'
DEFAULT_SKIPPERS_PATH = DATA_DIRECTORY / 'skippers.json'

SKIPPER_KEYS = ('selector', 'description', 'shortcut')


class ConfigurationError(Exception):
    """Raised when configuration or skipper definitions cannot be loaded."""
    pass


@dataclass(frozen=True)
class Skipper:
    """A configured "skip to" link target."""
    selector: str
    description: str
    shortcut: str = ''

    @property
    def shortcuts(self) -> List[str]:
        return split_tokens(self.shortcut)


@dataclass(frozen=True)
class Configuration:
    """Immutable parameter map and skipper list shared by all components."""
    parameters: Mapping[str, str] = field(default_factory=dict)
    skippers: Tuple[Skipper, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'parameters', MappingProxyType(dict(self.parameters)))
        object.__setattr__(self, 'skippers', tuple(self.skippers))

    def get_parameter(self, name: str) -> Optional[str]:
        return self.parameters.get(name)

    def has_parameter(self, name: str) -> bool:
        return name in self.parameters

    def text(self, name: str) -> str:
        """Return a parameter value, or '' when it is not configured."""
        value = self.parameters.get(name)
        if value is None:
            logger.debug(f"Parameter not configured: {name}")
            return ''
        return value

    def with_overrides(self, parameters: Optional[Mapping[str, str]] = None,
                       skippers: Optional[List[Skipper]] = None) -> 'Configuration':
        """Return a copy with some parameters replaced and/or new skippers."""
        merged = dict(self.parameters)
        if parameters:
            merged.update(parameters)
        return replace(
            self,
            parameters=merged,
            skippers=tuple(skippers) if skippers is not None else self.skippers,
        )


# =============================================================================
# Loading
# =============================================================================

def _read_json(path: Path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to load {path}: {e}") from e


def load_parameters(path: Union[str, Path, None] = None) -> Dict[str, str]:
    """Load the parameter map from a JSON object of name -> text."""
    path = Path(path) if path is not None else DEFAULT_PARAMETERS_PATH
    data = _read_json(path)

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a JSON object of parameters in {path}")

    parameters = {}
    for name, value in data.items():
        if value is None:
            continue
        parameters[str(name)] = str(value)

    logger.debug(f"Loaded {len(parameters)} parameters from {path}")
    return parameters


def load_skippers(path: Union[str, Path, None] = None) -> List[Skipper]:
    """Load skipper definitions from a JSON list."""
    path = Path(path) if path is not None else DEFAULT_SKIPPERS_PATH
    data = _read_json(path)

    if isinstance(data, dict):
        data = data.get('skippers')
    if not isinstance(data, list):
        raise ConfigurationError(f"Expected a JSON list of skippers in {path}")

    skippers = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict) or not all(key in entry for key in SKIPPER_KEYS):
            logger.warning(f"Ignoring skipper #{index} in {path}: needs {', '.join(SKIPPER_KEYS)}")
            continue
        skippers.append(Skipper(
            selector=str(entry['selector']),
            description=str(entry['description']),
            shortcut=str(entry['shortcut']),
        ))

    logger.debug(f"Loaded {len(skippers)} skippers from {path}")
    return skippers


def load_configuration(parameters_path: Union[str, Path, None] = None,
                       skippers_path: Union[str, Path, None] = None) -> Configuration:
    """
    Load a full configuration.

    Args:
        parameters_path: JSON parameter file (default: bundled configuration.json)
        skippers_path: JSON skipper file (default: bundled skippers.json)

    Returns:
        Configuration

    Raises:
        ConfigurationError: if either file cannot be read or parsed
    """
    return Configuration(
        parameters=load_parameters(parameters_path),
        skippers=tuple(load_skippers(skippers_path)),
    )

"""
Event mapping table.

Maps cloudBit event names, as reported by the subscriptions endpoint, to the
short keys applications use to refer to them.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Union

from .config import Settings
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


DEFAULT_EVENT_KEYS: Dict[str, str] = {
    "amplitude": "amplitude",
    "amplitude:delta:ignite": "ignite",
    "amplitude:delta:release": "release",
    "amplitude:delta:sustain": "sustain",
    "amplitude:delta:nap": "nap",
    "amplitude:level:active": "active",
    "amplitude:level:idle": "idle",
}


class EventMappingTable:
    """
    Read-only lookup from event name to event key.

    Lookups are exact; unknown names return None.
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None):
        self._mapping: Dict[str, str] = dict(DEFAULT_EVENT_KEYS if mapping is None else mapping)

    def lookup(self, name: str) -> Optional[str]:
        return self._mapping.get(name)

    def names(self) -> List[str]:
        return list(self._mapping)

    def items(self) -> Iterator[tuple]:
        return iter(self._mapping.items())

    def __contains__(self, name: object) -> bool:
        return name in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        return f"EventMappingTable({len(self)} events)"


def load_mapping_file(path: Union[str, Path]) -> EventMappingTable:
    """
    Load an event mapping table from a JSON file.

    The file must contain a single JSON object whose keys and values are strings.

    Args:
        path: Path to the JSON file

    Returns:
        EventMappingTable built from the file

    Raises:
        ConfigurationError: If the file cannot be read or has the wrong shape
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot load event mappings from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Event mappings in {path} must be a JSON object")
    for name, key in data.items():
        if not isinstance(key, str):
            raise ConfigurationError(
                f"Event mapping for '{name}' in {path} must be a string, got {type(key).__name__}"
            )

    logger.debug(f"Loaded {len(data)} event mappings from {path}")
    return EventMappingTable(data)


def default_event_mappings(settings: Settings) -> EventMappingTable:
    """Return the table named by settings.event_mappings_file, or the built-in table."""
    if settings.event_mappings_file:
        return load_mapping_file(settings.event_mappings_file)
    return EventMappingTable()

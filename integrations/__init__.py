"""
EnviroSense integration layer.
Adapters for the collaborators around the indicator engine: the map
widget, the area selection form and the history store.
"""

from .map_control import MapControl, GeoJSONMapControl, DrawnShape
from .area_selection import AreaSelectionForm
from .history_store import (
    HistoryStore,
    InMemoryHistoryStore,
    MongoDataAPIStore,
    build_history_store,
)

__all__ = [
    "MapControl",
    "GeoJSONMapControl",
    "DrawnShape",
    "AreaSelectionForm",
    "HistoryStore",
    "InMemoryHistoryStore",
    "MongoDataAPIStore",
    "build_history_store",
]

from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional


class ClientCache:
    """
    Per-resource record cache keyed by id.

    A resource is "loaded" only once the server answered a list call; fallback
    data can be stored without marking it loaded so the next read retries the
    network. Mutating client calls update entries in place.
    """

    def __init__(self):
        self._entries: Dict[str, "OrderedDict[Any, Any]"] = {}
        self._loaded = set()

    def is_loaded(self, resource: str) -> bool:
        return resource in self._loaded

    def set_all(self, resource: str, items: Iterable[Any], loaded: bool = True) -> None:
        self._entries[resource] = OrderedDict((item.id, item) for item in items)
        if loaded:
            self._loaded.add(resource)
        else:
            self._loaded.discard(resource)

    def all(self, resource: str) -> List[Any]:
        return list(self._entries.get(resource, {}).values())

    def get(self, resource: str, item_id) -> Optional[Any]:
        return self._entries.get(resource, {}).get(item_id)

    def put(self, resource: str, item: Any) -> None:
        self._entries.setdefault(resource, OrderedDict())[item.id] = item

    def remove(self, resource: str, item_id) -> None:
        self._entries.get(resource, {}).pop(item_id, None)

    def invalidate(self, resource: Optional[str] = None) -> None:
        if resource is None:
            self._entries.clear()
            self._loaded.clear()
        else:
            self._entries.pop(resource, None)
            self._loaded.discard(resource)

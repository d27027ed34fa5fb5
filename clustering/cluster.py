from typing import Any, List, Tuple

from clustering.geometry import LatLng


class StaticCluster:
    """A fixed position and the items grouped under it."""

    def __init__(self, position: LatLng):
        self._position = position
        self._items: List[Any] = []

    @property
    def position(self) -> LatLng:
        return self._position

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def items(self) -> Tuple[Any, ...]:
        """Snapshot of the members; changing it never touches the cluster."""
        return tuple(self._items)

    def add_item(self, item: Any) -> None:
        self._items.append(item)

    def remove_item(self, item: Any) -> None:
        self._items = [existing for existing in self._items if existing is not item]

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self):
        return (f"StaticCluster(position=({self._position.latitude:.6f}, "
                f"{self._position.longitude:.6f}), count={self.count})")

"""
Catalog Container — per-identifier flags bound to one catalog dimension.

The key domain is fixed when the container is built: only identifiers the
catalog publishes for the dimension may be read or written. Unset keys read
as the default supplied at construction.
"""

from typing import Dict, FrozenSet, Generic, Iterator, Optional, Tuple, TypeVar

from consent_kernel.models.catalog import Catalog, Dimension
from consent_kernel.record.errors import InvalidFieldError

V = TypeVar("V")


class CatalogContainer(Generic[V]):
    """Fixed-domain id -> value map scoped to a catalog dimension."""

    def __init__(self, catalog: Catalog, dimension: Dimension, default: V):
        self._dimension = dimension
        self._default = default
        self._domain: FrozenSet[int] = catalog.ids(dimension)
        self._values: Dict[int, V] = {}

    @property
    def dimension(self) -> Dimension:
        return self._dimension

    @property
    def default(self) -> V:
        return self._default

    @property
    def size(self) -> int:
        """Number of identifiers in the bound dimension."""
        return len(self._domain)

    @property
    def max_id(self) -> int:
        """Highest identifier published for the dimension, 0 when empty."""
        return max(self._domain, default=0)

    def _check(self, item_id: int) -> None:
        if not self.has(item_id):
            raise InvalidFieldError(self._dimension.value, item_id, "not in catalog")

    def get(self, item_id: int) -> V:
        self._check(item_id)
        return self._values.get(item_id, self._default)

    def set(self, item_id: int, value: V) -> None:
        self._check(item_id)
        self._values[item_id] = value

    def unset(self, item_id: int) -> None:
        """Return an identifier to the container's default."""
        self._check(item_id)
        self._values.pop(item_id, None)

    def has(self, item_id: int) -> bool:
        """Whether ``item_id`` belongs to the bound dimension."""
        if not isinstance(item_id, int) or isinstance(item_id, bool):
            return False
        return item_id in self._domain

    def items(self) -> Iterator[Tuple[int, V]]:
        for item_id in sorted(self._values):
            yield item_id, self._values[item_id]

    def to_dict(self) -> Dict[int, V]:
        return dict(self.items())

    def __iter__(self) -> Iterator[Tuple[int, V]]:
        return self.items()

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, item_id: object) -> bool:
        return self.has(item_id) and item_id in self._values

    def __repr__(self) -> str:
        return (
            f"CatalogContainer(dimension={self._dimension.value!r}, "
            f"size={self.size}, set={len(self._values)})"
        )


def build_container(
    catalog: Catalog, dimension: Dimension, default: Optional[V] = None
) -> "CatalogContainer[Optional[V]]":
    """Create a container sized to ``dimension`` of ``catalog``."""
    return CatalogContainer(catalog, dimension, default)

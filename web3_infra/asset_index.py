"""AssetIndex — symbol to wire-level asset index."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from core.errors import AssetNotFound
from models.asset import Meta


class AssetIndex(Mapping[str, int]):
    """Immutable mapping built once from the ordered exchange universe.

    The index of a symbol is its zero-based position in the universe.
    The universe is trusted to hold unique symbols.
    """

    def __init__(self, symbols: Iterable[str]) -> None:
        self._index: dict[str, int] = {
            symbol: position for position, symbol in enumerate(symbols)
        }

    @classmethod
    def from_meta(cls, meta: Meta) -> AssetIndex:
        return cls(meta.symbols)

    def resolve(self, symbol: str) -> int:
        """Return the index of *symbol*.

        Raises
        ------
        AssetNotFound
            If *symbol* is not in the universe.
        """
        try:
            return self._index[symbol]
        except KeyError:
            raise AssetNotFound(symbol) from None

    def __getitem__(self, symbol: str) -> int:
        return self.resolve(symbol)

    def __iter__(self):
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"AssetIndex({len(self)} assets)"

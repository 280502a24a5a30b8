from __future__ import annotations


class ScratchCache:
    """Per-dataset numeric values shared between metrics.

    ``get`` never raises; a missing key yields ``default``.
    """

    def __init__(self):
        self._values: dict[str, float] = {}

    def set(self, key: str, value: float) -> None:
        self._values[key] = value

    def get(self, key: str, default: float = 0.0) -> float:
        return self._values.get(key, default)

    def reset(self) -> None:
        self._values.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

from collections.abc import Iterable, Mapping
from typing import Any

Attrib = tuple[str, str]


class AttributePool:
    """
    Read-only id <-> (name, value) lookup for one conversion.

    Built from Etherpad's serialized pool:
        {"numToAttrib": {"0": ["bold", "true"], ...}, "nextNum": 1}
    Ids are never allocated here; unknown ids simply resolve to None.
    """

    def __init__(self, num_to_attrib: Mapping[int, Attrib] | None = None):
        self._num_to_attrib: dict[int, Attrib] = {}
        self._attrib_to_num: dict[Attrib, int] = {}
        for num, (name, value) in (num_to_attrib or {}).items():
            attrib = (str(name), _value_str(value))
            self._num_to_attrib[int(num)] = attrib
            self._attrib_to_num.setdefault(attrib, int(num))

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> "AttributePool":
        if not data:
            return cls()
        raw = data.get("numToAttrib", {}) or {}
        table: dict[int, Attrib] = {}
        for key, pair in raw.items():
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                continue
            table[int(key)] = (pair[0], pair[1])
        return cls(table)

    def get(self, num: int) -> Attrib | None:
        return self._num_to_attrib.get(num)

    def lookup(self, name: str, value: Any = "true") -> int | None:
        return self._attrib_to_num.get((name, _value_str(value)))

    def value_of(self, attribs: Iterable[int], name: str) -> str | None:
        """Value of attribute `name` among `attribs`, or None if absent."""
        for num in attribs:
            attrib = self._num_to_attrib.get(num)
            if attrib is not None and attrib[0] == name:
                return attrib[1]
        return None

    def __len__(self) -> int:
        return len(self._num_to_attrib)

    def __contains__(self, num: object) -> bool:
        return num in self._num_to_attrib


def _value_str(value: Any) -> str:
    # Etherpad keys its pool by String(value), so True and "true" are the same attribute
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

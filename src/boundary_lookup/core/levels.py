"""Administrative hierarchy levels."""

from enum import Enum
from typing import List, Optional, Union


class AdminLevel(Enum):
    """Administrative hierarchy levels, root to leaf."""

    PROVINCE = "province"
    DISTRICT = "district"
    SECTOR = "sector"
    CELL = "cell"
    VILLAGE = "village"

    @property
    def label(self) -> str:
        """Return the display label (e.g. "Province")."""
        return self.value.capitalize()

    @property
    def keyword(self) -> str:
        """Return the keyword recognized after the ":" query prefix."""
        return self.value

    @property
    def order(self) -> int:
        """Return the depth of this level, 0 for Province."""
        return _ORDER.index(self)

    @property
    def name_attribute(self) -> str:
        """Return the feature attribute holding this level's name."""
        return f"NAME_{self.order + 1}"

    @property
    def id_attribute(self) -> str:
        """Return the feature attribute holding this level's identifier."""
        return f"ID_{self.order + 1}"

    @property
    def ancestors(self) -> List["AdminLevel"]:
        """Levels above this one, root first."""
        return _ORDER[: self.order]

    @property
    def descendants(self) -> List["AdminLevel"]:
        """Levels below this one, nearest first."""
        return _ORDER[self.order + 1 :]

    @classmethod
    def ordered(cls) -> List["AdminLevel"]:
        """All levels, root to leaf."""
        return list(_ORDER)

    @classmethod
    def from_keyword(cls, keyword: Optional[str]) -> Optional["AdminLevel"]:
        """Resolve a query keyword, returning None when unrecognized."""
        if not keyword:
            return None
        try:
            return cls(keyword.strip().lower())
        except ValueError:
            return None

    @classmethod
    def coerce(cls, level: Union["AdminLevel", str, None]) -> Optional["AdminLevel"]:
        """
        Accept an AdminLevel, a keyword or a label.

        Raises:
            ValueError: If a string does not name a level
        """
        if level is None or isinstance(level, AdminLevel):
            return level
        resolved = cls.from_keyword(level)
        if resolved is None:
            raise ValueError(f"Unknown level: {level!r}")
        return resolved


_ORDER: List[AdminLevel] = [
    AdminLevel.PROVINCE,
    AdminLevel.DISTRICT,
    AdminLevel.SECTOR,
    AdminLevel.CELL,
    AdminLevel.VILLAGE,
]

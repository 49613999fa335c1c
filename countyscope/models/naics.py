"""
NAICS taxonomy entries.

NAICS codes are hierarchical by prefix: a 2-digit sector (e.g. '62'
Health Care) contains 3-digit subsectors ('621', '622', ...), which
contain 4-digit industry groups, and so on down to 6 digits.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NaicsCode:
    """A single NAICS code with its title."""
    code: str
    title: str
    description: Optional[str] = None

    @property
    def level(self) -> int:
        """Number of digits, i.e. depth in the hierarchy."""
        return len(self.code)

    def is_child_of(self, parent: str) -> bool:
        """True if this is a direct (one level deeper) child of `parent`."""
        return (
            self.code.isdigit()
            and len(self.code) == len(parent) + 1
            and self.code.startswith(parent)
        )

    def to_dict(self) -> dict:
        result = {
            'code': self.code,
            'title': self.title,
            'level': self.level,
        }
        if self.description:
            result['description'] = self.description
        return result

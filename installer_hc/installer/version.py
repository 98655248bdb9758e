"""OSGi version values — ``major.minor.micro.qualifier``.

Missing numeric components default to zero, so ``1``, ``1.0`` and ``1.0.0``
parse to the same value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_VERSION_RE = re.compile(
    r"^(\d+)(?:\.(\d+)(?:\.(\d+)(?:\.([A-Za-z0-9_-]+))?)?)?$"
)


@dataclass(frozen=True, order=True)
class Version:
    """An immutable, totally ordered OSGi version."""

    major: int = 0
    minor: int = 0
    micro: int = 0
    qualifier: str = ""

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string. Raises ValueError if it is malformed."""
        text = text.strip()
        if not text:
            return cls()

        match = _VERSION_RE.match(text)
        if not match:
            raise ValueError(f"invalid version \"{text}\"")

        major, minor, micro, qualifier = match.groups()
        return cls(
            major=int(major),
            minor=int(minor or 0),
            micro=int(micro or 0),
            qualifier=qualifier or "",
        )

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.micro}"
        return f"{base}.{self.qualifier}" if self.qualifier else base

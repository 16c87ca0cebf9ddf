"""Shared type definitions for read-name lists."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeAlias

ReadName: TypeAlias = str


@dataclass(slots=True)
class ReadNameSet:
    """Read names loaded from one text file, in the file they came from."""

    source: Path
    names: set[ReadName] = field(default_factory=set)

    def __len__(self) -> int:
        return len(self.names)

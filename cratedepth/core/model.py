from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class DependencyEntry:
    name: str
    requirement: str = ""
    url: str = ""
    kind: str = "normal"
    optional: bool = False


@dataclass(frozen=True)
class PackageSummary:
    name: str
    version: str
    url: str = ""
    description: str = ""
    dependencies: Tuple[DependencyEntry, ...] = ()


@dataclass
class DependencyNode:
    name: str
    requirement: str = ""
    version: str = ""
    url: str = ""
    kind: str = "normal"
    description: str = ""
    children: List['DependencyNode'] = field(default_factory=list)

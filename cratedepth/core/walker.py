import logging
from typing import Iterable, List

from cratedepth.core.model import DependencyEntry, DependencyNode

DEFAULT_DEPTH = 1


def select_dependencies(dependencies: Iterable[DependencyEntry], optional: bool = False) -> List[DependencyEntry]:
    """Optional dependencies only when asked for, required ones otherwise."""
    return [dep for dep in dependencies if dep.optional == optional]


def fetch_dependency_tree(client, package_name: str, depth: int = DEFAULT_DEPTH, optional: bool = False) -> DependencyNode:
    """
    Walks the registry depth-first from package_name, one fetch per visited
    node. Shared dependencies are fetched again for every parent that
    declares them; the depth bound is what terminates cycles.
    """
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")

    logging.info(f"Fetching dependency tree of {package_name} (depth {depth})")
    root = _visit(client, DependencyEntry(package_name), depth, optional)
    logging.info(f"Dependency tree of {package_name} built. {_count(root)} nodes.")
    return root


def _visit(client, entry: DependencyEntry, depth: int, optional: bool) -> DependencyNode:
    package = client.get_package(entry.name)

    node = DependencyNode(
        entry.name,
        requirement=entry.requirement,
        version=package.version,
        url=entry.url or package.url,
        kind=entry.kind,
        description=package.description,
    )

    if depth > 0:
        for dep in select_dependencies(package.dependencies, optional):
            node.children.append(_visit(client, dep, depth - 1, optional))

    return node


def _count(node: DependencyNode) -> int:
    return 1 + sum(_count(child) for child in node.children)

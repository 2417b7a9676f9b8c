from typing import List, Set, Tuple

from cratedepth.core.model import DependencyNode

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def format_label(node: DependencyNode) -> str:
    parts = [node.name]

    if node.requirement:
        parts.append(f"({node.requirement})")
    elif node.version:
        parts.append(f"v{node.version}")

    if node.kind and node.kind != "normal":
        parts.append(f"[{node.kind}]")

    if node.url:
        parts.append(f"- {node.url}")

    return " ".join(parts)


def render_tree(root: DependencyNode) -> str:
    lines = [format_label(root)]
    _render_children(root, "", lines)
    return "\n".join(lines)


def _render_children(node: DependencyNode, prefix: str, lines: List[str]) -> None:
    for index, child in enumerate(node.children):
        is_last = index == len(node.children) - 1
        lines.append(prefix + (LAST_BRANCH if is_last else BRANCH) + format_label(child))
        _render_children(child, prefix + (SPACE if is_last else PIPE), lines)


def to_dot(root: DependencyNode) -> str:
    """Graphviz export. Repeated packages collapse into one node."""
    lines = ["digraph dependencies {"]
    seen_nodes: Set[str] = set()
    seen_edges: Set[Tuple[str, str]] = set()

    def walk(node: DependencyNode) -> None:
        if node.name not in seen_nodes:
            seen_nodes.add(node.name)
            label = f"{node.name} {node.version}".strip()
            lines.append(f'    "{_quote(node.name)}" [label="{_quote(label)}"];')

        for child in node.children:
            walk(child)
            edge = (node.name, child.name)
            if edge in seen_edges:
                continue
            seen_edges.add(edge)
            lines.append(f'    "{_quote(node.name)}" -> "{_quote(child.name)}" [label="{_quote(child.requirement)}"];')

    walk(root)
    lines.append("}")
    return "\n".join(lines)


def _quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')

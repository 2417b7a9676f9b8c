from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Label, Markdown, Tree

from cratedepth.__version__ import __version__
from cratedepth.core.model import DependencyNode
from cratedepth.core.render import format_label


def package_report(node: DependencyNode) -> str:
    md_output = [f"# {node.name}\n"]

    if node.description:
        md_output.append(f"{node.description}\n")

    md_output.append(f"- **Version**: {node.version or 'unknown'}")
    if node.requirement:
        md_output.append(f"- **Requirement**: `{node.requirement}`")
    md_output.append(f"- **Kind**: {node.kind}")
    md_output.append(f"- **Dependencies shown**: {len(node.children)}")
    if node.url:
        md_output.append(f"- **Link**: [{node.url}]({node.url})")

    crate_url = f"https://crates.io/crates/{node.name}"
    md_output.append(f"- **crates.io**: [{crate_url}]({crate_url})")

    return "\n".join(md_output)


class PackageScreen(ModalScreen):
    """Modal with the registry details of one package."""

    DEFAULT_CSS = """
    PackageScreen {
        align: center middle;
        background: rgba(0, 0, 0, 0.8);
    }
    #dialog {
        padding: 0 1;
        width: 80%;
        height: 70%;
        border: heavy $primary;
        background: $surface;
        layout: vertical;
    }
    #title {
        text-align: center;
        text-style: bold;
        background: $primary;
        color: white;
        width: 100%;
        padding: 1;
    }
    #content-scroll {
        height: 1fr;
        margin: 1 0;
        overflow-y: auto;
    }
    #close-btn {
        width: 100%;
        dock: bottom;
    }
    """

    def __init__(self, node: DependencyNode) -> None:
        super().__init__()
        self.node = node

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label(escape(f"{self.node.name} v{self.node.version}"), id="title"),
            VerticalScroll(
                Markdown(package_report(self.node)),
                id="content-scroll"
            ),
            Button("Close (Esc)", variant="primary", id="close-btn"),
            id="dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss()

    def key_escape(self) -> None:
        self.dismiss()


class DepthApp(App):
    TITLE = "cratedepth"
    SUB_TITLE = f"v{__version__}"

    DEFAULT_CSS = """
    Screen { layout: vertical; }
    Tree { padding: 1; background: $surface; }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("l", "expand_node", "Expand"),
        Binding("h", "collapse_node", "Collapse"),
    ]

    def __init__(self, root_node: DependencyNode) -> None:
        super().__init__()
        self.root_node = root_node

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Tree("Root", id="dep-tree")
        yield Footer()

    def on_mount(self) -> None:
        self.render_tree(self.root_node)

    # --- ACTIONS ---

    def action_cursor_down(self) -> None:
        self.query_one("#dep-tree", Tree).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#dep-tree", Tree).action_cursor_up()

    def action_expand_node(self) -> None:
        tree = self.query_one("#dep-tree", Tree)
        if tree.cursor_node:
            tree.cursor_node.expand()

    def action_collapse_node(self) -> None:
        tree = self.query_one("#dep-tree", Tree)
        node = tree.cursor_node
        if node:
            if node.is_expanded:
                node.collapse()
            elif node.parent:
                tree.select_node(node.parent)
                node.parent.collapse()

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        if event.node.data is not None:
            self.push_screen(PackageScreen(event.node.data))

    # --- LOGIC ---

    def render_tree(self, root_node: DependencyNode) -> None:
        tree = self.query_one("#dep-tree", Tree)
        tree.clear()
        tree.root.data = root_node
        tree.root.label = escape(format_label(root_node))
        tree.root.expand()

        def add_nodes(tree_node, data_node):
            for child in data_node.children:
                label = escape(format_label(child))
                if not child.children:
                    tree_node.add_leaf(label, data=child)
                    continue

                label = f"{label} [dim]↳ {len(child.children)}[/]"
                new_node = tree_node.add(label, expand=True, data=child)
                add_nodes(new_node, child)

        add_nodes(tree.root, root_node)
        tree.focus()

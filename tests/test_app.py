import unittest

from textual.widgets import Tree

from cratedepth.app import DepthApp, PackageScreen, package_report
from cratedepth.core.model import DependencyNode


def sample_tree():
    return DependencyNode("input_yew", version="0.1.8", url="https://docs.rs/input_yew", children=[
        DependencyNode("web-sys", "^0.3.64", "0.3.64", children=[
            DependencyNode("js-sys", "^0.3.64", "0.3.64"),
        ]),
        DependencyNode("cc", "^1", "1.0.83", kind="build", description="C compiler helper"),
    ])


class TestDepthApp(unittest.IsolatedAsyncioTestCase):

    async def test_tree_mirrors_dependency_nodes(self):
        app = DepthApp(sample_tree())

        async with app.run_test() as pilot:
            await pilot.pause()
            tree = app.query_one("#dep-tree", Tree)

            self.assertIn("input_yew v0.1.8", tree.root.label.plain)
            self.assertEqual(len(tree.root.children), 2)

            web_sys = tree.root.children[0]
            self.assertEqual(web_sys.data.name, "web-sys")
            self.assertEqual(web_sys.children[0].data.name, "js-sys")

            cc = tree.root.children[1]
            self.assertIn("[build]", cc.label.plain)
            self.assertFalse(cc.allow_expand)

    async def test_details_modal_opens_and_closes(self):
        root = sample_tree()
        app = DepthApp(root)

        async with app.run_test() as pilot:
            await pilot.pause()
            app.push_screen(PackageScreen(root.children[1]))
            await pilot.pause()
            self.assertIsInstance(app.screen, PackageScreen)

            await pilot.press("escape")
            await pilot.pause()
            self.assertNotIsInstance(app.screen, PackageScreen)

    async def test_selecting_node_opens_its_details(self):
        root = sample_tree()
        app = DepthApp(root)

        async with app.run_test() as pilot:
            await pilot.pause()
            tree = app.query_one("#dep-tree", Tree)
            tree.cursor_line = 0

            await pilot.press("j")
            await pilot.pause()
            self.assertIs(tree.cursor_node.data, root.children[0])

            await pilot.press("enter")
            await pilot.pause()
            self.assertIsInstance(app.screen, PackageScreen)
            self.assertIs(app.screen.node, root.children[0])


class TestPackageReport(unittest.TestCase):

    def test_report_contents(self):
        node = sample_tree().children[1]

        report = package_report(node)

        self.assertIn("# cc", report)
        self.assertIn("C compiler helper", report)
        self.assertIn("`^1`", report)
        self.assertIn("**Kind**: build", report)
        self.assertIn("https://crates.io/crates/cc", report)


if __name__ == "__main__":
    unittest.main()

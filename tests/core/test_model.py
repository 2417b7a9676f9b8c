import dataclasses
import unittest

from cratedepth.core.model import DependencyEntry, DependencyNode, PackageSummary


class TestModel(unittest.TestCase):

    def test_fetched_records_are_immutable(self):
        entry = DependencyEntry("serde", "^1")
        package = PackageSummary("serde_json", "1.0.108", dependencies=(entry,))

        with self.assertRaises(dataclasses.FrozenInstanceError):
            entry.requirement = "^2"
        with self.assertRaises(dataclasses.FrozenInstanceError):
            package.version = "0.0.1"

    def test_defaults(self):
        entry = DependencyEntry("serde")
        self.assertEqual((entry.requirement, entry.url, entry.kind, entry.optional), ("", "", "normal", False))

        node = DependencyNode("serde")
        self.assertEqual(node.children, [])
        self.assertIsNot(node.children, DependencyNode("other").children)


if __name__ == "__main__":
    unittest.main()

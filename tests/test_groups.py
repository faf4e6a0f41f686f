# test_groups.py
import math
import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from torusvis.core.exceptions import IterationGuardError
from torusvis.core.groups import EdgeGroup, GenericGroup, NodeGroup


class TestGenericGroup(unittest.TestCase):
    def test_membership_and_order(self):
        g = GenericGroup([3, 1, 2, 1])
        self.assertEqual(g.items(), [3, 1, 2])
        self.assertTrue(g.has_item(1))
        self.assertFalse(g.has_item(7))
        self.assertIs(g.add_item(7), g)
        g.remove_item(1)
        self.assertEqual(list(g), [3, 2, 7])
        self.assertEqual(len(g), 3)
        self.assertIn(2, g)

    def test_remove_missing_raises(self):
        g = GenericGroup()
        with self.assertRaisesRegex(KeyError, "item not in group"):
            g.remove_item(0)

    def test_guard(self):
        g = GenericGroup([0, 1])

        def visit(item):
            with self.assertRaisesRegex(IterationGuardError, "while iterating over them"):
                g.add_item(5)
            with self.assertRaises(IterationGuardError):
                g.remove_item(item)

        self.assertFalse(g.iter_items(visit))
        self.assertEqual(g.items(), [0, 1])
        self.assertTrue(g.iter_items(lambda item: item == 0))
        g.add_item(5)

    def test_extra_options_become_attributes(self):
        g = GenericGroup(name="highlight")
        self.assertEqual(g.name, "highlight")


class TestDisplayGroups(unittest.TestCase):
    def test_node_group_defaults(self):
        g = NodeGroup([0, 1])
        self.assertEqual(g.display_mode, "sprite")
        self.assertEqual(g.display_options, {"color": 0xFFFFFF, "size": 1, "opacity": 1.0})

    def test_node_group_sphere_merges_common_and_user_options(self):
        g = NodeGroup(display_mode="sphere", display_options={"color": 0xFF0000})
        self.assertEqual(g.display_options["color"], 0xFF0000)
        self.assertEqual(g.display_options["size"], 1)
        self.assertEqual(g.display_options["theta_segments"], 3)
        self.assertAlmostEqual(g.display_options["phi_length"], 2 * math.pi)

    def test_edge_group_modes(self):
        g = EdgeGroup([4])
        self.assertEqual(g.display_mode, "line")
        self.assertEqual(g.display_options["height_segments"], 2)
        g.set_display_mode("arrow")
        self.assertEqual(g.display_options["head_length"], 0.1)
        self.assertEqual(g.items(), [4])

    def test_defaults_are_not_shared(self):
        a, b = EdgeGroup(), EdgeGroup()
        a.display_options["color"] = 0
        self.assertEqual(b.display_options["color"], 0xFFFFFF)
        self.assertEqual(EdgeGroup.DEFAULT_DISPLAY_OPTIONS["--common--"]["color"], 0xFFFFFF)


if __name__ == "__main__":
    unittest.main()

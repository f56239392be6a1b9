"""
Tree module behavioral tests (arena layout, reachability, token walking).

Scope
- Validate the depth-first arena (commands, parents, children, lookups).
- Validate reachable sets (children first, then each ancestor's children).
- Validate token assignment to commands, including the program-name case.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argosy import Command, CommandTree, ConfigurationError, FaultCode, walk


def _tree():
    root = Command("root")
    a = root.command(Command("a"))
    a.command(Command("c"))
    root.command(Command("b"))
    return CommandTree(root)


class TestCommandTree(TestCase):
    """Behavioral tests for CommandTree."""

    def setUp(self):
        self.tree = _tree()

    def testDepthFirstOrder(self):
        self.assertEqual([command.name for command in self.tree.commands], ["root", "a", "c", "b"])
        self.assertEqual(len(self.tree), 4)

    def testParentsAndChildren(self):
        self.assertEqual(self.tree.parents, [None, 0, 1, 0])
        self.assertEqual(self.tree.children, [(1, 3), (2,), (), ()])
        self.assertIsNone(self.tree.parent(0))
        self.assertEqual(self.tree.parent(2), 1)

    def testLookup(self):
        c = self.tree.commands[2]
        self.assertEqual(self.tree.lookup(c), 2)
        with self.assertRaises(KeyError):
            self.tree.lookup(Command("stranger"))

    def testAncestorsAndRoute(self):
        self.assertEqual(list(self.tree.ancestors(2)), [1, 0])
        self.assertEqual([command.name for command in self.tree.route(2)], ["root", "a", "c"])
        self.assertEqual(self.tree.route(0), (self.tree.root,))

    def testReachable(self):
        self.assertEqual(self.tree.reachable(0), (1, 3))
        self.assertEqual(self.tree.reachable(1), (2, 1, 3))
        self.assertEqual(self.tree.reachable(2), (2, 1, 3))
        self.assertEqual(self.tree.reachable(3), (1, 3))

    def testMissingRootRaises(self):
        with self.assertRaises(ConfigurationError) as context:
            CommandTree(None)
        self.assertEqual(context.exception.code, FaultCode.NO_ROOT_COMMAND)


class TestWalk(TestCase):
    """Behavioral tests for walk()."""

    def setUp(self):
        self.tree = _tree()

    def testEmptyVectorYieldsRootOnly(self):
        parsed, path = walk(self.tree, [])
        self.assertEqual([command.node for command in parsed], [0])
        self.assertIsNone(parsed[0].index)
        self.assertFalse(path.terminated)

    def testResidualTokensAndPositions(self):
        parsed, _ = walk(self.tree, ["-x", "a", "-y", "value"])
        root, a = parsed
        self.assertEqual((root.tokens, root.positions), (["-x"], [0]))
        self.assertEqual((a.node, a.index), (1, 1))
        self.assertEqual((a.tokens, a.positions), (["-y", "value"], [2, 3]))

    def testSiblingsStayReachable(self):
        parsed, _ = walk(self.tree, ["a", "c", "b"])
        self.assertEqual([command.node for command in parsed], [0, 1, 2, 3])
        self.assertEqual([command.index for command in parsed], [None, 0, 1, 2])

    def testGrandchildNotReachableFromRoot(self):
        parsed, _ = walk(self.tree, ["c"])
        self.assertEqual([command.node for command in parsed], [0])
        self.assertEqual(parsed[0].tokens, ["c"])

    def testRootNameAtFirstPosition(self):
        parsed, _ = walk(self.tree, ["root", "-v", "b"])
        self.assertEqual(parsed[0].index, 0)
        self.assertEqual(parsed[0].tokens, ["-v"])
        self.assertEqual(parsed[0].positions, [1])
        self.assertEqual(parsed[1].node, 3)

    def testRootNameLaterIsResidual(self):
        parsed, _ = walk(self.tree, ["-v", "root"])
        self.assertIsNone(parsed[0].index)
        self.assertEqual(parsed[0].tokens, ["-v", "root"])

    def testRepeatedCommandNameOpensAgain(self):
        parsed, _ = walk(self.tree, ["b", "b"])
        self.assertEqual([command.node for command in parsed], [0, 3, 3])


if __name__ == "__main__":
    unittest.main()

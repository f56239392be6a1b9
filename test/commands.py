"""
Commands module behavioral tests (declaration, composition, help).

Scope
- Validate @command / Command.command declaration forms.
- Validate tree invariants (unique child names, single parent, no cycles).
- Validate help injection and the shadowed-help warning.
- Validate the default help layout for both syntaxes and helper overrides.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
import warnings
from unittest import TestCase

from argosy import (
    Argument,
    BoolBinder,
    IntBinder,
    Command,
    DefaultHelper,
    ShadowedHelpWarning,
    Syntax,
    command,
)


class TestCommandDeclaration(TestCase):
    """Behavioral tests for declaring commands."""

    def testDecoratorTakesNameAndUsageFromFunction(self):
        @command
        def tool(context, operands):
            """
            run the tool

            longer description ignored by usage
            """

        self.assertIsInstance(tool, Command)
        self.assertEqual(tool.name, "tool")
        self.assertEqual(tool.usage, "run the tool")
        self.assertTrue(callable(tool.action))

    def testDecoratorWithOptions(self):
        @command(name="other", usage="custom", arguments=[Argument("verbose", "v", binder=BoolBinder())])
        def tool(context, operands):
            pass

        self.assertEqual(tool.name, "other")
        self.assertEqual(tool.usage, "custom")
        self.assertEqual([argument.name for argument in tool.arguments], ["verbose"])

    def testActionlessCommand(self):
        group = Command("group", usage="namespace only")
        self.assertIsNone(group.action)

    def testChildDecorator(self):
        @command
        def tool(context, operands):
            pass

        @tool.command
        def build(context, operands):
            "build things"

        self.assertIs(tool.children["build"], build)
        self.assertEqual(build.usage, "build things")

    def testChildInstance(self):
        root = Command("root")
        child = root.command(Command("child"))
        self.assertEqual(list(root.children), ["child"])
        self.assertIs(root.children["child"], child)

    def testChildrenKeepDeclarationOrder(self):
        root = Command("root")
        for name in ("c", "a", "b"):
            root.command(Command(name))
        self.assertEqual(list(root.children), ["c", "a", "b"])

    def testInvalidActionRaises(self):
        with self.assertRaises(TypeError):
            Command("tool", "not callable")

    def testInvalidArgumentsRaise(self):
        with self.assertRaises(TypeError):
            Command("tool", arguments=["--verbose"])

    def testDecoratorRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            command(name="tool")(42)


class TestCommandInvariants(TestCase):
    """Behavioral tests for the tree invariants enforced on registration."""

    def testDuplicateChildNameRaises(self):
        root = Command("root")
        root.command(Command("build"))
        with self.assertRaises(ValueError):
            root.command(Command("build"))

    def testSecondParentRaises(self):
        child = Command("child")
        Command("one").command(child)
        with self.assertRaises(ValueError):
            Command("two").command(child)

    def testCycleRaises(self):
        top = Command("top")
        middle = top.command(Command("middle"))
        with self.assertRaises(ValueError):
            middle.command(top)

    def testSelfRegistrationRaises(self):
        lonely = Command("lonely")
        with self.assertRaises(ValueError):
            lonely.command(lonely)


class TestHelpInjection(TestCase):
    """Behavioral tests for the automatic help argument."""

    def testChildReceivesHelpOnRegistration(self):
        root = Command("root")
        child = root.command(Command("child"))
        helpers = [argument for argument in child.arguments if argument.helper]
        self.assertEqual(len(helpers), 1)
        self.assertEqual((helpers[0].name, helpers[0].short), ("help", "h"))

    def testConfigureRunsOnce(self):
        root = Command("root")
        root.configure()
        root.configure()
        self.assertEqual(len(root.arguments), 1)

    def testDeclaredHelperIsKept(self):
        custom = Argument("assist", "a", binder=BoolBinder(), helper=True)
        root = Command("root", arguments=[custom])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            root.configure()
        self.assertEqual(root.arguments, (custom,))

    def testShadowedHelpWarns(self):
        root = Command("root", arguments=[Argument("host", "h", binder=BoolBinder())])
        with self.assertWarns(ShadowedHelpWarning):
            root.configure()
        self.assertFalse(any(argument.helper for argument in root.arguments))


class TestHelpRendering(TestCase):
    """Behavioral tests for DefaultHelper and helper overrides."""

    def setUp(self):
        self.root = Command("tool", usage="demo tool", arguments=[
            Argument("verbose", "v", binder=BoolBinder(), usage="talk more"),
            Argument("jobs", "j", binder=IntBinder(), usage="parallel jobs"),
        ])
        self.root.command(Command("build", usage="build things"))
        self.root.configure()

    def testGnuLayout(self):
        self.assertEqual(
            self.root.render((self.root,), Syntax.GNU),
            "Usage:\n"
            "    tool [command] <options>\n"
            "\n"
            "    demo tool\n"
            "\n"
            "Commands:\n"
            "    [build]  build things\n"
            "\n"
            "Options:\n"
            "    -v, --verbose    talk more\n"
            "    -j, --jobs       parallel jobs\n",
        )

    def testPosixLayout(self):
        self.assertEqual(
            self.root.render((self.root,), Syntax.POSIX),
            "Usage:\n"
            "    tool [command] <options>\n"
            "\n"
            "    demo tool\n"
            "\n"
            "Commands:\n"
            "    [build]  build things\n"
            "\n"
            "Options:\n"
            "    -v    talk more\n"
            "    -j    parallel jobs\n",
        )

    def testRouteNamesInUsage(self):
        build = self.root.children["build"]
        self.assertEqual(
            build.render((self.root, build), Syntax.GNU),
            "Usage:\n"
            "    tool build\n"
            "\n"
            "    build things\n",
        )

    def testPosixLabelForLongOnlyArgument(self):
        self.assertEqual(DefaultHelper.label(Argument("x"), Syntax.POSIX), "-x")
        self.assertEqual(DefaultHelper.label(Argument("long"), Syntax.POSIX), "")
        self.assertEqual(DefaultHelper.label(Argument("long"), Syntax.GNU), "--long")

    def testHelperOverride(self):
        calls = []

        @self.root.helper
        def render(route, syntax):
            calls.append((route, syntax))
            return "custom help"

        self.assertEqual(self.root.render([self.root], Syntax.GNU), "custom help")
        self.assertEqual(calls, [((self.root,), Syntax.GNU)])

    def testHelperKeyword(self):
        root = Command("tool", helper=lambda route, syntax: syntax.value)
        self.assertEqual(root.render((root,), Syntax.POSIX), "posix")

    def testInvalidHelperRaises(self):
        with self.assertRaises(TypeError):
            self.root.helper("not callable")


if __name__ == "__main__":
    unittest.main()

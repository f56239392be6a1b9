"""
Testing-fakes behavioral tests.

Scope
- Validate that FakeBinder, FakeHelper and FakeRunner record their calls and
  delegate to the scripted functions.
- Validate that the fakes plug into real runs and into invoke().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argosy import Argument, Command, Help, Runner, Syntax, invoke
from argosy.testing import FakeBinder, FakeHelper, FakeRunner


class TestFakeBinder(TestCase):
    """Behavioral tests for FakeBinder."""

    def testRecordsCallsDuringRun(self):
        fake = FakeBinder(lambda arg, value: value.upper())
        root = Command("tool", arguments=[Argument("name", "n", binder=fake)])
        Runner(root).run(["--name=bob"])
        self.assertEqual(fake.calls, [("--name=bob", "bob")])
        self.assertEqual(fake.value, "BOB")

    def testBooleanFake(self):
        fake = FakeBinder(boolean=True)
        root = Command("tool", arguments=[Argument("", "q", binder=fake)])
        Runner(root, Syntax.POSIX).run(["-q", "file"])
        self.assertEqual(fake.calls, [("-q", "")])
        self.assertIsNone(fake.value)


class TestFakeHelper(TestCase):
    """Behavioral tests for FakeHelper."""

    def testScriptedRender(self):
        fake = FakeHelper(lambda route, syntax: "help for %s" % route[-1].name)
        root = Command("tool", helper=fake)
        result = Runner(root).run(["--help"])
        self.assertIsInstance(result, Help)
        self.assertEqual(result.text, "help for tool")
        self.assertEqual(fake.calls, [((root,), Syntax.GNU)])

    def testDefaultRenderIsEmpty(self):
        fake = FakeHelper()
        self.assertEqual(fake.render((), Syntax.POSIX), "")


class TestFakeRunner(TestCase):
    """Behavioral tests for FakeRunner."""

    def testScriptedRun(self):
        scripted = Help("scripted")
        fake = FakeRunner(Command("tool"), lambda argv, context: scripted)
        self.assertIs(invoke(fake, "--anything goes"), scripted)
        self.assertEqual(fake.calls, [["--anything", "goes"]])

    def testDefaultRunReturnsNone(self):
        fake = FakeRunner(Command("tool"), syntax=Syntax.POSIX)
        self.assertIsNone(fake.run(["x"]))
        self.assertIs(fake.syntax, Syntax.POSIX)


if __name__ == "__main__":
    unittest.main()

"""
Tests for the shared utilities.

This module verifies:
- Singleton, falsy and final semantics of the `Unset` sentinel.
- `coalesce` preserving legitimate falsey values.
- `rename` in both function and decorator forms.
- `mirror` returning immutable copies of containers.
- `ordinal` wording and suffixes.
"""
import copy
import unittest
from unittest import TestCase

from argosy.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self) -> None:
        """
        Subclassing the sentinel type is rejected.
        """
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnion(self) -> None:
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)


class HelpersTest(TestCase):
    """
    Test suite for the small helper functions.
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)

    def testRenameFunctionForm(self) -> None:
        def original():
            pass

        renamed = rename(original, "other")
        self.assertIs(renamed, original)
        self.assertEqual((original.__name__, original.__qualname__), ("other", "other"))

    def testRenameDecoratorForm(self) -> None:
        @rename("other")
        def original():
            pass

        self.assertEqual(original.__name__, "other")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorCopiesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            mapping = mirror("mapping")

            def __init__(self):
                self._items = [1, [2, 3]]
                self._mapping = {"a": [1]}

        holder = Holder()
        self.assertEqual(holder.items, (1, (2, 3)))
        self.assertEqual(holder.mapping, {"a": (1,)})
        holder.mapping["b"] = 2
        self.assertEqual(holder._mapping, {"a": [1]})

    def testOrdinal(self) -> None:
        expected = {
            1: "first",
            3: "third",
            10: "tenth",
            11: "11th",
            12: "12th",
            13: "13th",
            21: "21st",
            22: "22nd",
            23: "23rd",
            101: "101st",
            111: "111th",
        }
        for number, label in expected.items():
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), label)


class IntrospectiveTypeTest(TestCase):
    """
    Test suite for the introspection metaclass.
    """

    def setUp(self) -> None:
        class SampleRecord(metaclass=IntrospectiveType):
            __introspectable__ = ("name", "tags")
            __displayable__ = ("name",)

            def __init__(self, name, tags):
                self._name = name
                self._tags = tags

        self.type = SampleRecord

    def testDisplayableDefaultsToUnset(self) -> None:
        self.assertIs(IntrospectiveType.__displayable__, Unset)

        class PlainRecord(metaclass=IntrospectiveType):
            __introspectable__ = ("name",)

            def __init__(self, name):
                self._name = name

        self.assertEqual(repr(PlainRecord("x")), "plain-record(name='x')")

    def testTypename(self) -> None:
        self.assertEqual(self.type.__typename__, "sample-record")

    def testReadOnlyProperties(self) -> None:
        record = self.type("x", ["a"])
        self.assertEqual(record.tags, ("a",))
        with self.assertRaises(AttributeError):
            record.name = "y"

    def testRepr(self) -> None:
        self.assertEqual(repr(self.type("x", [])), "sample-record(name='x')")
        self.assertEqual(list(self.type("x", []).__rich_repr__()), [("name", "x")])


if __name__ == "__main__":
    unittest.main()

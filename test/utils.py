"""
Tests for the internal helpers.

This module verifies semantic guarantees of the `Unset` sentinel and of the
small helpers built around it:
- Singleton identity, falsy semantics and representation.
- Union support so `str | Unset` can be used with isinstance().
- coalesce(), rename() and mirror() behavior.
"""
import copy
import unittest
from threading import Thread, Lock
from unittest import TestCase

from argot.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def setUp(self) -> None:
        self.unsettype: type[UnsetType] = UnsetType

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(Unset, self.unsettype())
        self.assertIs(self.unsettype(), self.unsettype())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False/"").
        """
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712
        self.assertNotEqual(Unset, "")

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self) -> None:
        """
        `str | Unset` and `Unset | str` both work with isinstance().
        """
        self.assertTrue(isinstance("x", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance(Unset, Unset | str))
        self.assertFalse(isinstance(1, str | Unset))

    def testCopyPreservesSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testThreadSafetySingleton(self) -> None:
        """
        Concurrent constructions return the same instance.
        """
        results: list[UnsetType] = []
        lock: Lock = Lock()

        def worker():
            instance = self.unsettype()
            with lock:
                results.append(instance)

        threads: list[Thread] = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertTrue(results)
        for instance in results:
            self.assertIs(instance, Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (self.unsettype,), {})


class HelpersTest(TestCase):

    def testCoalesceReplacesOnlyUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testRenameDirectForm(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecoratorForm(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testRenameArgumentChecks(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename(len, 1)

    def testMirrorFreezesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            mapping = mirror("mapping")
            name = mirror("name")

            def __init__(self):
                self._items = ["a", "b"]
                self._mapping = {"k": "v"}
                self._name = "holder"

        holder = Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertEqual(holder.name, "holder")
        with self.assertRaises(TypeError):
            holder.mapping["k"] = "w"  # type: ignore[index]
        with self.assertRaises(AttributeError):
            holder.name = "other"  # type: ignore[misc]


if __name__ == '__main__':
    unittest.main()

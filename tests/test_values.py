import math
import unittest

from errors import InternalError
from values import (
    NullVal, BooleanVal, NumberVal, StringVal, FunctionVal,
    MK_NULL, MK_BOOL, MK_NUMBER, MK_STRING, MK_OBJECT, MK_NATIVE_FN,
    is_truthy, format_number, to_display, to_plain, values_equal,
)


class ValuesTestCase(unittest.TestCase):

    def test_constructors(self):
        self.assertEqual(MK_NULL(), NullVal())
        self.assertEqual(MK_BOOL(1), BooleanVal(True))
        self.assertEqual(MK_NUMBER(3), NumberVal(3.0))
        self.assertIsInstance(MK_NUMBER(3).value, float)
        self.assertEqual(MK_STRING("a"), StringVal("a"))

        tags = [MK_NULL(), MK_BOOL(), MK_NUMBER(), MK_STRING(""), MK_OBJECT(),
                MK_NATIVE_FN(print)]
        self.assertEqual([value.type for value in tags],
                         ["null", "boolean", "number", "string", "object", "native-fn"])

    def test_objects_are_distinct_and_mutable(self):
        props = {"a": MK_NUMBER(1)}
        first = MK_OBJECT(props)
        second = MK_OBJECT(props)
        first.properties["b"] = MK_NULL()

        self.assertNotIn("b", second.properties)
        self.assertNotIn("b", props)
        self.assertNotEqual(first, second)

    def test_truthiness(self):
        falsy = [MK_NULL(), MK_BOOL(False), MK_NUMBER(0), MK_STRING(""), MK_NUMBER(math.nan)]
        for case in falsy:
            self.assertFalse(is_truthy(case), case)

        truthy = [MK_BOOL(True), MK_NUMBER(-1), MK_NUMBER(0.5), MK_STRING("0"), MK_OBJECT(),
                  MK_NATIVE_FN(print), FunctionVal("f", [], [], None)]
        for case in truthy:
            self.assertTrue(is_truthy(case), case)

        self.assertRaises(InternalError, is_truthy, 0)

    def test_format_number(self):
        cases = {8: "8", 8.0: "8", -3.0: "-3", 2.5: "2.5", 0.1: "0.1",
                 1e-07: "0.0000001", -1.5e-05: "-0.000015", 1e21: "1" + "0" * 21,
                 math.inf: "Infinity", -math.inf: "-Infinity", math.nan: "NaN"}
        for case, expected in cases.items():
            self.assertEqual(format_number(case), expected, case)

    def test_display(self):
        obj = MK_OBJECT({"a": MK_NUMBER(1), "b": MK_STRING("x"), "c": MK_OBJECT()})
        cases = [
            (MK_NULL(), "null"),
            (MK_BOOL(False), "false"),
            (MK_NUMBER(12), "12"),
            (MK_STRING("hi"), "hi"),
            (obj, "{ a: 1, b: x, c: {} }"),
            (FunctionVal("add", ["a", "b"], [], None), "fn add(a, b)"),
            (MK_NATIVE_FN(print, "print"), "native fn print"),
        ]
        for value, expected in cases:
            self.assertEqual(to_display(value), expected)

    def test_to_plain(self):
        obj = MK_OBJECT({"n": MK_NUMBER(2), "f": MK_NUMBER(1.5), "s": MK_STRING("x"),
                         "z": MK_NULL(), "inner": MK_OBJECT({"t": MK_BOOL(True)})})
        self.assertEqual(to_plain(obj),
                         {"n": 2, "f": 1.5, "s": "x", "z": None, "inner": {"t": True}})
        self.assertIsInstance(to_plain(MK_NUMBER(2)), int)

        self.assertEqual(to_plain(MK_NATIVE_FN(print, "print")), {"name": "print", "internal": True})
        plain_fn = to_plain(FunctionVal("f", [], [], None))
        self.assertEqual((plain_fn["name"], plain_fn["internal"]), ("f", False))

    def test_cycles(self):
        obj = MK_OBJECT({"n": MK_NUMBER(1)})
        obj.properties["me"] = obj
        self.assertEqual(to_display(obj), "{ n: 1, me: {...} }")

        plain = to_plain(obj)
        self.assertIs(plain["me"], plain)

        # the same object twice without a cycle prints in full both times
        shared = MK_OBJECT({"k": MK_NUMBER(2)})
        pair = MK_OBJECT({"a": shared, "b": shared})
        self.assertEqual(to_display(pair), "{ a: { k: 2 }, b: { k: 2 } }")

    def test_equality(self):
        self.assertTrue(values_equal(MK_NUMBER(1), MK_NUMBER(1.0)))
        self.assertTrue(values_equal(MK_STRING("a"), MK_STRING("a")))
        self.assertTrue(values_equal(MK_NULL(), MK_NULL()))
        self.assertFalse(values_equal(MK_NUMBER(1), MK_STRING("1")))
        self.assertFalse(values_equal(MK_BOOL(False), MK_NULL()))

        obj = MK_OBJECT()
        self.assertTrue(values_equal(obj, obj))
        self.assertFalse(values_equal(obj, MK_OBJECT()))


if __name__ == '__main__':
    unittest.main()

"""
Specs module behavioral tests.

Scope
- Validate ArgSpec construction: name syntax, short/long alias syntax.
- Validate the construction-order rules (take_value/flag need an alias,
  position refuses one) and the position range.
- Validate sealing once a registry accepts the spec.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argmatch import ArgSpec, ArgRegistry, FaultCode
from argmatch.faults import (
    SpecificationError,
    InvalidNameError,
    InvalidShortError,
    InvalidLongError,
    InvalidPositionError,
    MissingAliasError,
    AliasedPositionError,
)


class TestName(TestCase):
    """Behavioral tests for argument names."""

    def testNameIsKept(self):
        self.assertEqual(ArgSpec("foo").name, "foo")

    def testNameAllowsDigits(self):
        self.assertEqual(ArgSpec("out2").name, "out2")

    def testEmptyNameRejected(self):
        with self.assertRaises(InvalidNameError):
            ArgSpec("")

    def testNonAsciiNameRejected(self):
        with self.assertRaises(InvalidNameError):
            ArgSpec("!")

    def testUppercaseNameRejected(self):
        with self.assertRaises(InvalidNameError):
            ArgSpec("Foo")

    def testNameWithDashRejected(self):
        with self.assertRaises(InvalidNameError):
            ArgSpec("dry-run")

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            ArgSpec(1)

    def testSpecificationErrorsAreValueErrors(self):
        with self.assertRaises(ValueError):
            ArgSpec("")

    def testFaultCarriesCode(self):
        with self.assertRaises(SpecificationError) as context:
            ArgSpec("Bad")
        self.assertIs(context.exception.code, FaultCode.INVALID_NAME)
        self.assertEqual(context.exception.options["name"], "Bad")


class TestShort(TestCase):
    """Behavioral tests for short aliases."""

    def testShortIsKept(self):
        self.assertEqual(ArgSpec("foo").short("a").short_alias, "a")

    def testShortDefaultsToNone(self):
        self.assertIsNone(ArgSpec("foo").short_alias)

    def testEmptyShortRejected(self):
        with self.assertRaises(InvalidShortError):
            ArgSpec("foo").short("")

    def testTwoCharactersRejected(self):
        with self.assertRaises(InvalidShortError):
            ArgSpec("foo").short("ab")

    def testNonAsciiShortRejected(self):
        with self.assertRaises(InvalidShortError):
            ArgSpec("foo").short("!")

    def testDigitShortRejected(self):
        with self.assertRaises(InvalidShortError):
            ArgSpec("foo").short("1")


class TestLong(TestCase):
    """Behavioral tests for long aliases."""

    def testLongIsKept(self):
        self.assertEqual(ArgSpec("foo").long("abc").long_alias, "abc")

    def testEmptyLongRejected(self):
        with self.assertRaises(InvalidLongError):
            ArgSpec("foo").long("")

    def testSingleCharacterRejected(self):
        with self.assertRaises(InvalidLongError):
            ArgSpec("foo").long("a")

    def testNonAsciiLongRejected(self):
        with self.assertRaises(InvalidLongError):
            ArgSpec("foo").long("a!")

    def testDigitsInLongRejected(self):
        with self.assertRaises(InvalidLongError):
            ArgSpec("foo").long("ab1")


class TestRoles(TestCase):
    """Behavioral tests for take_value/position/flag and their ordering rules."""

    def testTakeValueAfterShort(self):
        self.assertTrue(ArgSpec("foo").short("a").take_value().takes_value)

    def testTakeValueAfterLong(self):
        self.assertTrue(ArgSpec("foo").long("foo").take_value().takes_value)

    def testTakeValueWithoutAliasRejected(self):
        with self.assertRaises(MissingAliasError):
            ArgSpec("foo").take_value()

    def testFlagAfterShort(self):
        self.assertTrue(ArgSpec("foo").short("a").flag().is_flag)

    def testFlagWithoutAliasRejected(self):
        with self.assertRaises(MissingAliasError):
            ArgSpec("foo").flag()

    def testPosition(self):
        self.assertEqual(ArgSpec("foo").position(1).index, 1)

    def testPositionAfterShortRejected(self):
        with self.assertRaises(AliasedPositionError):
            ArgSpec("foo").short("a").position(1)

    def testPositionAfterLongRejected(self):
        with self.assertRaises(AliasedPositionError):
            ArgSpec("foo").long("foo").position(1)

    def testPositionOutOfRangeRejected(self):
        with self.assertRaises(InvalidPositionError):
            ArgSpec("foo").position(256)
        with self.assertRaises(InvalidPositionError):
            ArgSpec("foo").position(-1)

    def testPositionMustBeInteger(self):
        with self.assertRaises(TypeError):
            ArgSpec("foo").position("1")
        with self.assertRaises(TypeError):
            ArgSpec("foo").position(True)

    def testOptionAndFlagMayCombine(self):
        spec = ArgSpec("foo").short("f").take_value().flag()
        self.assertTrue(spec.takes_value)
        self.assertTrue(spec.is_flag)

    def testDefaults(self):
        spec = ArgSpec("foo")
        self.assertFalse(spec.takes_value)
        self.assertFalse(spec.is_flag)
        self.assertIsNone(spec.index)
        self.assertFalse(spec.aliased)

    def testBuilderReturnsSameSpec(self):
        spec = ArgSpec("foo")
        self.assertIs(spec.short("f"), spec)
        self.assertIs(spec.long("foo"), spec)
        self.assertIs(spec.take_value(), spec)
        self.assertIs(spec.flag(), spec)


class TestSealing(TestCase):
    """Registered specs cannot be changed anymore."""

    def testRegisteredSpecIsSealed(self):
        spec = ArgSpec("foo").long("foo")
        ArgRegistry().register(spec)
        self.assertTrue(spec.sealed)
        with self.assertRaises(TypeError):
            spec.take_value()
        with self.assertRaises(TypeError):
            spec.short("f")

    def testPropertiesAreReadOnly(self):
        spec = ArgSpec("foo")
        with self.assertRaises(AttributeError):
            spec.name = "bar"

    def testRepr(self):
        spec = ArgSpec("foo").short("f")
        self.assertEqual(
            repr(spec),
            "arg-spec(name='foo', short_alias='f', long_alias=None, takes_value=False, index=None, is_flag=False)"
        )


if __name__ == "__main__":
    unittest.main()

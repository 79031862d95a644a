"""
Loader module behavioral tests (YAML specification documents).

Scope
- Validate building a registry from YAML text, files and decoded documents.
- Validate malformed-document faults and propagation of builder/registry faults.
- Validate the one-call match() helper.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import os
import tempfile
import textwrap
import unittest
from unittest import TestCase

from argmatch import ArgRegistry, FaultCode, build, loads, load, match
from argmatch.faults import (
    MalformedSourceError,
    MissingAliasError,
    DuplicateNameError,
    MatchExit,
)

SCENARIO = textwrap.dedent("""
    args:
      - name: foo
        long: foo
        take_value: true
      - name: bar
        long: bar
        take_value: true
      - name: param
        position: 1
      - name: aaa
        short: a
        flag: true
      - name: bbb
        short: b
        flag: true
      - name: ccc
        long: ccc
        flag: true
""")


class TestLoads(TestCase):

    def testScenario(self):
        registry = loads(SCENARIO)
        self.assertIsInstance(registry, ArgRegistry)
        self.assertEqual([spec.name for spec in registry], ["foo", "bar", "param", "aaa", "bbb", "ccc"])

        result = match(SCENARIO, "--foo f1 --bar b1 -ab --ccc p1")
        self.assertEqual(result.value_of("foo"), "f1")
        self.assertEqual(result.value_of("bar"), "b1")
        self.assertEqual(result.value_of("param"), "p1")
        self.assertTrue(result.is_present("aaa"))
        self.assertTrue(result.is_present("bbb"))
        self.assertTrue(result.is_present("ccc"))

    def testFieldsMapToBuilder(self):
        registry = loads("args: [{name: out, short: o, long: output, take_value: true}]")
        spec = registry["out"]
        self.assertEqual(spec.short_alias, "o")
        self.assertEqual(spec.long_alias, "output")
        self.assertTrue(spec.takes_value)
        self.assertFalse(spec.is_flag)

    def testFalseRolesAreSkipped(self):
        registry = loads("args: [{name: foo, take_value: false, flag: false}]")
        self.assertFalse(registry["foo"].takes_value)
        self.assertNotIn("foo", registry.options)

    def testEmptyArgs(self):
        self.assertEqual(len(loads("args: []")), 0)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            loads(3)


class TestMalformed(TestCase):

    def testInvalidYaml(self):
        with self.assertRaises(MalformedSourceError) as context:
            loads("args: [")
        self.assertIs(context.exception.code, FaultCode.MALFORMED_SOURCE)

    def testNotAMapping(self):
        with self.assertRaises(MalformedSourceError):
            loads("- name: foo")

    def testArgsNotAList(self):
        with self.assertRaises(MalformedSourceError):
            loads("args: 3")

    def testRecordNotAMapping(self):
        with self.assertRaises(MalformedSourceError) as context:
            loads("args: [foo]")
        self.assertEqual(context.exception.options["record"], 1)

    def testUnknownField(self):
        with self.assertRaises(MalformedSourceError) as context:
            loads("args: [{name: foo, long: foo, need_value: true}]")
        self.assertIn("need_value", str(context.exception))

    def testMissingName(self):
        with self.assertRaises(MalformedSourceError):
            loads("args: [{long: foo}]")

    def testNonStringName(self):
        with self.assertRaises(MalformedSourceError) as context:
            loads("args: [{name: 42}]")
        self.assertEqual(context.exception.options["record"], 1)
        self.assertEqual(context.exception.options["field"], "name")

    def testNullName(self):
        with self.assertRaises(MalformedSourceError):
            loads("args: [{name: null}]")

    def testBooleanAliases(self):
        for document in (
            "args: [{name: foo, long: on, flag: true}]",
            "args: [{name: foo, long: no, flag: true}]",
            "args: [{name: foo, short: 3}]",
        ):
            with self.subTest(document=document):
                with self.assertRaises(MalformedSourceError) as context:
                    loads(document)
                self.assertIn(context.exception.options["field"], ("long", "short"))

    def testQuotedBooleanAlias(self):
        registry = loads("args: [{name: foo, long: 'on', flag: true}]")
        self.assertEqual(registry["foo"].long_alias, "on")

    def testRoleFieldsMustBeBooleans(self):
        with self.assertRaises(MalformedSourceError):
            loads("args: [{name: foo, long: foo, take_value: 'yes'}]")

    def testPositionMustBeInteger(self):
        for document in ("args: [{name: foo, position: true}]", "args: [{name: foo, position: '1'}]"):
            with self.subTest(document=document):
                with self.assertRaises(MalformedSourceError):
                    loads(document)

    def testNullOptionalFieldIsAbsent(self):
        registry = loads("args: [{name: foo, short: null, position: 2}]")
        self.assertIsNone(registry["foo"].short_alias)
        self.assertEqual(registry["foo"].index, 2)

    def testMalformedIsValueError(self):
        with self.assertRaises(ValueError):
            build(None)


class TestPropagation(TestCase):
    """Faults from the builder and the registry surface unchanged."""

    def testMissingAlias(self):
        with self.assertRaises(MissingAliasError):
            loads("args: [{name: foo, take_value: true}]")

    def testDuplicateName(self):
        with self.assertRaises(DuplicateNameError):
            loads("args: [{name: foo}, {name: foo}]")

    def testBuildFromDecodedDocument(self):
        registry = build({"args": [{"name": "param", "position": 1}]})
        self.assertIn(1, registry.positions)


class TestFiles(TestCase):

    def testLoadFromFile(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "spec.yml")
            with open(path, "w", encoding="utf-8") as file:
                file.write(SCENARIO)
            registry = load(path)
        self.assertIn("ccc", registry.flags)

    def testMissingFile(self):
        with self.assertRaises(OSError):
            load(os.path.join(tempfile.gettempdir(), "argmatch-missing", "spec.yml"))

    def testUndecodableFile(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "spec.yml")
            with open(path, "wb") as file:
                file.write(b"args: [{name: \xff}]")
            with self.assertRaises(MalformedSourceError) as context:
                load(path)
        self.assertIs(context.exception.code, FaultCode.MALFORMED_SOURCE)


class TestMatch(TestCase):

    def testOptionsReachMatcher(self):
        with self.assertRaises(MatchExit):
            match(SCENARIO, "--nope x", unknown="error")


if __name__ == "__main__":
    unittest.main()

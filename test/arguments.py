"""
Arguments module behavioral tests.

Scope
- Validate public specs (Option, Parameter): construction, normalization, sealing.
- Validate the arg(...) builder across its forms: names only, names + spec bits,
  value names with sigils, positional parameters.
- Validate definition faults: malformed names, conflicting or inapplicable
  specifiers.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from rich.text import Text

from argot import *
from argot.utils import Unset


class TestOption(TestCase):
    """Behavioral tests for Option (named) specifications."""

    def testOptionRequiresAtLeastOneName(self):
        with self.assertRaises(DefinitionError):
            Option()

    def testOptionWithBothNames(self):
        o = Option("-v", "--verbose", descr="increase verbosity")
        self.assertEqual(o.short, "-v")
        self.assertEqual(o.long, "--verbose")
        self.assertEqual(o.names, ("-v", "--verbose"))
        self.assertIsNone(o.valname)
        self.assertEqual(o.kind(), Kind.OPTION)
        self.assertEqual(o.kind(), "option")

    def testOptionMatchesEitherName(self):
        o = Option("-o", "--output", "FILE")
        self.assertTrue(o.matches("-o"))
        self.assertTrue(o.matches("--output"))
        self.assertFalse(o.matches("--out"))
        self.assertFalse(o.matches(None))

    def testOptionDescrDefaultsToNone(self):
        self.assertIsNone(Option("-v").descr)
        self.assertIsNone(Option("-v", descr="   ").descr)

    def testOptionDescrIsTrimmed(self):
        self.assertEqual(Option("-v", descr="  loud  ").descr, "loud")

    def testOptionDescrKeepsRichText(self):
        descr = Text("loud", style="bold")
        self.assertIs(Option("-v", descr=descr).descr, descr)

    def testOptionDescrTypeChecked(self):
        with self.assertRaises(TypeError):
            Option("-v", descr=1)

    def testOptionEmptyValueNameMeansFlag(self):
        self.assertIsNone(Option("-v", valname="").valname)

    def testOptionNamesValidation(self):
        for short, long in (("v", Unset), ("-vv", Unset), (Unset, "-verbose"), (Unset, "--")):
            with self.assertRaises(DefinitionError):
                Option(short, long)
        with self.assertRaises(DefinitionError):
            Option(Unset, "--dry_run")

    def testOptionNamesAllowI18N(self):
        o = Option("-ä", "--größe", "WERT")
        self.assertEqual(o.names, ("-ä", "--größe"))

    def testOptionValueNameValidation(self):
        with self.assertRaises(DefinitionError):
            Option("-o", valname="-FILE")
        with self.assertRaises(DefinitionError):
            Option("-o", valname="A B")

    def testOptionalValueNeedsValueName(self):
        with self.assertRaises(DefinitionError) as context:
            Option("-c", value_optional=True)
        self.assertEqual(context.exception.code, FaultCode.CONFLICTING_SPECIFIER)

    def testOptionBitsAreBooleans(self):
        o = Option("-f", "--filter", "RULES", required=1, repeatable=Spec.REPEATABLE)
        self.assertIs(o.required, True)
        self.assertIs(o.repeatable, True)
        self.assertIs(o.value_optional, False)

    def testOptionFieldsAreReadOnly(self):
        o = Option("-v")
        with self.assertRaises(AttributeError):
            o.short = "-w"

    def testOptionIsSealed(self):
        with self.assertRaises(TypeError):
            class Sub(Option):
                pass

    def testOptionRepr(self):
        o = Option("-v", "--verbose")
        self.assertTrue(repr(o).startswith("option(short='-v', long='--verbose', valname=None"))

    def testOptionStartsWithoutValues(self):
        self.assertTrue(Option("-v").values.empty())


class TestParameter(TestCase):
    """Behavioral tests for Parameter (positional) specifications."""

    def testParameterDefaults(self):
        p = Parameter("SRC")
        self.assertEqual(p.name, "SRC")
        self.assertIsNone(p.descr)
        self.assertFalse(p.optional)
        self.assertFalse(p.repeatable)
        self.assertEqual(p.kind(), Kind.PARAM)

    def testParameterNameValidation(self):
        for name in ("", "-SRC", "SRC...", "SRC?", "A B"):
            with self.assertRaises(DefinitionError):
                Parameter(name)
        with self.assertRaises(TypeError):
            Parameter(1)

    def testArgumentBaseIsAbstract(self):
        with self.assertRaises(TypeError):
            Argument()

        class Partial(Argument):
            pass

        with self.assertRaises(TypeError):
            Partial()

    def testParameterIsSealed(self):
        with self.assertRaises(TypeError):
            class Sub(Parameter):
                pass

    def testParameterRepr(self):
        self.assertEqual(
            repr(Parameter("DEST", "destination")),
            "parameter(name='DEST', descr='destination', optional=False, repeatable=False)",
        )


class TestArgBuilder(TestCase):
    """Behavioral tests for arg(...)."""

    def testShortFlag(self):
        o = arg("-l", "copy symlinks as symlinks")
        self.assertIsInstance(o, Option)
        self.assertEqual(o.names, ("-l",))
        self.assertIsNone(o.valname)
        self.assertEqual(o.descr, "copy symlinks as symlinks")

    def testLongFlag(self):
        o = arg("--quiet", "suppress non-error messages")
        self.assertEqual(o.names, ("--quiet",))

    def testShortAndLongFlag(self):
        o = arg("-q", "--quiet", "suppress non-error messages")
        self.assertEqual(o.names, ("-q", "--quiet"))
        self.assertIsNone(o.valname)

    def testShortWithValue(self):
        o = arg("-o", "FILE", "output file")
        self.assertEqual((o.short, o.long, o.valname), ("-o", None, "FILE"))

    def testLongWithValue(self):
        o = arg("--chmod", "CHMOD", "affect permissions")
        self.assertEqual((o.short, o.long, o.valname), (None, "--chmod", "CHMOD"))

    def testThreeNames(self):
        o = arg("-f", "--filter", "RULES", "add a file-filtering rule")
        self.assertEqual((o.short, o.long, o.valname), ("-f", "--filter", "RULES"))

    def testSpecBits(self):
        o = arg("-v", "--verbose", REPEATABLE, "increase verbosity")
        self.assertTrue(o.repeatable)
        o = arg("-o", "--output", "FILE", REQUIRED | REPEATABLE, "output")
        self.assertTrue(o.required)
        self.assertTrue(o.repeatable)

    def testPlainIntegerSpec(self):
        self.assertTrue(arg("-v", 2, "verbose").repeatable)

    def testValueNameSigils(self):
        o = arg("-f", "--filter", "RULES...", "rules")
        self.assertEqual(o.valname, "RULES")
        self.assertTrue(o.repeatable)

        o = arg("--chmod", "MODE?", "mode")
        self.assertEqual(o.valname, "MODE")
        self.assertTrue(o.value_optional)

        o = arg("-o", "--output", "FILE!", "output")
        self.assertTrue(o.required)

        o = arg("-c", "--color", "WHEN?!...", "colors")
        self.assertTrue(o.required and o.repeatable and o.value_optional)

    def testBareSigilsKeepOptionValueless(self):
        o = arg("-v", "...", "verbosity")
        self.assertIsNone(o.valname)
        self.assertTrue(o.repeatable)

        o = arg("-v", "--verbose", "!", "verbosity")
        self.assertIsNone(o.valname)
        self.assertTrue(o.required)

    def testSpecGivenTwiceRaises(self):
        with self.assertRaises(DefinitionError) as context:
            arg("-f", "RULES...", REPEATABLE, "rules")
        self.assertEqual(context.exception.code, FaultCode.CONFLICTING_SPECIFIER)

    def testOptionalValueWithoutValueNameRaises(self):
        with self.assertRaises(DefinitionError):
            arg("-v", VALUE_OPTIONAL, "verbose")
        with self.assertRaises(DefinitionError):
            arg("-v", "?", "verbose")

    def testOptionalBitOnOptionRaises(self):
        with self.assertRaises(DefinitionError):
            arg("-v", OPTIONAL, "verbose")

    def testParameter(self):
        p = arg("DEST", "destination")
        self.assertIsInstance(p, Parameter)
        self.assertEqual(p.name, "DEST")
        self.assertFalse(p.optional or p.repeatable)

    def testParameterSigils(self):
        p = arg("SRC...", "sources")
        self.assertEqual(p.name, "SRC")
        self.assertTrue(p.repeatable)

        p = arg("EXTRA?", "extra")
        self.assertEqual(p.name, "EXTRA")
        self.assertTrue(p.optional)

        p = arg("REST?...", "rest")
        self.assertTrue(p.optional and p.repeatable)

    def testParameterSpecBits(self):
        p = arg("SRC", OPTIONAL | REPEATABLE, "sources")
        self.assertTrue(p.optional and p.repeatable)

    def testParameterRejectsOptionBits(self):
        with self.assertRaises(DefinitionError):
            arg("SRC!", "sources")
        with self.assertRaises(DefinitionError):
            arg("SRC", REQUIRED, "sources")
        with self.assertRaises(DefinitionError):
            arg("SRC", VALUE_OPTIONAL, "sources")

    def testMalformedNames(self):
        for parameters in (
                ("-", "dash"),
                ("...", "bare sigil"),
                ("SRC", "--long", "param then option"),
                ("-v", "--verbose", "--extra", "third must be a value name"),
                ("--verbose", "-v", "FILE", "long first"),
                ("-v", "-FILE", "value name starting with '-'"),
        ):
            with self.assertRaises(DefinitionError, msg=parameters):
                arg(*parameters)

    def testMalformedLongNameRaises(self):
        with self.assertRaises(DefinitionError) as context:
            arg("--dry_run", "bad")
        self.assertEqual(context.exception.token, "--dry_run")

    def testDescriptionIsMandatory(self):
        with self.assertRaises(TypeError):
            arg()
        with self.assertRaises(TypeError):
            arg("-v", REPEATABLE)

    def testBadArity(self):
        with self.assertRaises(TypeError):
            arg("a description without names")
        with self.assertRaises(TypeError):
            arg("-a", "--bb", "C", "D", "too many")

    def testBadSpecValues(self):
        for spec in (-1, 16, True):
            with self.assertRaises(TypeError, msg=spec):
                arg("-v", spec, "verbose")

    def testNonStringNames(self):
        with self.assertRaises(TypeError):
            arg(b"-v", "verbose")

    def testRichTextDescription(self):
        descr = Text("verbose", style="italic")
        self.assertIs(arg("-v", descr).descr, descr)


if __name__ == "__main__":
    unittest.main()

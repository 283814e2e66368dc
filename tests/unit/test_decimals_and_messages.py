from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "src"))

from i18n.messages import translate
from models.enums import TotalKind
from models.errors import MalformedBalanceError
from models.schemas import BoostRule, resolve_multiplier
from utils.decimals import format_decimal, to_decimal


class TestDecimals(unittest.TestCase):
    def test_format_is_plain_base10(self) -> None:
        self.assertEqual(format_decimal(Decimal("150.0")), "150")
        self.assertEqual(format_decimal(Decimal("2E+2")), "200")
        self.assertEqual(format_decimal(Decimal("0.000")), "0")
        self.assertEqual(format_decimal(Decimal("-0")), "0")
        self.assertEqual(format_decimal(Decimal("1E-8")), "0.00000001")
        self.assertEqual(
            format_decimal(Decimal("115792089237316195423570985008687907853269984665640564039457584007913129639935")),
            "115792089237316195423570985008687907853269984665640564039457584007913129639935",
        )

    def test_to_decimal_accepts_strings_ints_and_floats(self) -> None:
        self.assertEqual(to_decimal(" 12.50 ", "x"), Decimal("12.50"))
        self.assertEqual(to_decimal(3, "x"), Decimal(3))
        self.assertEqual(to_decimal(1.1, "x"), Decimal("1.1"))

    def test_to_decimal_rejects_malformed_values(self) -> None:
        for value in ("abc", "", "NaN", "Infinity", None, True):
            with self.subTest(value=value):
                with self.assertRaises(MalformedBalanceError):
                    to_decimal(value, "equivalentREG")


class TestBoostRules(unittest.TestCase):
    def test_first_explicit_match_then_wildcard(self) -> None:
        rules = (
            BoostRule("*", Decimal("1.5")),
            BoostRule("REG", Decimal("2")),
            BoostRule("REG", Decimal("9")),
        )
        self.assertEqual(resolve_multiplier(rules, "REG"), Decimal("2"))
        self.assertEqual(resolve_multiplier(rules, "USDC"), Decimal("1.5"))
        self.assertIsNone(resolve_multiplier(rules[1:], "USDC"))

    def test_total_kind_field_names(self) -> None:
        self.assertIs(TotalKind.for_symbol("REG"), TotalKind.REG)
        self.assertIs(TotalKind.for_symbol("reg"), TotalKind.EQUIVALENT_REG)
        self.assertEqual(TotalKind.REG.network_key("gnosis"), "totalBalanceRegGnosis")
        self.assertEqual(TotalKind.EQUIVALENT_REG.network_key("ethereum"), "totalBalanceEquivalentRegEthereum")
        self.assertEqual(TotalKind.EQUIVALENT_REG.total_key, "totalBalanceEquivalentREG")


class TestMessages(unittest.TestCase):
    def test_translate_languages_and_fallbacks(self) -> None:
        self.assertEqual(
            translate("modifiers.infoApplyModifier", language="fr", modifier="boosBalancesDexs"),
            "Application du modificateur boosBalancesDexs",
        )
        self.assertEqual(
            translate("modifiers.infoApplyModifier", language="de", modifier="boosBalancesDexs"),
            "Applying modifier boosBalancesDexs",
        )
        self.assertEqual(translate("modifiers.unknown", language="en"), "modifiers.unknown")


if __name__ == "__main__":
    unittest.main()

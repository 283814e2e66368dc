from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "src"))

from models.errors import MalformedBalanceError, MismatchedBoostConfigError, UnknownNetworkFieldError
from models.schemas import BoostRule, NetworkTotals
from services.normalize_service import normalize_balances
from transform.normalize.source_balances import parse_boost_options, parse_user, serialize_user


class TestSourceBalances(unittest.TestCase):
    def _raw_user(self) -> dict:
        return {
            "walletAddress": "0xuser",
            "type": "holder",
            "sourceBalance": {
                "gnosis": {
                    "walletTokens": [{"tokenSymbol": "REG", "balance": "0"}],
                    "dexs": {
                        "honeyswap": [
                            {
                                "tokenSymbol": "REG",
                                "tokenBalance": "100",
                                "equivalentREG": "100",
                                "poolAddress": "0xpool",
                                "tokenAddress": "0xreg",
                            }
                        ],
                        "swaprv3": [
                            {
                                "tokenSymbol": "WXDAI",
                                "tokenBalance": "20",
                                "equivalentREG": "10",
                                "poolAddress": "0xv3",
                                "positionId": 7,
                            }
                        ],
                    },
                }
            },
            "totalBalanceRegGnosis": "100",
            "totalBalanceEquivalentRegGnosis": "10",
            "totalBalanceRegEthereum": "0",
            "totalBalanceREG": "100",
            "totalBalanceEquivalentREG": "10",
            "totalBalance": "110",
        }

    def test_parse_maps_network_totals_and_positions(self) -> None:
        user = parse_user(self._raw_user())

        self.assertEqual(user.wallet_address, "0xuser")
        self.assertEqual(user.network_totals, {"gnosis": NetworkTotals(reg="100", equivalent_reg="10")})
        honeyswap = user.source_balance["gnosis"].dexs["honeyswap"][0]
        self.assertFalse(honeyswap.is_v3)
        self.assertEqual(honeyswap.extra, {"tokenAddress": "0xreg"})
        self.assertEqual(user.source_balance["gnosis"].dexs["swaprv3"][0].position_id, 7)
        self.assertIn("totalBalanceRegEthereum", user.extra)

    def test_serialize_restores_source_shape(self) -> None:
        raw = self._raw_user()
        self.assertEqual(serialize_user(parse_user(raw)), raw)

    def test_null_position_id_round_trips_and_is_not_v3(self) -> None:
        raw = self._raw_user()
        raw["sourceBalance"]["gnosis"]["dexs"]["honeyswap"][0]["positionId"] = None

        user = parse_user(raw)

        self.assertFalse(user.source_balance["gnosis"].dexs["honeyswap"][0].is_v3)
        self.assertEqual(serialize_user(user), raw)

    def test_missing_grand_total_is_malformed(self) -> None:
        raw = self._raw_user()
        del raw["totalBalance"]
        with self.assertRaises(MalformedBalanceError):
            parse_user(raw)

    def test_half_present_network_totals_raise(self) -> None:
        raw = self._raw_user()
        del raw["totalBalanceEquivalentRegGnosis"]
        with self.assertRaises(UnknownNetworkFieldError) as ctx:
            parse_user(raw)
        self.assertEqual(ctx.exception.field, "totalBalanceEquivalentRegGnosis")

    def test_position_without_symbol_is_rejected(self) -> None:
        raw = self._raw_user()
        del raw["sourceBalance"]["gnosis"]["dexs"]["honeyswap"][0]["tokenSymbol"]
        with self.assertRaises(ValueError):
            parse_user(raw)

    def test_boost_options_become_ordered_rules(self) -> None:
        config = parse_boost_options({"honeyswap": [["REG", "*"], [2, 1.5]]})
        self.assertEqual(
            config,
            {"honeyswap": (BoostRule("REG", Decimal("2")), BoostRule("*", Decimal("1.5")))},
        )
        self.assertIsNone(parse_boost_options(None))

    def test_boost_options_length_mismatch_raises(self) -> None:
        with self.assertRaises(MismatchedBoostConfigError):
            parse_boost_options({"honeyswap": [["REG", "USDC"], [2]]})
        with self.assertRaises(MismatchedBoostConfigError):
            parse_boost_options({"honeyswap": [["REG"]]})

    def test_non_numeric_multiplier_is_malformed(self) -> None:
        with self.assertRaises(MalformedBalanceError):
            parse_boost_options({"honeyswap": [["REG"], ["double"]]})

    def test_normalize_balances_end_to_end(self) -> None:
        options = {"boosBalancesDexs": {"honeyswap": [["REG"], [2]], "swaprv3": [["*"], [1.5]]}}

        [result] = normalize_balances([self._raw_user()], options)

        self.assertEqual(result["sourceBalance"]["gnosis"]["dexs"]["honeyswap"][0]["equivalentREG"], "200")
        self.assertEqual(result["sourceBalance"]["gnosis"]["dexs"]["swaprv3"][0]["equivalentREG"], "15")
        self.assertEqual(result["totalBalanceRegGnosis"], "200")
        self.assertEqual(result["totalBalanceEquivalentRegGnosis"], "15")
        self.assertEqual(result["totalBalanceREG"], "200")
        self.assertEqual(result["totalBalanceEquivalentREG"], "15")
        self.assertEqual(result["totalBalance"], "215")
        self.assertEqual(result["totalBalanceRegEthereum"], "0")

    def test_normalize_balances_without_boost_options_is_passthrough(self) -> None:
        raw = self._raw_user()
        self.assertEqual(normalize_balances([raw], {}), [raw])


if __name__ == "__main__":
    unittest.main()

from unittest import TestCase

from hdkeygen.coin import CoinType, Curve, KeyVersion
from hdkeygen.curve import CURVES, ScalarPathDerivation, SeedPathDerivation
from hdkeygen.ecc import N
from hdkeygen.errors import InvalidMasterKey, UnsupportedDerivation
from hdkeygen.helper import ser256


class CurveTableTest(TestCase):
    def test_table(self):
        for curve, derivation in CURVES.items():
            self.assertEqual(derivation.curve, curve)
        self.assertIsInstance(CURVES[Curve.BITCOIN], ScalarPathDerivation)
        self.assertIsInstance(CURVES[Curve.ED25519], SeedPathDerivation)
        with self.assertRaises(TypeError):
            CURVES[Curve.BITCOIN] = SeedPathDerivation()

    def test_coin_types(self):
        self.assertEqual(CoinType.BITCOIN.curve, Curve.BITCOIN)
        self.assertEqual(CoinType.SEMUX.curve, Curve.ED25519)
        self.assertEqual(Curve.BITCOIN.seed, "Bitcoin seed")
        self.assertEqual(Curve.ED25519.seed, "ed25519 seed")
        self.assertEqual(KeyVersion.MAINNET.private_key_version.hex(), "0488ade4")
        self.assertEqual(KeyVersion.MAINNET.public_key_version.hex(), "0488b21e")


class ScalarPathTest(TestCase):
    def test_master_range(self):
        derivation = ScalarPathDerivation()
        for secret in (0, N, N + 1):
            with self.assertRaises(InvalidMasterKey):
                derivation.master_keys(ser256(secret))
        keys = derivation.master_keys(ser256(N - 1))
        self.assertEqual(keys.private_key_data, b"\x00" + ser256(N - 1))
        self.assertEqual(len(keys.public_key_data), 33)

    def test_legality(self):
        derivation = ScalarPathDerivation()
        derivation.check_private_derivation(True)
        derivation.check_private_derivation(False)
        derivation.check_public_derivation(False)
        with self.assertRaises(UnsupportedDerivation):
            derivation.check_public_derivation(True)


class SeedPathTest(TestCase):
    def test_legality(self):
        derivation = SeedPathDerivation()
        derivation.check_private_derivation(True)
        with self.assertRaises(UnsupportedDerivation):
            derivation.check_private_derivation(False)
        for hardened in (True, False):
            with self.assertRaises(UnsupportedDerivation):
                derivation.check_public_derivation(hardened)

    def test_node_keys(self):
        keys = SeedPathDerivation().master_keys(b"\x00" * 32)
        self.assertEqual(keys.private_key, b"\x00" * 32)
        self.assertEqual(keys.private_key_data, b"\x00" * 33)
        self.assertEqual(keys.public_key_data, keys.public_key)
        self.assertEqual(keys.public_key_data[:1], b"\x00")

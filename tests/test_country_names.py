import unittest

from countries.aliases import fold_name, resolve_iso2
from countries.names import get_country_name_en, get_country_name_es, iso2_to_flag_emoji, resolve_alpha2


class CountryNameTests(unittest.TestCase):
    def test_spanish_names_from_overrides(self):
        self.assertEqual(get_country_name_es("United States"), "Estados Unidos")
        self.assertEqual(get_country_name_es("US"), "Estados Unidos")
        self.assertEqual(get_country_name_es("KR"), "Corea del Sur")

    def test_spanish_names_from_catalogue(self):
        self.assertEqual(get_country_name_es("AR"), "Argentina")
        self.assertEqual(get_country_name_es("CL"), "Chile")

    def test_unknown_names_pass_through(self):
        self.assertEqual(get_country_name_es("Atlantis"), "Atlantis")
        self.assertEqual(get_country_name_es(""), "")

    def test_english_names_expand_codes(self):
        self.assertEqual(get_country_name_en("AR"), "Argentina")
        self.assertEqual(get_country_name_en("DEU"), "Germany")
        self.assertEqual(get_country_name_en("Chile"), "Chile")
        self.assertEqual(get_country_name_en("ZZ"), "ZZ")

    def test_resolve_alpha2(self):
        self.assertEqual(resolve_alpha2("Brazil"), "BR")
        self.assertEqual(resolve_alpha2("bra"), "BR")
        self.assertIsNone(resolve_alpha2("Narnia"))

    def test_flag_emoji(self):
        self.assertEqual(iso2_to_flag_emoji("cl"), "\U0001F1E8\U0001F1F1")
        self.assertIsNone(iso2_to_flag_emoji("CHL"))
        self.assertIsNone(iso2_to_flag_emoji(""))


class AliasTests(unittest.TestCase):
    def test_fold_name(self):
        self.assertEqual(fold_name("  Côte d'Ivoire "), "cote divoire")
        self.assertEqual(fold_name("Bosnia & Herzegovina"), "bosnia and herzegovina")

    def test_resolves_english_spanish_and_common_names(self):
        self.assertEqual(resolve_iso2("Brazil"), "BR")
        self.assertEqual(resolve_iso2("Japón"), "JP")
        self.assertEqual(resolve_iso2("Turkey"), "TR")
        self.assertEqual(resolve_iso2("Türkiye"), "TR")
        self.assertEqual(resolve_iso2("Ivory Coast"), "CI")
        self.assertEqual(resolve_iso2("United States of America"), "US")
        self.assertEqual(resolve_iso2("Kosovo"), "XK")

    def test_accepts_codes(self):
        self.assertEqual(resolve_iso2("DE"), "DE")

    def test_unknown_returns_none(self):
        self.assertIsNone(resolve_iso2("Visa free"))
        self.assertIsNone(resolve_iso2(""))


if __name__ == "__main__":
    unittest.main()

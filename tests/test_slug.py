import unittest

from countries.slug import SlugAllocator, slugify_en, slugify_es


class SlugifyTests(unittest.TestCase):
    def test_strips_diacritics_and_spaces(self):
        self.assertEqual(slugify_es("Japón"), "japon")
        self.assertEqual(slugify_es("Estados Unidos"), "estados-unidos")
        self.assertEqual(slugify_es("  Costa   de Marfil "), "costa-de-marfil")

    def test_ampersand_differs_between_languages(self):
        self.assertEqual(slugify_es("Trinidad & Tobago"), "trinidad-y-tobago")
        self.assertEqual(slugify_en("Trinidad & Tobago"), "trinidad-tobago")

    def test_slashes_and_punctuation(self):
        self.assertEqual(slugify_en("Guinea/Bissau"), "guinea-bissau")
        self.assertEqual(slugify_es("Côte d'Ivoire"), "cote-divoire")
        self.assertEqual(slugify_en("--Hong Kong (SAR)--"), "hong-kong-sar")

    def test_output_is_ascii_lowercase(self):
        for name in ["Åland Islands", "São Tomé & Príncipe", "Curaçao", "Türkiye"]:
            slug = slugify_es(name)
            self.assertRegex(slug, r"^[a-z0-9]+(-[a-z0-9]+)*$")

    def test_empty_input(self):
        self.assertEqual(slugify_es(""), "")
        self.assertEqual(slugify_en("!!!"), "")

    def test_idempotent(self):
        for name in ["Bosnia & Herzegovina", "Saint Kitts/Nevis", " --Perú-- ", "Åland", "a  b"]:
            with self.subTest(name=name):
                once = slugify_es(name)
                self.assertEqual(slugify_es(once), once)


class SlugAllocatorTests(unittest.TestCase):
    def test_collisions_get_numeric_suffixes_in_order(self):
        allocator = SlugAllocator()
        self.assertEqual(allocator.allocate("congo"), "congo")
        self.assertEqual(allocator.allocate("congo"), "congo-2")
        self.assertEqual(allocator.allocate("congo"), "congo-3")
        self.assertIn("congo-2", allocator)

    def test_skips_suffix_already_taken(self):
        allocator = SlugAllocator()
        allocator.allocate("georgia-2")
        allocator.allocate("georgia")
        self.assertEqual(allocator.allocate("georgia"), "georgia-3")


if __name__ == "__main__":
    unittest.main()

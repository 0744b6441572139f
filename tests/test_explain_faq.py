import unittest

from models.schemas import RequirementType
from requirements.explain import VERIFY_WITH_OFFICIAL_SOURCES, get_requirement_explanation
from requirements.faq import get_visa_faq, normalize_faq_type


class ExplanationTests(unittest.TestCase):
    def test_days_are_interpolated(self):
        text = get_requirement_explanation(RequirementType.NO_VISA_DAYS, 90)
        self.assertIn("hasta 90 días", text)

    def test_days_type_without_days_falls_back(self):
        self.assertEqual(get_requirement_explanation(RequirementType.NO_VISA_DAYS), VERIFY_WITH_OFFICIAL_SOURCES)

    def test_missing_or_unknown_type(self):
        self.assertEqual(get_requirement_explanation(), VERIFY_WITH_OFFICIAL_SOURCES)
        self.assertEqual(get_requirement_explanation(RequirementType.UNKNOWN), VERIFY_WITH_OFFICIAL_SOURCES)

    def test_electronic_authorizations_share_text(self):
        eta = get_requirement_explanation(RequirementType.ETA)
        self.assertEqual(eta, get_requirement_explanation(RequirementType.ESTA))
        self.assertIn("autorización electrónica", eta)


class FaqTests(unittest.TestCase):
    def test_item_count_bounds(self):
        for requirement_type in RequirementType:
            with self.subTest(type=requirement_type):
                items = get_visa_faq(requirement_type.value, "Japón")
                self.assertGreaterEqual(len(items), 4)
                self.assertLessEqual(len(items), 6)

    def test_destination_is_mentioned(self):
        items = get_visa_faq("REQUIRES_VISA", "Japón")
        self.assertTrue(any("Japón" in item.question for item in items))

    def test_unknown_type_gets_unknown_set(self):
        items = get_visa_faq("something else", "Chile")
        self.assertEqual(items, get_visa_faq("UNKNOWN", "Chile"))

    def test_normalize_faq_type(self):
        self.assertEqual(normalize_faq_type("E_VISA"), RequirementType.E_VISA)
        self.assertEqual(normalize_faq_type("visa_free"), RequirementType.NO_VISA)
        self.assertEqual(normalize_faq_type("NO_VISA_DAYS"), RequirementType.NO_VISA_DAYS)
        self.assertEqual(normalize_faq_type("VOA"), RequirementType.VOA)
        self.assertEqual(normalize_faq_type(""), RequirementType.UNKNOWN)


if __name__ == "__main__":
    unittest.main()

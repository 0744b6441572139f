import unittest

from models.countries import DESTINATION_COUNTRIES, ORIGIN_COUNTRIES
from models.schemas import HenleyDataset, HenleyVisaEntry
from requirements.catalog import RequirementCatalog, build_requirement, merge_henley


class BuildRequirementTests(unittest.TestCase):
    def test_destination_override_applies(self):
        req = build_requirement("chile", "estados-unidos")
        self.assertTrue(req.visa_required)
        self.assertEqual(req.alt_permit, "ESTA")
        self.assertEqual(req.last_reviewed, "2024-06-15")

    def test_default_template_fills_gaps(self):
        req = build_requirement("chile", "brasil")
        self.assertFalse(req.visa_required)
        self.assertEqual(req.max_stay_days, 90)
        self.assertTrue(req.passport_rule)

    def test_layers_do_not_share_state(self):
        first = build_requirement("chile", "brasil")
        first.notes.append("mutated")
        self.assertNotIn("mutated", build_requirement("argentina", "brasil").notes)


class MergeHenleyTests(unittest.TestCase):
    def setUp(self):
        self.base = build_requirement("chile", "japon")

    def test_none_entry_returns_base(self):
        self.assertIs(merge_henley(self.base, None), self.base)

    def test_overlay_replaces_visa_flag_and_review_date(self):
        entry = HenleyVisaEntry(requires_visa=False, pdf_updated_at="2024-03-12")
        merged = merge_henley(self.base, entry)
        self.assertFalse(merged.visa_required)
        self.assertEqual(merged.last_reviewed, "2024-03-12")
        self.assertEqual(merged.sources, self.base.sources)
        self.assertEqual(merged.embassy, self.base.embassy)

    def test_base_is_not_mutated(self):
        merge_henley(self.base, HenleyVisaEntry(requires_visa=False))
        self.assertTrue(self.base.visa_required)

    def test_overlay_can_require_a_visa(self):
        base = build_requirement("chile", "brasil")
        merged = merge_henley(base, HenleyVisaEntry(requires_visa=True))
        self.assertFalse(base.visa_required)
        self.assertTrue(merged.visa_required)
        self.assertEqual(merged.notes, base.notes)
        self.assertEqual(merged.last_reviewed, base.last_reviewed)

    def test_unknown_flag_keeps_base_value(self):
        merged = merge_henley(self.base, HenleyVisaEntry(pdf_updated_at="2024-03-12"))
        self.assertTrue(merged.visa_required)
        self.assertEqual(merged.last_reviewed, "2024-03-12")


class RequirementCatalogTests(unittest.TestCase):
    def test_covers_every_pair(self):
        catalog = RequirementCatalog()
        self.assertEqual(len(catalog), len(ORIGIN_COUNTRIES) * len(DESTINATION_COUNTRIES))
        self.assertIsNone(catalog.find("chile", "narnia"))

    def test_overlay_is_looked_up_by_iso_code(self):
        henley = HenleyDataset(
            generated_at="2024-03-12T00:00:00Z",
            matrix={"CL": {"JP": HenleyVisaEntry(requires_visa=False, pdf_updated_at="2024-03-12")}},
        )
        catalog = RequirementCatalog(henley)
        self.assertFalse(catalog.find("chile", "japon").visa_required)
        self.assertTrue(catalog.find("argentina", "japon").visa_required)
        self.assertTrue(RequirementCatalog().find("chile", "japon").visa_required)


if __name__ == "__main__":
    unittest.main()

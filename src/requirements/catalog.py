import copy
from typing import Dict, Iterator, Optional, Tuple

from models.countries import DESTINATION_COUNTRIES, ORIGIN_COUNTRIES, find_country
from models.schemas import HenleyDataset, HenleyVisaEntry, Requirement
from requirements.curated import DEFAULT_REQUIREMENT, DESTINATION_OVERRIDES, PAIR_OVERRIDES


def build_requirement(origin_slug: str, dest_slug: str) -> Requirement:
    """
    Layer default template < destination override < pair override.
    """
    fields = copy.deepcopy(DEFAULT_REQUIREMENT)
    fields["visa_required"] = False
    fields.update(copy.deepcopy(DESTINATION_OVERRIDES.get(dest_slug, {})))
    fields.update(copy.deepcopy(PAIR_OVERRIDES.get((origin_slug, dest_slug), {})))
    return Requirement(origin_slug=origin_slug, dest_slug=dest_slug, **fields)


def merge_henley(base: Requirement, entry: Optional[HenleyVisaEntry]) -> Requirement:
    """
    Overlay a Henley entry on a curated requirement without mutating ``base``.

    Only ``visa_required`` and ``last_reviewed`` can change; notes, sources and
    embassy details always come from the curated base.
    """
    if entry is None:
        return base
    update = {}
    if entry.requires_visa is not None:
        update["visa_required"] = entry.requires_visa
    if entry.pdf_updated_at:
        update["last_reviewed"] = entry.pdf_updated_at
    if not update:
        return base
    return base.model_copy(update=update, deep=True)


class RequirementCatalog:
    """
    Curated origin x destination requirements, optionally overlaid with Henley data.
    """

    def __init__(self, henley: Optional[HenleyDataset] = None):
        self.henley = henley
        self._base: Dict[Tuple[str, str], Requirement] = {}
        for origin in ORIGIN_COUNTRIES:
            for dest in DESTINATION_COUNTRIES:
                self._base[(origin.slug, dest.slug)] = build_requirement(origin.slug, dest.slug)

    def henley_entry(self, origin_slug: str, dest_slug: str) -> Optional[HenleyVisaEntry]:
        if not self.henley:
            return None
        origin = find_country(origin_slug)
        dest = find_country(dest_slug)
        if not origin or not dest or not origin.iso2 or not dest.iso2:
            return None
        return self.henley.matrix.get(origin.iso2, {}).get(dest.iso2)

    def find(self, origin_slug: str, dest_slug: str) -> Optional[Requirement]:
        base = self._base.get((origin_slug, dest_slug))
        if base is None:
            return None
        return merge_henley(base, self.henley_entry(origin_slug, dest_slug))

    def __iter__(self) -> Iterator[Requirement]:
        for origin_slug, dest_slug in self._base:
            yield self.find(origin_slug, dest_slug)

    def __len__(self) -> int:
        return len(self._base)

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from models.schemas import CountryIndex, CountryIndexEntry, DestinationEntry, HenleyDataset, HenleyMeta, OriginVisaData

logger = logging.getLogger(__name__)


def write_json_atomic(path: Path, payload: Any) -> None:
    """
    Write JSON to a sibling temp file and rename it over ``path``.

    Readers in another process see either the old file or the new one, never
    a partial write.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def read_json(path: Path) -> Optional[Any]:
    path = Path(path)
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


class DatasetStore:
    """
    Read-through cache over the generated artifacts.

    Create one per process and hand it to consumers. Artifacts are immutable
    between builds, so nothing is ever invalidated.
    """

    def __init__(self, generated_dir: Path, henley_path: Optional[Path] = None, henley_meta_path: Optional[Path] = None):
        self.generated_dir = Path(generated_dir)
        self.henley_path = Path(henley_path) if henley_path else None
        self.henley_meta_path = Path(henley_meta_path) if henley_meta_path else None
        self._index: Optional[CountryIndex] = None
        self._by_key: Optional[Dict[str, CountryIndexEntry]] = None
        self._origins: Dict[str, Optional[OriginVisaData]] = {}
        self._henley: Optional[Tuple[Optional[HenleyDataset]]] = None
        self._henley_meta: Optional[Tuple[Optional[HenleyMeta]]] = None

    def index(self) -> CountryIndex:
        if self._index is None:
            raw = read_json(self.generated_dir / "index.json")
            self._index = CountryIndex.model_validate(raw) if raw else CountryIndex()
        return self._index

    def get_by_key(self, key: str) -> Optional[CountryIndexEntry]:
        if self._by_key is None:
            self._by_key = {entry.key: entry for entry in self.index().list}
        return self._by_key.get(key)

    def origin(self, key: str) -> Optional[OriginVisaData]:
        if key not in self._origins:
            path = self.generated_dir / f"{key}.json"
            # Keys come from URLs; refuse anything that escapes the directory.
            if path.resolve().parent != self.generated_dir.resolve():
                return None
            raw = read_json(path)
            self._origins[key] = OriginVisaData.model_validate(raw) if raw else None
        return self._origins[key]

    def henley(self) -> Optional[HenleyDataset]:
        if self._henley is None:
            self._henley = (self._load_optional(self.henley_path, HenleyDataset),)
        return self._henley[0]

    def henley_meta(self) -> Optional[HenleyMeta]:
        if self._henley_meta is None:
            self._henley_meta = (self._load_optional(self.henley_meta_path, HenleyMeta),)
        return self._henley_meta[0]

    def _load_optional(self, path: Optional[Path], model):
        if path is None:
            return None
        try:
            raw = read_json(path)
            return model.model_validate(raw) if raw else None
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Could not read overlay %s: %s", path, exc)
            return None

    def resolve_origin(self, slug: str) -> Optional[Tuple[CountryIndexEntry, str, bool]]:
        """
        Returns (entry, canonical slug, redirected) or None.
        """
        index = self.index()
        key = index.map_slug_to_key.get(slug)
        if key:
            entry = self.get_by_key(key)
            return (entry, slug, False) if entry else None
        canonical = index.map_alt_to_slug.get(slug)
        if canonical and canonical in index.map_slug_to_key:
            entry = self.get_by_key(index.map_slug_to_key[canonical])
            return (entry, canonical, True) if entry else None
        return None

    @staticmethod
    def resolve_destination(data: OriginVisaData, slug: str) -> Optional[Tuple[DestinationEntry, str, bool]]:
        canonical = data.alt_slug_to_slug.get(slug, slug)
        key = data.slug_to_key.get(canonical)
        if not key:
            return None
        destination = next((dest for dest in data.destinations if dest.key == key), None)
        if destination is None:
            return None
        return destination, canonical, canonical != slug

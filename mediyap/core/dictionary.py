"""
MediYap Dictionary Store
Holds the prefix, suffix and root dictionaries used to decode medical terms
"""

import csv
import io
import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

KINDS = ("prefix", "suffix", "root")

# Section names used in YAML files and exports
SECTION_NAMES = {"prefix": "prefixes", "suffix": "suffixes", "root": "roots"}

# Word-initial morphemes
PREFIXES_YAML = """
hypo: "low"
hyper: "high"
a: "without"
an: "without"
brady: "slow"
tachy: "fast"
poly: "many"
oligo: "few"
macro: "large"
micro: "small"
eu: "normal"
dys: "difficult/painful/abnormal"
hyster: "uterus"
peri: "around"
endo: "within"
epi: "upon/above"
intra: "within"
inter: "between"
sub: "below"
trans: "across"
"""

# Word-final morphemes (conditions, procedures)
SUFFIXES_YAML = """
emia: "presence in blood"
uria: "presence in urine"
itis: "inflammation"
osis: "condition/disease"
pathy: "disease"
penia: "deficiency"
cytosis: "increase in cells"
lysis: "breakdown/destruction"
algia: "pain"
ectomy: "surgical removal"
otomy: "surgical incision"
ostomy: "surgical opening"
plasty: "surgical repair"
scopy: "visual examination"
graphy: "recording process"
gram: "record/image"
megaly: "enlargement"
rrhea: "flow/discharge"
rrhage: "excessive bleeding"
rrhagia: "excessive bleeding"
"""

# Anatomical and physiological roots
ROOTS_YAML = """
glyc: "glucose/sugar"
gluc: "glucose/sugar"
card: "heart"
cardi: "heart"
hem: "blood"
hemat: "blood"
thromb: "clot"
thrombocyt: "clot cell"
leuk: "white"
erythr: "red"
cyan: "blue"
neur: "nerve"
gastr: "stomach"
hepat: "liver"
nephr: "kidney"
ren: "kidney"
pulmon: "lung"
pneum: "lung/air"
dermat: "skin"
derm: "skin"
oste: "bone"
arthr: "joint"
my: "muscle"
cyt: "cell"
path: "disease"
therm: "heat/temperature"
py: "pus"
rhin: "nose"
ot: "ear"
ophthalm: "eye"
angi: "vessel"
vas: "vessel"
phleb: "vein"
arteri: "artery"
lymph: "lymph"
immun: "immune"
toxic: "poison"
psych: "mind"
encephal: "brain"
cerebr: "brain"
mening: "membrane/meninges"
vertebr: "spine"
cost: "rib"
thorac: "chest"
abdomin: "abdomen"
enter: "intestine"
col: "colon"
proct: "rectum"
esophag: "esophagus"
gloss: "tongue"
dent: "tooth"
gingiv: "gum"
"""


@dataclass(frozen=True)
class AffixEntry:
    """A single dictionary entry: an affix or root spelling and its gloss"""
    kind: str
    key: str
    meaning: str


def _check_kind(kind: str) -> str:
    if kind not in KINDS:
        raise ValueError(f"Unknown entry kind: {kind!r} (expected one of {', '.join(KINDS)})")
    return kind


def _normalize(entries: Mapping[Any, Any], kind: str) -> Dict[str, str]:
    """Lowercase keys and reject empty keys or meanings, keeping declaration order"""
    normalized = {}
    for key, meaning in entries.items():
        key_text = str(key).strip().lower() if key is not None else ""
        if not key_text:
            raise ValueError(f"Empty {kind} key in dictionary")
        if meaning is None or not str(meaning).strip():
            raise ValueError(f"Empty meaning for {kind} '{key_text}'")
        normalized[key_text] = str(meaning).strip()
    return normalized


def _load_section(text: str, kind: str) -> Dict[str, str]:
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping of {kind} entries")
    return _normalize(data, kind)


class MedicalDictionary:
    """
    Read-only prefix, suffix and root dictionaries
    """

    def __init__(self,
                 prefixes: Optional[Mapping[str, str]] = None,
                 suffixes: Optional[Mapping[str, str]] = None,
                 roots: Optional[Mapping[str, str]] = None,
                 custom_entries: Optional[Mapping[str, Mapping[str, str]]] = None):
        """
        Initialize the dictionary store

        Args:
            prefixes: Replacement prefix mapping (defaults to the built-in set)
            suffixes: Replacement suffix mapping (defaults to the built-in set)
            roots: Replacement root mapping (defaults to the built-in set)
            custom_entries: Optional extra entries keyed by section name
                ("prefixes", "suffixes", "roots") to add/override
        """
        tables = {
            "prefix": _normalize(prefixes, "prefix") if prefixes is not None
            else _load_section(PREFIXES_YAML, "prefix"),
            "suffix": _normalize(suffixes, "suffix") if suffixes is not None
            else _load_section(SUFFIXES_YAML, "suffix"),
            "root": _normalize(roots, "root") if roots is not None
            else _load_section(ROOTS_YAML, "root"),
        }

        if custom_entries:
            section_kinds = {name: kind for kind, name in SECTION_NAMES.items()}
            for section, entries in custom_entries.items():
                if section not in section_kinds:
                    raise ValueError(f"Unknown dictionary section: {section!r}")
                if not entries:
                    continue
                if not isinstance(entries, Mapping):
                    raise ValueError(f"Section {section!r} must be a mapping of key to meaning")
                kind = section_kinds[section]
                tables[kind].update(_normalize(entries, kind))

        self._tables = {kind: MappingProxyType(table) for kind, table in tables.items()}

        logger.info(
            f"Loaded dictionary with {len(self.prefixes)} prefixes, "
            f"{len(self.suffixes)} suffixes and {len(self.roots)} roots"
        )

    @classmethod
    def from_yaml_file(cls, path: str) -> 'MedicalDictionary':
        """
        Build the built-in dictionary extended with entries from a YAML file

        The file holds up to three sections (prefixes, suffixes, roots),
        each a mapping of spelling to meaning.
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to load dictionary from {path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Failed to load dictionary from {path}: expected a mapping of sections")

        logger.info(f"Extending dictionary with entries from {path}")
        return cls(custom_entries=data)

    @property
    def prefixes(self) -> Mapping[str, str]:
        return self._tables["prefix"]

    @property
    def suffixes(self) -> Mapping[str, str]:
        return self._tables["suffix"]

    @property
    def roots(self) -> Mapping[str, str]:
        return self._tables["root"]

    def table(self, kind: str) -> Mapping[str, str]:
        """Read-only mapping for one kind of entry"""
        return self._tables[_check_kind(kind)]

    def entries(self, kind: Optional[str] = None) -> Iterator[AffixEntry]:
        """
        Iterate dictionary entries in declaration order

        Args:
            kind: "prefix", "suffix" or "root"; all kinds when None

        Returns:
            Iterator of AffixEntry
        """
        kinds = KINDS if kind is None else (_check_kind(kind),)
        for k in kinds:
            for key, meaning in self._tables[k].items():
                yield AffixEntry(k, key, meaning)

    def __iter__(self) -> Iterator[AffixEntry]:
        return self.entries()

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())

    def get_meaning(self, key: str, kind: Optional[str] = None) -> Optional[str]:
        """
        Get the meaning of an exact spelling

        Args:
            key: Affix or root spelling (case-insensitive)
            kind: Restrict the lookup to one kind

        Returns:
            Meaning or None if not found
        """
        key_lower = key.lower()
        kinds = KINDS if kind is None else (_check_kind(kind),)
        for k in kinds:
            if key_lower in self._tables[k]:
                return self._tables[k][key_lower]
        return None

    def search(self, query: str) -> List[AffixEntry]:
        """
        Search for entries whose spelling or meaning contains the query

        Args:
            query: Search query

        Returns:
            Matching entries, most relevant first
        """
        query_lower = query.lower()
        results = [
            entry for entry in self.entries()
            if query_lower in entry.key or query_lower in entry.meaning.lower()
        ]

        # Sort by relevance
        def sort_key(entry):
            # Exact match gets highest priority
            if entry.key == query_lower:
                return (0, len(entry.key))
            elif entry.key.startswith(query_lower):
                return (1, len(entry.key))
            elif query_lower in entry.key:
                return (2, len(entry.key))
            # Query in meaning
            else:
                return (3, len(entry.key))

        results.sort(key=sort_key)

        return results

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {SECTION_NAMES[kind]: dict(table) for kind, table in self._tables.items()}

    def export(self, format: str = "json") -> str:
        """
        Export the dictionary in different formats

        Args:
            format: Export format ("json", "yaml", "csv")

        Returns:
            Formatted dictionary string
        """
        if format == "json":
            return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

        elif format == "yaml":
            return yaml.safe_dump(self.to_dict(), default_flow_style=False,
                                  allow_unicode=True, sort_keys=False)

        elif format == "csv":
            buffer = io.StringIO()
            writer = csv.writer(buffer, lineterminator="\n")
            writer.writerow(["kind", "key", "meaning"])
            for entry in self.entries():
                writer.writerow([entry.kind, entry.key, entry.meaning])
            return buffer.getvalue()

        else:
            raise ValueError(f"Unknown format: {format}")

    def get_stats(self) -> Dict[str, int]:
        """Get statistics about the dictionary"""
        return {
            'prefixes': len(self.prefixes),
            'suffixes': len(self.suffixes),
            'roots': len(self.roots),
            'total_entries': len(self),
            'unique_meanings': len({entry.meaning for entry in self.entries()}),
        }

"""
MediYap Term Decoder
Splits a medical term into prefix, root and suffix and glosses each part
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .config import DecoderConfig
from .dictionary import MedicalDictionary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentMatch:
    """One matched span of the lowercased term"""
    kind: str
    text: str
    meaning: Optional[str]
    start: int
    end: int

    @property
    def recognized(self) -> bool:
        return self.meaning is not None

    def render(self) -> str:
        # Unknown root fragments are shown bracketed
        if self.meaning is None:
            return f"[{self.text}]"
        return self.meaning


@dataclass(frozen=True)
class DecodedTerm:
    """Result of decoding one term: up to three components in prefix, root, suffix order"""
    term: str
    components: Tuple[ComponentMatch, ...] = ()

    @property
    def parts(self) -> List[str]:
        return [component.render() for component in self.components]

    @property
    def recognized(self) -> bool:
        return bool(self.components)

    def component(self, kind: str) -> Optional[ComponentMatch]:
        for component in self.components:
            if component.kind == kind:
                return component
        return None

    def to_text(self) -> str:
        if not self.components:
            return f"Unable to decode '{self.term}'"
        return " ".join(self.parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "term": self.term,
            "decoded": self.to_text(),
            "components": [
                {
                    "kind": c.kind,
                    "text": c.text,
                    "meaning": c.meaning,
                    "start": c.start,
                    "end": c.end,
                }
                for c in self.components
            ],
        }

    def __str__(self) -> str:
        return self.to_text()


def _ordered(table, match_order: str) -> Tuple[Tuple[str, str], ...]:
    """Candidate (key, meaning) pairs in tie-break order"""
    items = list(table.items())
    if match_order == "longest":
        # sorted() is stable, so equal lengths keep declaration order
        items = sorted(items, key=lambda item: len(item[0]), reverse=True)
    return tuple(items)


class MedicalDecoder:
    """
    Decodes medical terms into plain English using the prefix, suffix and root dictionaries
    """

    def __init__(self,
                 dictionary: Optional[MedicalDictionary] = None,
                 config: Optional[DecoderConfig] = None):
        """
        Initialize the decoder

        Args:
            dictionary: Dictionary store to match against (built-in set by default)
            config: Decoder configuration (longest-match tie-break by default)
        """
        self.dictionary = dictionary or MedicalDictionary()
        self.config = config or DecoderConfig()

        self._prefixes = _ordered(self.dictionary.prefixes, self.config.match_order)
        self._suffixes = _ordered(self.dictionary.suffixes, self.config.match_order)
        self._roots = _ordered(self.dictionary.roots, self.config.match_order)

    def analyze(self, term: str) -> DecodedTerm:
        """
        Segment a term into its matched components

        Args:
            term: Medical term, any casing

        Returns:
            DecodedTerm holding the matched prefix, root and suffix
        """
        term_lower = term.lower()
        components = []

        # Find prefix
        offset = 0
        prefix_found = False
        for prefix, meaning in self._prefixes:
            if term_lower.startswith(prefix):
                components.append(ComponentMatch("prefix", prefix, meaning, 0, len(prefix)))
                offset = len(prefix)
                prefix_found = True
                break
        remaining = term_lower[offset:]

        # Find suffix (only bounds the root for now)
        suffix_match = None
        for suffix, meaning in self._suffixes:
            if remaining.endswith(suffix):
                end = len(term_lower)
                suffix_match = ComponentMatch("suffix", suffix, meaning, end - len(suffix), end)
                break

        # Root is whatever sits between prefix and suffix
        root_part = remaining[:len(remaining) - len(suffix_match.text)] if suffix_match else remaining

        if root_part:
            root_match = None
            for root, meaning in self._roots:
                if root_part.startswith(root) or root in root_part:
                    start = offset + root_part.index(root)
                    root_match = ComponentMatch("root", root, meaning, start, start + len(root))
                    break

            if root_match:
                components.append(root_match)
            elif prefix_found:
                components.append(
                    ComponentMatch("root", root_part, None, offset, offset + len(root_part))
                )

        if suffix_match:
            components.append(suffix_match)

        decoded = DecodedTerm(term, tuple(components))
        logger.debug(f"Decoded {term!r} -> {decoded.parts}")
        return decoded

    def decode(self, term: str) -> str:
        """
        Decode a medical term into plain English

        Args:
            term: Medical term, any casing

        Returns:
            Meanings joined by spaces, or an "Unable to decode" message
        """
        return self.analyze(term).to_text()

import re
from typing import Dict, Iterable, List, Optional

from hallinks.core.exceptions import InvalidLinkError
from hallinks.core.models.link import CURIES, REL_PLACEHOLDER, Link, curi
from hallinks.core.settings import logger


def _template_pattern(template: str) -> re.Pattern:
    head, tail = template.split(REL_PLACEHOLDER, 1)
    return re.compile(f"^{re.escape(head)}(.+){re.escape(tail)}$")


class CurieRegistry:
    """Registry of CURIE prefixes used to shorten and expand link relations.

    Each prefix maps to a relation template with a single ``{rel}``
    placeholder. Given the curie ``o -> http://spec.example.org/rels/{rel}``:

    - ``resolve("http://spec.example.org/rels/product")`` returns ``"o:product"``
    - ``expand("o:product")`` returns ``"http://spec.example.org/rels/product"``

    Relations that match no registered prefix are returned unchanged by both
    operations. When several templates match a full URI, the prefix
    registered first wins. Re-registering a prefix replaces its template but
    keeps its position.

    Instances are safe for concurrent reads once registration is finished.
    """

    def __init__(self, curies: Optional[Dict[str, str]] = None):
        self._curies: Dict[str, str] = {}
        self._patterns: Dict[str, re.Pattern] = {}
        for name, template in (curies or {}).items():
            self.register(curi(name, template))

    @classmethod
    def empty(cls) -> "CurieRegistry":
        return cls()

    @classmethod
    def from_links(cls, links: Iterable[Link]) -> "CurieRegistry":
        """Build a registry from the CURIE links contained in `links`."""
        registry = cls()
        for link in links:
            if link.rel == CURIES:
                registry.register(link)
        return registry

    def _put(self, name: str, template: str) -> None:
        self._curies[name] = template
        self._patterns[name] = _template_pattern(template)

    def register(self, curi_link: Link) -> None:
        if curi_link.rel != CURIES:
            raise InvalidLinkError(
                f"Link must be a CURIE (rel '{CURIES}') to be registered, not '{curi_link.rel}'",
                rel=curi_link.rel,
                href=curi_link.href,
            )
        # name and placeholder are guaranteed by Link validation
        name = curi_link.name or ""
        previous = self._curies.get(name)
        if previous is not None and previous != curi_link.href:
            logger.debug("Replacing curie name=%s template=%s with %s", name, previous, curi_link.href)
        self._put(name, curi_link.href)

    def _known_curie(self, rel: str) -> Optional[tuple[str, str]]:
        name, sep, local = rel.partition(":")
        if sep and local and name in self._curies:
            return name, local
        return None

    def resolve(self, rel: str) -> str:
        """Return the curied form of `rel` if a registered prefix matches it."""
        if self._known_curie(rel) is not None:
            return rel
        for name, pattern in self._patterns.items():
            match = pattern.match(rel)
            if match:
                return f"{name}:{match.group(1)}"
        return rel

    def expand(self, rel: str) -> str:
        """Return the full URI of a curied `rel`, or `rel` itself if it is not curied."""
        known = self._known_curie(rel)
        if known is None:
            return rel
        name, local = known
        return self._curies[name].replace(REL_PLACEHOLDER, local)

    def copy(self) -> "CurieRegistry":
        """Return an independent registry with the same curies in the same order."""
        return CurieRegistry(self._curies)

    def merge_with(self, other: "CurieRegistry") -> "CurieRegistry":
        """Return a new registry with the curies of both; `other` wins on name clashes."""
        merged = CurieRegistry(self._curies)
        for name, template in other._curies.items():
            merged.register(curi(name, template))
        return merged

    def curies(self) -> List[Link]:
        return [curi(name, template) for name, template in self._curies.items()]

    def is_empty(self) -> bool:
        return not self._curies

    def __len__(self) -> int:
        return len(self._curies)

    def __contains__(self, name: object) -> bool:
        return name in self._curies

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurieRegistry):
            return NotImplemented
        return self._curies == other._curies

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CurieRegistry({self._curies!r})"

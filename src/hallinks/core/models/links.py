"""The `_links` collection of a HAL resource.

`Links` keeps links in insertion order and groups them by relation type.
Relations are compared in their expanded form (curies replaced by the
full URI they stand for) and rendered in their curied form, so a link
added as ``http://spec.example.org/rels/product`` is found by a query
for ``o:product`` once the curie ``o`` is declared, and vice versa.

Containers are assembled with `linking_to()`::

    links = (
        linking_to()
        .self_link("http://example.org/products")
        .curi("o", "http://spec.example.org/rels/{rel}")
        .array(link("o:product", "http://example.org/products/42"))
        .build()
    )

Each relation remembers whether it was added as a single link or as an
array of links (see `Cardinality`); serializers use this to render either
a link object or an array of link objects.

Reading a container from several threads is safe. `remove` is not
synchronized: callers that mutate a shared container must serialize access
themselves.
"""

from enum import StrEnum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from hallinks.core.models.curie_registry import CurieRegistry
from hallinks.core.models.link import CURIES, ITEM, Link, curi, self_link
from hallinks.core.models.link_predicates import LinkPredicate
from hallinks.core.settings import logger


class Cardinality(StrEnum):
    SINGLE = "single"
    ARRAY = "array"


LinkOrLinks = Union[Link, Iterable[Link]]


def _flatten(items: Iterable[LinkOrLinks]) -> List[Link]:
    flat: List[Link] = []
    for entry in items:
        if isinstance(entry, Link):
            flat.append(entry)
        else:
            flat.extend(entry)
    return flat


class Links:
    def __init__(
        self,
        links: Iterable[Link] = (),
        cardinalities: Optional[Mapping[str, Cardinality]] = None,
        registry: Optional[CurieRegistry] = None,
    ):
        """Create a container from `links`.

        Args:
            links: links in insertion order
            cardinalities: cardinality per relation, keyed by the rel as it
                was added; relations without an entry count as SINGLE
            registry: curies declared outside of this container, e.g. by a
                resource embedding this one; curie links contained in
                `links` take precedence
        """
        self._links: List[Link] = list(links)
        self._cardinalities: Dict[str, Cardinality] = dict(cardinalities or {})
        self._parent_registry = registry.copy() if registry is not None else CurieRegistry.empty()
        self._registry: Optional[CurieRegistry] = None
        # canonical (expanded) rel -> links, and canonical rel -> rel as rendered
        self._index: Optional[Dict[str, List[Link]]] = None
        self._rendered_rels: Dict[str, str] = {}

    def _invalidate(self) -> None:
        self._registry = None
        self._index = None
        self._rendered_rels = {}

    def _current_registry(self) -> CurieRegistry:
        if self._registry is None:
            self._registry = self._parent_registry.merge_with(CurieRegistry.from_links(self._links))
        return self._registry

    @property
    def registry(self) -> CurieRegistry:
        """Copy of the curies in effect for this container.

        The registry is derived from the container's curie links; registering
        curies on the returned copy does not change how this container
        resolves relations.
        """
        return self._current_registry().copy()

    def _canonical(self, rel: str) -> str:
        registry = self._current_registry()
        return registry.expand(registry.resolve(rel))

    def _rel_index(self) -> Dict[str, List[Link]]:
        if self._index is None:
            registry = self._current_registry()
            index: Dict[str, List[Link]] = {}
            rendered: Dict[str, str] = {}
            for link in self._links:
                canonical = self._canonical(link.rel)
                if canonical not in index:
                    rendered[canonical] = registry.resolve(link.rel)
                index.setdefault(canonical, []).append(link)
            self._index = index
            self._rendered_rels = rendered
        return self._index

    def using(self, registry: CurieRegistry) -> "Links":
        """Return a copy that also resolves relations with the curies of `registry`."""
        return Links(self._links, self._cardinalities, registry.merge_with(self._parent_registry))

    def get_link_by(self, rel: str, predicate: Optional[LinkPredicate] = None) -> Optional[Link]:
        """Return the first link of `rel` matching `predicate`, or None."""
        for link in self._rel_index().get(self._canonical(rel), ()):
            if predicate is None or predicate(link):
                return link
        return None

    def get_links_by(self, rel: str, predicate: Optional[LinkPredicate] = None) -> List[Link]:
        """Return all links of `rel` matching `predicate` in insertion order."""
        group = self._rel_index().get(self._canonical(rel), [])
        if predicate is None:
            return list(group)
        return [link for link in group if predicate(link)]

    def get_rels(self) -> List[str]:
        """Distinct relations in first-appearance order, curied where possible."""
        self._rel_index()
        return list(self._rendered_rels.values())

    def cardinality(self, rel: str) -> Optional[Cardinality]:
        """How links of `rel` were added; None if the container has no such links."""
        canonical = self._canonical(rel)
        if canonical not in self._rel_index():
            return None
        if canonical == CURIES:
            return Cardinality.ARRAY
        for added_as, cardinality in self._cardinalities.items():
            if cardinality is Cardinality.ARRAY and self._canonical(added_as) == canonical:
                return Cardinality.ARRAY
        return Cardinality.SINGLE

    def remove(self, rel: str) -> None:
        """Remove all links of `rel`. Removing an unknown rel does nothing."""
        canonical = self._canonical(rel)
        remaining = [link for link in self._links if self._canonical(link.rel) != canonical]
        removed = len(self._links) - len(remaining)
        if not removed:
            return
        self._links = remaining
        self._cardinalities = {
            added_as: cardinality
            for added_as, cardinality in self._cardinalities.items()
            if self._canonical(added_as) != canonical
        }
        self._invalidate()
        logger.debug("Removed %s link(s) rel=%s", removed, canonical)

    def stream(self) -> Iterator[Link]:
        return iter(list(self._links))

    def is_empty(self) -> bool:
        return not self._links

    def to_dict(self) -> Dict[str, Any]:
        """Render the `_links` object.

        Keys are the resolved relations. Relations added as arrays, curies,
        and relations holding more than one link are rendered as arrays.
        """
        rendered: Dict[str, Any] = {}
        for canonical, group in self._rel_index().items():
            rel = self._rendered_rels[canonical]
            if self.cardinality(canonical) is Cardinality.ARRAY or len(group) > 1:
                rendered[rel] = [link.to_dict() for link in group]
            else:
                rendered[rel] = group[0].to_dict()
        return rendered

    def __iter__(self) -> Iterator[Link]:
        return self.stream()

    def __len__(self) -> int:
        return len(self._links)

    def __contains__(self, rel: object) -> bool:
        return isinstance(rel, str) and self._canonical(rel) in self._rel_index()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Links):
            return NotImplemented
        return self._links == other._links and self._current_registry() == other._current_registry()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Links({self._links!r})"


class LinksBuilder:
    """Accumulates links for a `Links` container.

    `single` and `self_link` add relations rendered as one link object;
    `array`, `item` and `curi` add relations rendered as arrays. Once any
    link of a relation was added as an array, the relation stays an array.
    Adding several links to a single relation is allowed; `get_link_by`
    then returns the first one.
    """

    def __init__(self, registry: Optional[CurieRegistry] = None):
        self._links: List[Link] = []
        self._cardinalities: Dict[str, Cardinality] = {}
        self._registry = registry

    def _add(self, links: Iterable[Link], cardinality: Cardinality) -> "LinksBuilder":
        for link in links:
            self._links.append(link)
            if link.rel == CURIES or cardinality is Cardinality.ARRAY:
                self._cardinalities[link.rel] = Cardinality.ARRAY
            else:
                self._cardinalities.setdefault(link.rel, Cardinality.SINGLE)
        return self

    def self_link(self, href: str) -> "LinksBuilder":
        return self._add([self_link(href)], Cardinality.SINGLE)

    def curi(self, name: str, template: str) -> "LinksBuilder":
        return self._add([curi(name, template)], Cardinality.ARRAY)

    def item(self, href: str, **attributes: Any) -> "LinksBuilder":
        return self._add([Link(rel=ITEM, href=href, **attributes)], Cardinality.ARRAY)

    def single(self, *links: LinkOrLinks) -> "LinksBuilder":
        return self._add(_flatten(links), Cardinality.SINGLE)

    def array(self, *links: LinkOrLinks) -> "LinksBuilder":
        return self._add(_flatten(links), Cardinality.ARRAY)

    def with_links(self, links: Links) -> "LinksBuilder":
        """Append all links of another container, keeping their cardinalities."""
        for link in links.stream():
            self._add([link], links.cardinality(link.rel) or Cardinality.SINGLE)
        return self

    def build(self) -> Links:
        return Links(self._links, self._cardinalities, self._registry)


_EMPTY_LINKS = Links()


def empty_links() -> Links:
    """Shared empty container."""
    return _EMPTY_LINKS


def linking_to(registry: Optional[CurieRegistry] = None) -> LinksBuilder:
    return LinksBuilder(registry)

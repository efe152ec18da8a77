"""Predicates used to filter links of a relation.

A `LinkPredicate` is a callable `(Link) -> bool` that can be combined with
other predicates by conjunction::

    links.get_link_by("item", having_type("text/html") & having_profile("detail"))

The `optionally_having_*` variants also accept links that lack the
attribute altogether, so a query can prefer a specific representation
without excluding links that do not declare one.
"""

from typing import Callable, Optional

from hallinks.core.models.link import Link


class LinkPredicate:
    def __init__(self, test: Callable[[Link], bool], description: str):
        self._test = test
        self._description = description

    def __call__(self, link: Link) -> bool:
        return self._test(link)

    def and_(self, other: "LinkPredicate") -> "LinkPredicate":
        return LinkPredicate(
            lambda link: self(link) and other(link),
            f"{self._description} & {other._description}",
        )

    __and__ = and_

    def __repr__(self) -> str:
        return self._description


def _having(attribute: str, expected: str) -> LinkPredicate:
    return LinkPredicate(
        lambda link: getattr(link, attribute) == expected,
        f"having_{attribute}({expected!r})",
    )


def _optionally_having(attribute: str, expected: str) -> LinkPredicate:
    def test(link: Link) -> bool:
        actual: Optional[str] = getattr(link, attribute)
        return actual is None or actual == expected

    return LinkPredicate(test, f"optionally_having_{attribute}({expected!r})")


def always() -> LinkPredicate:
    return LinkPredicate(lambda link: True, "always()")


def having_type(media_type: str) -> LinkPredicate:
    return _having("type", media_type)


def optionally_having_type(media_type: str) -> LinkPredicate:
    return _optionally_having("type", media_type)


def having_profile(profile: str) -> LinkPredicate:
    return _having("profile", profile)


def optionally_having_profile(profile: str) -> LinkPredicate:
    return _optionally_having("profile", profile)


def having_name(name: str) -> LinkPredicate:
    return _having("name", name)


def optionally_having_name(name: str) -> LinkPredicate:
    return _optionally_having("name", name)


def having_hreflang(hreflang: str) -> LinkPredicate:
    return _having("hreflang", hreflang)


def optionally_having_hreflang(hreflang: str) -> LinkPredicate:
    return _optionally_having("hreflang", hreflang)

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from uritemplate import variables

from hallinks.core.exceptions import InvalidLinkError

SELF = "self"
CURIES = "curies"
ITEM = "item"
COLLECTION = "collection"
PROFILE = "profile"

REL_PLACEHOLDER = "{rel}"


class Link(BaseModel):
    """A HAL link object: one relation to a target resource plus metadata.

    Links are immutable and compare (and hash) by value. A link with
    ``rel == "curies"`` is a CURIE declaration: ``name`` is the prefix and
    ``href`` the relation template containing ``{rel}``.

    If ``templated`` is not given it is derived from ``href``: a link whose
    href contains uri-template expressions is templated.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rel: str
    href: str
    templated: bool = False
    type: Optional[str] = None
    profile: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    hreflang: Optional[str] = None
    deprecation: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def derive_templated(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("templated") is None:
            href = data.get("href")
            data = {**data, "templated": bool(href) and bool(variables(href))}
        return data

    @model_validator(mode="after")
    def ensure_rel_and_href(self):
        if not self.rel:
            raise InvalidLinkError("Link rel must not be empty", rel=self.rel, href=self.href)
        if not self.href:
            raise InvalidLinkError("Link href must not be empty", rel=self.rel, href=self.href)
        if self.rel == CURIES:
            if not self.name:
                raise InvalidLinkError(
                    "CURIE link requires a non-empty name (the prefix)", rel=self.rel, href=self.href
                )
            if not self.templated:
                raise InvalidLinkError("CURIE link must be templated", rel=self.rel, href=self.href)
            if self.href.count(REL_PLACEHOLDER) != 1:
                raise InvalidLinkError(
                    f"CURIE template must contain exactly one {REL_PLACEHOLDER} placeholder",
                    rel=self.rel,
                    href=self.href,
                )
        return self

    @property
    def is_deprecated(self) -> bool:
        return self.deprecation is not None

    @property
    def is_curi(self) -> bool:
        return self.rel == CURIES

    def to_dict(self) -> Dict[str, Any]:
        """HAL link object as it appears below its relation in `_links`."""
        data = self.model_dump(exclude_none=True, exclude={"rel"})
        if not self.templated:
            data.pop("templated", None)
        return data


def link(rel: str, href: str, **attributes: Any) -> Link:
    """Create a link; `attributes` are any of the optional Link fields."""
    return Link(rel=rel, href=href, **attributes)


def self_link(href: str) -> Link:
    return Link(rel=SELF, href=href)


def profile(href: str) -> Link:
    return Link(rel=PROFILE, href=href)


def item(href: str, **attributes: Any) -> Link:
    return Link(rel=ITEM, href=href, **attributes)


def collection(href: str, **attributes: Any) -> Link:
    return Link(rel=COLLECTION, href=href, **attributes)


def curi(name: str, template: str) -> Link:
    """Create a CURIE declaration, e.g. ``curi("o", "http://spec.example.org/rels/{rel}")``."""
    return Link(rel=CURIES, href=template, name=name, templated=True)

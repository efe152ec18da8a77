"""Paging links for resources addressed by page number.

`NumberedPaging` derives the ``self``, ``first``, ``prev``, ``next`` and
``last`` links of a paged resource from the current page number, the page
size and either a ``has_more`` flag or the total number of items::

    page = NumberedPaging.zero_based(page_number=2, page_size=10, total=25)
    links = page.links("http://example.org/items{?page,pageSize}")

Both zero-based and one-based page numbers are supported. The names of the
uri-template variables default to ``page`` and ``pageSize`` and can be
changed with a `PagingConfig` (or the ``HAL_PAGE_NUMBER_VAR`` and
``HAL_PAGE_SIZE_VAR`` settings).

A page size of `UNBOUNDED_PAGE_SIZE` means everything fits on one page: the
template is then expanded without page variables.
"""

import sys
from enum import StrEnum
from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictInt, model_validator

from hallinks.adapters.uritemplate_adapter import UriTemplateAdapter
from hallinks.core.config import PagingConfig
from hallinks.core.exceptions import InvalidPagingParameterError
from hallinks.core.interfaces.uri_template import UriTemplatePort
from hallinks.core.models.link import Link, link, self_link
from hallinks.core.models.links import Links, linking_to
from hallinks.core.settings import hal_settings, logger

UNBOUNDED_PAGE_SIZE = sys.maxsize


class PagingRel(StrEnum):
    # declaration order is the order in which links are emitted
    SELF = "self"
    FIRST = "first"
    PREV = "prev"
    NEXT = "next"
    LAST = "last"


ALL_PAGING_RELS = frozenset(PagingRel)

_default_expander = UriTemplateAdapter()


class NumberedPaging(BaseModel):
    """Position of a page within a numbered sequence of pages.

    Attributes:
        first_page: number of the first page, 0 or 1
        page_number: number of the current page
        page_size: maximum number of items per page
        has_more: whether items exist beyond the current page; derived from
            `total` when the total is known
        total: total number of items, if known; required for the ``last`` link
        page_number_var: uri-template variable receiving the page number
        page_size_var: uri-template variable receiving the page size
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # strict: has_more is derived from these before validation, so no coercion
    first_page: StrictInt
    page_number: StrictInt
    page_size: StrictInt
    has_more: bool = False
    total: Optional[StrictInt] = None
    page_number_var: str = "page"
    page_size_var: str = "pageSize"

    @model_validator(mode="before")
    @classmethod
    def derive_has_more(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("total") is None:
            if data.get("has_more") is None:
                data = {**data, "has_more": False}
            return data
        if data.get("has_more") is not None:
            raise InvalidPagingParameterError(
                "hasMore", data["has_more"], "must not be given together with 'total'"
            )
        first_page, page_number = data.get("first_page"), data.get("page_number")
        page_size, total = data.get("page_size"), data["total"]
        if all(isinstance(v, int) for v in (first_page, page_number, page_size, total)):
            # items before the end of the current page vs. items available
            data = {**data, "has_more": (page_number - first_page + 1) * page_size < total}
        return data

    @model_validator(mode="after")
    def check_parameters(self):
        if self.first_page not in (0, 1):
            raise InvalidPagingParameterError("firstPage", self.first_page, "must be 0 or 1")
        if self.page_number < self.first_page:
            raise InvalidPagingParameterError(
                "pageNumber", self.page_number, f"must not be less than {self.first_page}"
            )
        if self.page_size <= 0:
            raise InvalidPagingParameterError("pageSize", self.page_size, "must be greater than 0")
        if self.total is not None and self.total < 0:
            raise InvalidPagingParameterError("total", self.total, "must be greater or equal 0")
        if self.has_more and self.page_size == UNBOUNDED_PAGE_SIZE:
            raise InvalidPagingParameterError(
                "hasMore", self.has_more, "cannot be used with an unbounded page size"
            )
        return self

    @classmethod
    def _create(
        cls,
        first_page: int,
        page_number: int,
        page_size: int,
        has_more: Optional[bool],
        total: Optional[int],
        config: Optional[PagingConfig],
    ) -> "NumberedPaging":
        config = config or PagingConfig.from_settings(hal_settings)
        return cls(
            first_page=first_page,
            page_number=page_number,
            page_size=page_size,
            has_more=has_more,
            total=total,
            page_number_var=config.page_number_var,
            page_size_var=config.page_size_var,
        )

    @classmethod
    def zero_based(
        cls,
        page_number: int,
        page_size: int,
        *,
        has_more: Optional[bool] = None,
        total: Optional[int] = None,
        config: Optional[PagingConfig] = None,
    ) -> "NumberedPaging":
        """Paging starting with page 0; pass either `has_more` or `total`."""
        return cls._create(0, page_number, page_size, has_more, total, config)

    @classmethod
    def one_based(
        cls,
        page_number: int,
        page_size: int,
        *,
        has_more: Optional[bool] = None,
        total: Optional[int] = None,
        config: Optional[PagingConfig] = None,
    ) -> "NumberedPaging":
        """Paging starting with page 1; pass either `has_more` or `total`."""
        return cls._create(1, page_number, page_size, has_more, total, config)

    @property
    def last_page(self) -> Optional[int]:
        """Number of the last page, or None if the total is unknown."""
        if self.total is None:
            return None
        if self.total == 0:
            return self.first_page
        q, r = divmod(self.total, self.page_size)
        return self.first_page + (q if r > 0 else q - 1)

    def links(
        self,
        page_uri_template: str,
        rels: Iterable[Union[PagingRel, str]] = ALL_PAGING_RELS,
        expander: Optional[UriTemplatePort] = None,
    ) -> Links:
        """Return the requested paging links, all added as single links.

        Links are emitted in the order self, first, prev, next, last. ``prev``
        is omitted on the first page, ``next`` when there are no more items
        and ``last`` when the total is unknown.
        """
        expander = expander or _default_expander
        wanted = {PagingRel(rel) for rel in rels}
        paging_links: List[Link] = []
        for rel in PagingRel:
            if rel not in wanted:
                continue
            target = self._target_page(rel)
            if target is None:
                continue
            href = self._page_uri(expander, page_uri_template, target)
            paging_links.append(self_link(href) if rel is PagingRel.SELF else link(rel.value, href))
        logger.debug(
            "Paging links page=%s size=%s rels=%s",
            self.page_number,
            self.page_size,
            [l.rel for l in paging_links],
        )
        return linking_to().single(paging_links).build()

    def _target_page(self, rel: PagingRel) -> Optional[int]:
        if rel is PagingRel.SELF:
            return self.page_number
        if rel is PagingRel.FIRST:
            return self.first_page
        if rel is PagingRel.PREV:
            return self.page_number - 1 if self.page_number > self.first_page else None
        if rel is PagingRel.NEXT:
            return self.page_number + 1 if self.has_more else None
        return self.last_page

    def _page_uri(self, expander: UriTemplatePort, template: str, page_number: int) -> str:
        if self.page_size == UNBOUNDED_PAGE_SIZE:
            return expander.expand(template, {})
        return expander.expand(
            template,
            {self.page_number_var: page_number, self.page_size_var: self.page_size},
        )

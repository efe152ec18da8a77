from functools import lru_cache
from typing import Any, Mapping

from uritemplate import URITemplate

from hallinks.core.interfaces.uri_template import UriTemplatePort


@lru_cache(maxsize=128)
def _parse(template: str) -> URITemplate:
    return URITemplate(template)


class UriTemplateAdapter(UriTemplatePort):
    """`uritemplate`-based adapter implementing UriTemplatePort.

    Parsed templates are kept in a bounded LRU cache; paging renders the same
    template up to five times per page.
    """

    def expand(self, template: str, variables: Mapping[str, Any]) -> str:
        # uritemplate treats falsy values like 0 as empty; pass numbers as text
        values = {
            name: str(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else value
            for name, value in variables.items()
        }
        return _parse(template).expand(values)

from abc import ABC, abstractmethod
from typing import Any, Mapping


class UriTemplatePort(ABC):
    """Expansion of RFC 6570 uri templates.

    The core never parses templates itself; paging links are produced by
    handing a template and its variables to an implementation of this port.
    """

    @abstractmethod
    def expand(self, template: str, variables: Mapping[str, Any]) -> str:
        """Return `template` with `variables` substituted.

        Variables missing from `variables` expand to nothing, as RFC 6570
        prescribes for undefined values.
        """
        pass

"""Configuration models for core components.

Pydantic-based configuration classes that can be built from the
environment-driven `HalSettings` or constructed directly in tests.
"""

from pydantic import BaseModel, Field


class PagingConfig(BaseModel):
    """Configuration for paging link generation.

    Attributes:
        page_number_var: uri-template variable receiving the page number
        page_size_var: uri-template variable receiving the page size
    """

    page_number_var: str = Field(
        default="page",
        min_length=1,
        description="Name of the uri-template variable used for the page number"
    )

    page_size_var: str = Field(
        default="pageSize",
        min_length=1,
        description="Name of the uri-template variable used for the page size"
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",  # Reject unknown fields
    }

    @classmethod
    def from_settings(cls, settings) -> "PagingConfig":
        """Factory method to construct config from a HalSettings instance.

        Args:
            settings: HalSettings instance from core.settings

        Returns:
            PagingConfig with values from settings
        """
        return cls(
            page_number_var=settings.HAL_PAGE_NUMBER_VAR,
            page_size_var=settings.HAL_PAGE_SIZE_VAR,
        )

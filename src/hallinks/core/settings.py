# Logging adapter for library-wide logging
from hallinks.adapters.logging_adapter import LoggingAdapter

from pydantic import field_validator
from pydantic_settings import BaseSettings
from rich import print

from hallinks.core.interfaces.logging import LoggingPort

# using pydantic_settings to manage environment variables
# and do automatic type casting in a central place
class HalSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }
    HAL_LOG_LEVEL: str = "INFO"
    # Default uri-template variable names used by NumberedPaging
    HAL_PAGE_NUMBER_VAR: str = "page"
    HAL_PAGE_SIZE_VAR: str = "pageSize"

    def print_settings(self, logger: LoggingPort):
        """Prints the settings for debugging purposes"""
        logger.info("HAL Settings:")
        print(self)

    @field_validator("HAL_PAGE_NUMBER_VAR", "HAL_PAGE_SIZE_VAR", mode="before")
    def strip_var_name(cls, value: str) -> str:
        """Template variable names must not carry surrounding whitespace."""
        if isinstance(value, str):
            value = value.strip()
        if not value:
            raise ValueError("uri-template variable names must not be empty")
        return value


hal_settings = HalSettings()

logger = LoggingAdapter("hallinks", hal_settings.HAL_LOG_LEVEL)

"""Tests for settings, paging configuration, logging and the uri-template adapter."""

import logging

import pytest
from pydantic import ValidationError

from hallinks.adapters.logging_adapter import LoggingAdapter
from hallinks.adapters.uritemplate_adapter import UriTemplateAdapter, _parse
from hallinks.core.config import PagingConfig
from hallinks.core.logging_config import coerce_level, configure_logging
from hallinks.core.models.curie_registry import CurieRegistry
from hallinks.core.models.link import curi
from hallinks.core.models.links import linking_to
from hallinks.core.settings import HalSettings


# --- Settings ---

def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("HAL_PAGE_NUMBER_VAR", raising=False)
    monkeypatch.delenv("HAL_PAGE_SIZE_VAR", raising=False)
    settings = HalSettings()
    assert settings.HAL_PAGE_NUMBER_VAR == "page"
    assert settings.HAL_PAGE_SIZE_VAR == "pageSize"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("HAL_PAGE_NUMBER_VAR", " p ")
    monkeypatch.setenv("HAL_LOG_LEVEL", "DEBUG")
    settings = HalSettings()
    assert settings.HAL_PAGE_NUMBER_VAR == "p"
    assert settings.HAL_LOG_LEVEL == "DEBUG"
    assert PagingConfig.from_settings(settings).page_number_var == "p"


def test_settings_reject_blank_variable_name(monkeypatch):
    monkeypatch.setenv("HAL_PAGE_SIZE_VAR", "  ")
    with pytest.raises(ValidationError):
        HalSettings()


def test_print_settings(capsys):
    logger = LoggingAdapter("hallinks.test")
    HalSettings().print_settings(logger)
    assert "HAL_PAGE_SIZE_VAR" in capsys.readouterr().out


def test_paging_config_is_frozen():
    config = PagingConfig()
    with pytest.raises(ValidationError):
        config.page_number_var = "p"
    with pytest.raises(ValidationError):
        PagingConfig(unknown="x")


# --- Logging ---

@pytest.mark.parametrize(
    "level,expected",
    [
        (None, logging.INFO),
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        (10, 10),
        ("critical", logging.CRITICAL),
        ("bogus", logging.INFO),
    ],
)
def test_coerce_level(level, expected):
    assert coerce_level(level) == expected


def test_logging_adapter_emits_through_stdlib(caplog):
    adapter = LoggingAdapter("hallinks.test", "DEBUG")
    with caplog.at_level(logging.DEBUG, logger="hallinks.test"):
        adapter.debug("value=%s", 42)
        adapter.warning("careful")
    assert "value=42" in caplog.text
    assert "careful" in caplog.text


def test_configure_logging_splits_sinks(capsys):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging("INFO")
        configure_logging("INFO")
        assert len(root.handlers) == 2
        logging.getLogger("hallinks.test").info("to stdout")
        logging.getLogger("hallinks.test").error("to stderr")
        captured = capsys.readouterr()
        assert "to stdout" in captured.out
        assert "to stderr" in captured.err
        assert "to stderr" not in captured.out
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)


def test_curie_replacement_and_removal_are_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="hallinks"):
        registry = CurieRegistry({"o": "http://a.example.org/{rel}"})
        registry.register(curi("o", "http://b.example.org/{rel}"))
        links = linking_to().item("http://example.org/1").build()
        links.remove("item")
    assert "Replacing curie name=o" in caplog.text
    assert "Removed 1 link(s) rel=item" in caplog.text


# --- Uri templates ---

def test_uritemplate_adapter_expands_variables():
    adapter = UriTemplateAdapter()
    assert adapter.expand("http://example.org/items{?page,pageSize}", {"page": 0, "pageSize": 10}) == (
        "http://example.org/items?page=0&pageSize=10"
    )


def test_uritemplate_adapter_reuses_parsed_templates():
    _parse.cache_clear()
    adapter = UriTemplateAdapter()
    for page in range(3):
        adapter.expand("http://example.org/items{?page}", {"page": page})
    info = _parse.cache_info()
    assert (info.misses, info.hits) == (1, 2)
    assert info.maxsize is not None


def test_uritemplate_adapter_drops_undefined_variables():
    adapter = UriTemplateAdapter()
    assert adapter.expand("http://example.org/items{?page,pageSize}", {}) == "http://example.org/items"
    assert adapter.expand("http://example.org/items/{id}", {"id": "a b"}) == "http://example.org/items/a%20b"

"""Tests for money helpers, settings, models and notifications"""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from marketplace.config import DEFAULT_HTTP_TIMEOUT, load_settings
from marketplace.errors import ApiValidationError
from marketplace.logging import (
    PACKAGE_LOGGER,
    get_logger,
    sanitize_id_for_logging,
    sanitize_string_for_logging,
)
from marketplace.services.models import Product
from marketplace.services.money import format_money, from_cents, parse_cents
from marketplace.services.notifications import NotificationService, TOAST_SUCCESS


class TestMoney:
    def test_cents_conversion(self):
        assert from_cents(1250) == Decimal("12.50")
        assert from_cents(0) == 0

    def test_no_float_drift(self):
        # 0.1 + 0.2 style drift must not appear in cent totals
        assert from_cents(10) + from_cents(20) == from_cents(30)

    @pytest.mark.parametrize("value, expected", [(500, 500), ("500", 500), (" 42 ", 42), (Decimal("7"), 7), (0, 0)])
    def test_parse_cents(self, value, expected):
        assert parse_cents(value) == expected

    @pytest.mark.parametrize("value", [-5, "1.5", "abc", None, True, "NaN", "Infinity"])
    def test_parse_cents_rejects(self, value):
        with pytest.raises(ValueError):
            parse_cents(value)

    def test_format_money(self):
        assert format_money(from_cents(150050)) == "R$ 1,500.50"
        assert format_money(Decimal("5"), "USD") == "$ 5.00"


class TestSettings:
    def test_defaults_and_overrides(self, monkeypatch):
        monkeypatch.setenv("MARKETPLACE_API_URL", "https://shop.example/api/")
        monkeypatch.setenv("MARKETPLACE_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("MARKETPLACE_CURRENCY", "usd")
        monkeypatch.delenv("MARKETPLACE_API_TOKEN", raising=False)

        settings = load_settings(env_file="/nonexistent/.env")

        assert settings.api_url == "https://shop.example/api"
        assert settings.http_timeout == 2.5
        assert settings.currency == "USD"
        assert settings.api_token is None

    @pytest.mark.parametrize("raw", ["soon", "-1", "0"])
    def test_invalid_timeout_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("MARKETPLACE_HTTP_TIMEOUT", raw)

        assert load_settings(env_file="/nonexistent/.env").http_timeout == DEFAULT_HTTP_TIMEOUT


class TestModels:
    def test_product_price(self):
        product = Product.model_validate({"id": "abc", "name": "Tea", "price_in_cents": "199", "extra": 1})

        assert product.price_in_cents == 199
        assert product.price == Decimal("1.99")

    def test_product_rejects_negative_price(self):
        with pytest.raises(ValidationError):
            Product(id=1, name="Tea", price_in_cents=-1)

    def test_validation_error_flattening(self):
        error = ApiValidationError({"name": ["can't be blank", "is too short"], "price_in_cents": "invalid"})

        assert error.field_errors() == {
            "name": "can't be blank, is too short",
            "price_in_cents": "invalid",
        }


class TestNotifications:
    def test_toasts_go_to_history_and_sink(self):
        received = []
        notifier = NotificationService(sink=received.append)

        notifier.success("Profile updated successfully.")

        assert notifier.last.type == TOAST_SUCCESS
        assert received == notifier.history
        assert notifier.last.created_at


def test_log_sanitizers():
    assert sanitize_id_for_logging(None) == "N/A"
    assert sanitize_id_for_logging(123456789012) == "12345678"
    assert sanitize_string_for_logging("a\nb") == "a\\nb"
    assert sanitize_string_for_logging("x" * 60, max_length=10) == "x" * 10 + "..."


def test_package_logger_leaves_root_alone():
    import logging

    root_level = logging.getLogger().level
    logger = get_logger("marketplace.cart.service")

    assert logger.name.startswith(PACKAGE_LOGGER)
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger().level == root_level
    assert sanitize_id_for_logging("ab\ncd\x00efghij") == "ab\\ncdef"

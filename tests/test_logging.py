"""
Tests for structured logging setup
"""
import json
import logging

import structlog

from app.utils.logging import get_logger


class TestLogging:
    def test_logging_is_configured_on_first_logger(self):
        get_logger("app.services.cart_service")

        assert structlog.is_configured()

    def test_event_is_rendered_as_json(self, caplog):
        logger = get_logger("app.services.cart_service")

        with caplog.at_level(logging.INFO):
            logger.warning("Cart %s locked", "abc")

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "Cart abc locked"
        assert payload["logger"] == "app.services.cart_service"
        assert payload["level"] == "warning"
        assert "timestamp" in payload

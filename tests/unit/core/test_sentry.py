"""
Unit tests for Sentry initialisation.
"""

from unittest.mock import patch

import pytest

from app.config.settings import Settings
from app.core.shared.sentry import init_sentry


@pytest.mark.unit
def test_without_dsn_is_noop():
    with patch("app.core.shared.sentry.sentry_sdk") as sentry:
        assert init_sentry(Settings(SENTRY_DSN=None), component="api") is False

    sentry.init.assert_not_called()


@pytest.mark.unit
def test_with_dsn_tags_component():
    settings = Settings(SENTRY_DSN="https://key@sentry.example.com/1", ENVIRONMENT="staging")

    with patch("app.core.shared.sentry.sentry_sdk") as sentry:
        assert init_sentry(settings, component="worker-PE") is True

    kwargs = sentry.init.call_args.kwargs
    assert kwargs["environment"] == "staging"
    assert kwargs["send_default_pii"] is False
    assert kwargs["release"] == "medical-appointment-scheduling@1.0.0"
    sentry.set_tag.assert_called_once_with("component", "worker-PE")

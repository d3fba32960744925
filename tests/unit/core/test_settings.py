"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from app.config.settings import Settings


@pytest.mark.unit
class TestSettings:
    def test_country_queue(self):
        settings = Settings(APPOINTMENT_TOPIC_QUEUE="topic")

        assert settings.country_queue("pe") == "topic.PE"

    def test_country_schemas_are_normalized(self):
        settings = Settings(COUNTRY_DB_SCHEMAS={"pe": "s_pe", "cl": "s_cl"})

        assert settings.COUNTRY_DB_SCHEMAS == {"PE": "s_pe", "CL": "s_cl"}

    def test_country_schemas_require_every_country(self):
        with pytest.raises(ValidationError):
            Settings(COUNTRY_DB_SCHEMAS={"PE": "s_pe"})

    @pytest.mark.parametrize("value", [0, 101])
    def test_pool_size_bounds(self, value):
        with pytest.raises(ValidationError):
            Settings(DB_POOL_SIZE=value)

    def test_max_tries_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(JOB_MAX_TRIES=0)

    def test_redis_url(self):
        assert Settings(REDIS_HOST="r", REDIS_PORT=1, REDIS_DB=2).redis_url == "redis://r:1/2"
        assert Settings(REDIS_HOST="r", REDIS_PASSWORD="pw").redis_url == "redis://:pw@r:6379/0"

    def test_is_development(self):
        assert Settings(ENVIRONMENT="production", DEBUG=False).is_development is False
        assert Settings(ENVIRONMENT="local", DEBUG=False).is_development is True

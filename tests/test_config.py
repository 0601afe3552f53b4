import pytest

from datagov.config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, Settings, load_settings
from datagov.errors import ConfigError


def test_defaults_reproduce_catalog_data_gov():
    settings = load_settings({})

    assert settings == Settings()
    assert settings.base_url == DEFAULT_BASE_URL == "https://catalog.data.gov/api/3"
    assert settings.http_timeout is None
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.log_level == "INFO"


def test_overrides_are_read_and_normalized():
    settings = load_settings(
        {
            "DATAGOV_API_BASE_URL": "https://demo.ckan.org/api/3/",
            "DATAGOV_HTTP_TIMEOUT": "12.5",
            "DATAGOV_USER_AGENT": "research-bot/2",
            "DATAGOV_LOG_LEVEL": "debug",
            "DATAGOV_AGENT_MODEL": "openrouter/openai/gpt-4o-mini",
        }
    )

    assert settings.base_url == "https://demo.ckan.org/api/3"
    assert settings.http_timeout == 12.5
    assert settings.user_agent == "research-bot/2"
    assert settings.log_level == "DEBUG"
    assert settings.agent_model == "openrouter/openai/gpt-4o-mini"


def test_blank_timeout_means_no_timeout():
    assert load_settings({"DATAGOV_HTTP_TIMEOUT": "  "}).http_timeout is None


@pytest.mark.parametrize(
    "env",
    [
        {"DATAGOV_HTTP_TIMEOUT": "soon"},
        {"DATAGOV_HTTP_TIMEOUT": "0"},
        {"DATAGOV_LOG_LEVEL": "chatty"},
        {"DATAGOV_API_BASE_URL": "catalog.data.gov/api/3"},
    ],
)
def test_bad_values_raise_config_error(env):
    with pytest.raises(ConfigError):
        load_settings(env)

import pytest

from portaudit.config import ENV_OUTPUT, ENV_OUTPUT_DETAIL, ENV_SKIP_SANITY, ENV_VERBOSE, load_config
from portaudit.output import OutputDetail, OutputFormat


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (ENV_OUTPUT, ENV_OUTPUT_DETAIL, ENV_VERBOSE, ENV_SKIP_SANITY):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()

    assert config.output_format == OutputFormat.HUMAN
    assert config.output_detail == OutputDetail.FAIL
    assert config.verbosity == 0
    assert config.skip_sanity_check is False


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv(ENV_OUTPUT, "JSON")
    monkeypatch.setenv(ENV_OUTPUT_DETAIL, "all")
    monkeypatch.setenv(ENV_VERBOSE, "2")
    monkeypatch.setenv(ENV_SKIP_SANITY, "yes")

    config = load_config()

    assert config.output_format == OutputFormat.JSON
    assert config.output_detail == OutputDetail.ALL
    assert config.verbosity == 2
    assert config.skip_sanity_check is True


def test_cli_values_override_environment(monkeypatch):
    monkeypatch.setenv(ENV_OUTPUT, "json")
    monkeypatch.setenv(ENV_VERBOSE, "2")

    config = load_config(cli_output="none", cli_verbosity=1)

    assert config.output_format == OutputFormat.NONE
    assert config.verbosity == 1


def test_invalid_environment_value(monkeypatch):
    monkeypatch.setenv(ENV_OUTPUT_DETAIL, "some")

    with pytest.raises(ValueError, match=ENV_OUTPUT_DETAIL):
        load_config()

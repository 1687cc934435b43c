import pytest
from click.testing import CliRunner

from cryptoprices.app import reset_default_container
from cryptoprices.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def fresh_container(monkeypatch):
    for var in ("CRYPTOPRICES_PROVIDER", "CRYPTOPRICES_FIXTURES_DIR", "CRYPTOPRICES_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("CRYPTOPRICES_NETWORK_DELAY", "0")
    reset_default_container()
    yield
    reset_default_container()


class TestCLI:
    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Crypto Prices" in result.output

    def test_list_usd(self, runner):
        result = runner.invoke(cli, ["list"], obj={})
        assert result.exit_code == 0
        assert "Bitcoin" in result.output
        assert "$45,000.50" in result.output
        assert "€" not in result.output

    def test_list_eur(self, runner):
        result = runner.invoke(cli, ["list", "--eur"], obj={})
        assert result.exit_code == 0
        assert "$45,000.50" in result.output
        assert "€41,500.75" in result.output

    def test_list_search(self, runner):
        result = runner.invoke(cli, ["list", "--search", "doge"], obj={})
        assert result.exit_code == 0
        assert "Dogecoin" in result.output
        assert "Bitcoin" not in result.output

    def test_list_search_no_match(self, runner):
        result = runner.invoke(cli, ["list", "-s", "zzz"], obj={})
        assert result.exit_code == 0
        assert "No prices found." in result.output

    def test_list_remote_provider_fails(self, runner, monkeypatch):
        monkeypatch.setenv("CRYPTOPRICES_PROVIDER", "remote")
        result = runner.invoke(cli, ["list"], obj={})
        assert result.exit_code == 1
        assert "not implemented" in result.output

    def test_detail(self, runner):
        result = runner.invoke(cli, ["detail", "1"], obj={})
        assert result.exit_code == 0
        assert "Bitcoin" in result.output
        assert "USD: $45,000.50" in result.output
        assert "EUR:" not in result.output

    def test_detail_eur(self, runner):
        result = runner.invoke(cli, ["detail", "1", "--eur"], obj={})
        assert result.exit_code == 0
        assert "USD: $45,000.50\nEUR: €41,500.75" in result.output

    def test_detail_unknown_id(self, runner):
        result = runner.invoke(cli, ["detail", "99"], obj={})
        assert result.exit_code == 1
        assert "No token with id 99" in result.output


class TestFlagsCommand:
    def test_show_defaults(self, runner):
        result = runner.invoke(cli, ["flags"], obj={})
        assert result.exit_code == 0
        assert "supportEUR: off" in result.output

    def test_set_flag(self, runner):
        result = runner.invoke(cli, ["flags", "--set", "supportEUR=true"], obj={})
        assert result.exit_code == 0
        assert "supportEUR: on" in result.output

    def test_flag_from_config_file(self, runner, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("feature_flags:\n  supportEUR: true\n")

        result = runner.invoke(cli, ["--config", str(config), "flags"], obj={})
        assert result.exit_code == 0
        assert "supportEUR: on" in result.output

    def test_unknown_flag(self, runner):
        result = runner.invoke(cli, ["flags", "--set", "supportGBP=true"], obj={})
        assert result.exit_code == 1
        assert "Unknown feature flag" in result.output

    def test_malformed_assignment(self, runner):
        result = runner.invoke(cli, ["flags", "--set", "supportEUR"], obj={})
        assert result.exit_code == 1
        assert "Expected NAME=BOOL" in result.output

    def test_bad_boolean(self, runner):
        result = runner.invoke(cli, ["flags", "--set", "supportEUR=maybe"], obj={})
        assert result.exit_code == 1
        assert "Not a boolean" in result.output


class TestConfigOption:
    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["--config", str(tmp_path / "nope.yaml"), "list"], obj={})
        assert result.exit_code == 1
        assert "Cannot read config" in result.output

    def test_unknown_log_level(self, runner, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("log_level: verbose\n")

        result = runner.invoke(cli, ["--config", str(config), "flags"], obj={})
        assert result.exit_code == 1
        assert "Unknown log level" in result.output

#!/usr/bin/env python3
"""
Tests for configuration loading and the bond-deploy command
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from .cli import build_parser, main
from .config import Settings
from .conftest import GOLDEN_ADDRESS, GOLDEN_KEY


class TestSettings:
    """Test class for Settings.from_env"""

    def test_defaults(self, clean_env, tmp_path):
        settings = Settings.from_env(tmp_path)

        assert settings.secret_file == tmp_path / ".secret"
        assert settings.eth_secret_file == tmp_path / "ethereum.secret"
        assert settings.contracts_build_dir == tmp_path / "src" / "contracts"
        assert settings.deployments_dir == tmp_path / "deployments"
        assert settings.infura_project_id is None
        assert settings.rpc_url is None
        assert settings.log_level == "INFO"
        assert settings.poll_interval == 2.0
        assert settings.deploy_timeout == 750.0

    def test_environment_overrides(self, clean_env, tmp_path):
        clean_env.setenv("SECRET_FILE", "/keys/celo.secret")
        clean_env.setenv("INFURA_PROJECT_ID", "abc123")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("POLL_INTERVAL", "0.5")

        settings = Settings.from_env(tmp_path)

        assert settings.secret_file == Path("/keys/celo.secret")
        assert settings.infura_project_id == "abc123"
        assert settings.log_level == "DEBUG"
        assert settings.poll_interval == 0.5

    def test_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("RPC_URL=http://localhost:8545\n", encoding="utf-8")

        settings = Settings.from_env(tmp_path)

        assert settings.rpc_url == "http://localhost:8545"


class TestParser:
    """Test class for argument parsing"""

    def test_migrate_arguments(self):
        args = build_parser().parse_args(["migrate", "--network", "alfajores", "--from", "4", "--to", "6"])
        assert args.network == "alfajores"
        assert args.from_step == 4
        assert args.to_step == 6
        assert not args.reset

    def test_unknown_network_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["migrate", "--network", "kovan"])


class TestMain:
    """Test class for the command entry point"""

    def test_account_creates_and_reuses_key(self, clean_env, tmp_path, capsys):
        clean_env.chdir(tmp_path)

        assert main(["account"]) == 0
        first = capsys.readouterr().out
        assert main(["account"]) == 0
        second = capsys.readouterr().out

        assert (tmp_path / ".secret").exists()
        assert "Celo Account address: 0x" in first
        assert "Ethereum Account: none" in first
        assert first == second

    def test_account_with_existing_keys(self, clean_env, tmp_path, capsys):
        clean_env.chdir(tmp_path)
        (tmp_path / ".secret").write_text(GOLDEN_KEY, encoding="utf-8")
        (tmp_path / "ethereum.secret").write_text("02" * 32, encoding="utf-8")

        assert main(["account"]) == 0

        out = capsys.readouterr().out
        assert f"Celo Account address: {GOLDEN_ADDRESS}" in out
        assert "Ethereum Account address: 0x5050A4F4b3f9338C3472dcC01A87C76A144b3c9c" in out

    def test_malformed_secret_exits_with_error(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        (tmp_path / ".secret").write_text("not a key", encoding="utf-8")

        assert main(["account"]) == 1

    def test_compiler_settings(self, clean_env, tmp_path, capsys):
        clean_env.chdir(tmp_path)

        assert main(["compiler-settings"]) == 0

        printed = json.loads(capsys.readouterr().out)
        assert printed["optimizer"]["runs"] == 2000
        assert printed["evmVersion"] == "byzantium"
        assert not (tmp_path / ".secret").exists()

    def test_migrate_ethereum_network_without_key(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        clean_env.setenv("INFURA_PROJECT_ID", "abc123")

        with patch('bond_deploy.cli.connect') as mock_connect:
            assert main(["migrate", "--network", "ropsten"]) == 1

        mock_connect.assert_not_called()

    @patch('bond_deploy.cli.connect')
    def test_migrate_with_corrupt_registry(self, mock_connect, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        (tmp_path / ".secret").write_text(GOLDEN_KEY, encoding="utf-8")
        (tmp_path / "deployments").mkdir()
        (tmp_path / "deployments" / "alfajores.json").write_text("{not json", encoding="utf-8")
        mock_connect.return_value = MagicMock()

        assert main(["migrate", "--network", "alfajores"]) == 1

    @patch('bond_deploy.cli.run_migrations')
    @patch('bond_deploy.cli.connect')
    def test_migrate_celo_network(self, mock_connect, mock_run, clean_env, tmp_path, capsys):
        clean_env.chdir(tmp_path)
        (tmp_path / ".secret").write_text(GOLDEN_KEY, encoding="utf-8")
        mock_connect.return_value = MagicMock()
        mock_run.return_value = []

        assert main(["migrate", "--network", "alfajores", "--reset"]) == 0

        network = mock_connect.call_args[0][0]
        assert network.name == "alfajores"
        deployer, registry = mock_run.call_args[0]
        assert deployer.account.address == GOLDEN_ADDRESS
        assert registry.path == tmp_path / "deployments" / "alfajores.json"
        assert mock_run.call_args[1] == {"reset": True, "from_step": None, "to_step": None}
        assert "Ran 0 migration(s) on alfajores" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__])

"""
Toolchain Configuration Tests
"""

import copy
import json

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from toolchain.config import IN_PROCESS_NETWORK, ToolchainConfig, load_config
from toolchain.exceptions import ConfigError, UnknownNetwork

from conftest import DEV_PRIVATE_KEY, write_config


class TestShippedConfig:
    """Values of config/toolchain_config.json"""

    def test_defaults(self, shipped_config_path):
        config = load_config(shipped_config_path)

        assert config.default_network == "hardhat"
        assert config.solidity.version == "0.8.14"
        assert config.solidity.optimizer_enabled
        assert config.solidity.optimizer_runs == 200

    def test_networks(self, shipped_config_path):
        config = load_config(shipped_config_path)

        assert config.networks["hardhat"].is_in_process
        assert config.networks["localhost"].url == "http://0.0.0.0:8545"
        assert config.networks["localhost"].accounts is None

    def test_paths(self, shipped_config_path, tmp_path):
        config = load_config(shipped_config_path, root=tmp_path)

        assert config.paths.sources == "./contracts"
        assert config.paths.tests == "./test"
        assert config.paths.cache == "./cache"
        assert config.paths.artifacts == "./artifacts"
        assert config.path("artifacts") == (tmp_path / "artifacts").resolve()

    def test_round_trip(self, shipped_config_path, config_data):
        """Values come back out exactly as they were written"""
        assert load_config(shipped_config_path).to_dict() == config_data


class TestRoundTripProperties:
    """Round trip holds for arbitrary compiler and network settings"""

    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(
        version=st.from_regex(r"0\.[4-8]\.[0-9]{1,2}", fullmatch=True),
        optimizer=st.one_of(
            st.none(),
            st.fixed_dictionaries({
                "enabled": st.booleans(),
                "runs": st.integers(min_value=1, max_value=2**32 - 1),
            })
        ),
        extra=st.dictionaries(
            st.sampled_from(["chainId", "gasPrice", "gasMultiplier", "loggingEnabled"]),
            st.integers(min_value=0, max_value=10**12)
        ),
        solidity_extra=st.dictionaries(
            st.sampled_from(["compilers", "overrides"]),
            st.just([])
        ),
        top_level_extra=st.dictionaries(
            st.sampled_from(["mocha", "etherscan", "gasReporter"]),
            st.dictionaries(st.sampled_from(["timeout", "apiKey", "enabled"]), st.integers())
        )
    )
    def test_to_dict_matches_input(self, config_data, version, optimizer, extra, solidity_extra, top_level_extra):
        data = copy.deepcopy(config_data)
        data["solidity"] = {
            "version": version,
            "settings": {} if optimizer is None else {"optimizer": optimizer},
            **solidity_extra
        }
        data["networks"]["localhost"].update(extra)
        data.update(top_level_extra)

        config = ToolchainConfig.from_dict(data)

        assert config.to_dict() == data
        if optimizer is not None:
            assert config.solidity.optimizer_runs == optimizer["runs"]
            assert config.solidity.optimizer_enabled is optimizer["enabled"]

    def test_unread_keys_are_kept(self, config_data):
        data = copy.deepcopy(config_data)
        data["mocha"] = {"timeout": 40000}
        data["solidity"]["compilers"] = []
        data["paths"]["root"] = "."

        assert ToolchainConfig.from_dict(data).to_dict() == data

    def test_empty_settings_are_kept(self, config_data):
        data = copy.deepcopy(config_data)
        data["solidity"] = {"version": "0.8.14", "settings": {}}

        config = ToolchainConfig.from_dict(data)

        assert config.to_dict()["solidity"] == {"version": "0.8.14", "settings": {}}
        assert not config.solidity.optimizer_enabled

    def test_extra_path_key(self, config_data, tmp_path):
        data = copy.deepcopy(config_data)
        data["paths"]["root"] = "."

        config = ToolchainConfig.from_dict(data, root=tmp_path)

        assert config.to_dict()["paths"] == data["paths"]
        assert config.path("artifacts") == (tmp_path / "artifacts").resolve()

    def test_missing_default_network_is_not_invented(self, config_data):
        data = copy.deepcopy(config_data)
        del data["defaultNetwork"]

        config = ToolchainConfig.from_dict(data)

        assert config.default_network == "hardhat"
        assert config.to_dict() == data

    def test_missing_paths_are_not_invented(self, config_data):
        data = copy.deepcopy(config_data)
        del data["paths"]

        config = ToolchainConfig.from_dict(data)

        assert "paths" not in config.to_dict()
        assert config.paths.artifacts == "./artifacts"


class TestNetworkSelection:
    """Choosing the active network profile"""

    def test_default_network(self, shipped_config_path):
        assert load_config(shipped_config_path).network().name == IN_PROCESS_NETWORK

    def test_explicit_network(self, shipped_config_path):
        assert load_config(shipped_config_path).network("localhost").name == "localhost"

    def test_environment_network(self, shipped_config_path, monkeypatch):
        monkeypatch.setenv("TOOLCHAIN_NETWORK", "localhost")

        assert load_config(shipped_config_path).network().name == "localhost"

    def test_explicit_name_wins_over_environment(self, shipped_config_path, monkeypatch):
        monkeypatch.setenv("TOOLCHAIN_NETWORK", "localhost")

        assert load_config(shipped_config_path).network("hardhat").name == "hardhat"

    def test_unknown_network(self, shipped_config_path):
        with pytest.raises(UnknownNetwork, match="goerli"):
            load_config(shipped_config_path).network("goerli")


class TestNetworkProfile:
    """Credentials and timeouts of a profile"""

    def test_literal_accounts(self, config_data):
        data = copy.deepcopy(config_data)
        data["networks"]["localhost"]["accounts"] = [DEV_PRIVATE_KEY[2:]]

        profile = ToolchainConfig.from_dict(data).network("localhost")

        assert profile.accounts == [DEV_PRIVATE_KEY]

    def test_accounts_from_environment(self, shipped_config_path, monkeypatch):
        monkeypatch.setenv("PRIVATE_KEY", DEV_PRIVATE_KEY[2:])

        profile = load_config(shipped_config_path).network("polygon")

        assert profile.accounts == [DEV_PRIVATE_KEY]

    def test_accounts_environment_unset(self, shipped_config_path):
        profile = load_config(shipped_config_path).network("mumbai")

        assert profile.accounts == []

    def test_remote_accounts_use_node(self, config_data):
        data = copy.deepcopy(config_data)
        data["networks"]["localhost"]["accounts"] = "remote"

        profile = ToolchainConfig.from_dict(data).network("localhost")

        assert profile.accounts is None

    def test_accounts_not_a_list(self, config_data):
        data = copy.deepcopy(config_data)
        data["networks"]["localhost"]["accounts"] = DEV_PRIVATE_KEY

        profile = ToolchainConfig.from_dict(data).network("localhost")

        with pytest.raises(ConfigError, match="localhost"):
            profile.accounts

    def test_timeouts(self, config_data):
        data = copy.deepcopy(config_data)
        data["networks"]["localhost"].update({"timeout": 5000, "confirmationTimeout": 12})

        profile = ToolchainConfig.from_dict(data).network("localhost")

        assert profile.timeout == 5
        assert profile.confirmation_timeout == 12

    def test_default_timeouts(self, shipped_config_path):
        profile = load_config(shipped_config_path).network("localhost")

        assert profile.timeout == 40
        assert profile.confirmation_timeout == 300


class TestLoadErrors:
    """Structural problems in the config file"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(path)

    def test_default_location(self, tmp_path, config_data):
        write_config(tmp_path, config_data)

        assert load_config(root=tmp_path).to_dict() == config_data

    def test_config_from_environment(self, tmp_path, config_data, monkeypatch):
        path = write_config(tmp_path, config_data)
        monkeypatch.setenv("TOOLCHAIN_CONFIG", str(path))

        assert load_config().to_dict() == config_data

    @pytest.mark.parametrize("mutate, message", [
        (lambda d: d.pop("networks"), "at least one network"),
        (lambda d: d.pop("solidity"), "solidity.version"),
        (lambda d: d.update(defaultNetwork="mainnet"), "Default network 'mainnet'"),
        (lambda d: d["networks"].update(localhost="http://0.0.0.0:8545"), "must be a JSON object"),
    ])
    def test_structure(self, config_data, mutate, message):
        data = copy.deepcopy(config_data)
        mutate(data)

        with pytest.raises(ConfigError, match=message):
            ToolchainConfig.from_dict(data)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(["hardhat"]))

        with pytest.raises(ConfigError, match="JSON object"):
            load_config(path)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])

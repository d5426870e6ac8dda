"""
Tests for configuration persistence.
"""

import pytest
import yaml

from eos_osc_lib.config import save_config, load_config
from eos_osc_lib.profiles import DEFAULT_PARAMETERS
from eos_osc_lib.session import EosSession


class TestConfig:
    """Save/load parameters through YAML."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == DEFAULT_PARAMETERS

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        parameters = dict(DEFAULT_PARAMETERS, user="explicit", userID=3, remoteHost="10.0.0.2")

        assert save_config(parameters, path)
        assert load_config(path) == parameters

    def test_unknown_keys_not_saved(self, tmp_path):
        path = tmp_path / "config.yaml"
        save_config({"startChannel": 5, "bogus": 1}, path)

        data = yaml.safe_load(path.read_text())
        assert data == {"parameters": {"startChannel": 5}}

    def test_partial_file_merges_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("parameters:\n  startChannel: 21\n  unknown: x\n")

        parameters = load_config(path)
        assert parameters["startChannel"] == 21
        assert parameters["user"] == DEFAULT_PARAMETERS["user"]
        assert "unknown" not in parameters

    def test_invalid_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("parameters: [unclosed\n")
        assert load_config(path) == DEFAULT_PARAMETERS

    def test_wrong_shape_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        assert load_config(path) == DEFAULT_PARAMETERS

    @pytest.mark.parametrize("line,name", [
        ("userID: abc", "userID"),
        ("profile: ion", "profile"),
        ("local: 3", "local"),
        ("localPort: [8001]", "localPort"),
        ("startChannel: true", "startChannel"),
        ("remoteHost: {a: 1}", "remoteHost"),
    ])
    def test_invalid_value_falls_back_to_default(self, tmp_path, line, name):
        path = tmp_path / "config.yaml"
        path.write_text(f"parameters:\n  {line}\n  remotePort: 9000\n")

        parameters = load_config(path)
        assert parameters[name] == DEFAULT_PARAMETERS[name]
        assert parameters["remotePort"] == 9000

    def test_numeric_strings_coerced(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("parameters:\n  userID: '4'\n  profile: group\n")

        parameters = load_config(path)
        assert parameters["userID"] == 4
        assert parameters["profile"] == "group"

    def test_loaded_config_starts_a_session(self, tmp_path, make_host):
        path = tmp_path / "config.yaml"
        path.write_text("parameters:\n  userID: abc\n  profile: ion\n  user: explicit\n")

        host = make_host(**load_config(path))
        EosSession(host).start()
        assert ("/eos/user", (1,)) in host.sent

import json

from core.config import Config, load_config


def test_creates_default_config(tmp_path):
    path = tmp_path / "cfg" / "config.json"
    config = load_config(path)
    assert config == Config()
    assert json.loads(path.read_text())["backend"]["base_url"] == config.backend.base_url


def test_defaults():
    config = Config()
    assert config.proxy.prefix == "/api/proxy/"
    assert config.environment.dev_port == 3000
    assert config.environment.private_prefixes == ["192.168.", "10.", "172."]
    assert config.cors.allow_origin == "*"


def test_loads_partial_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"backend": {"base_url": "http://api.local"}, "client": {"verbose": True}}))
    config = load_config(path)
    assert config.backend.base_url == "http://api.local"
    assert config.client.verbose is True
    assert config.proxy.port == 3000


def test_corrupt_config_is_backed_up(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops")
    config = load_config(path)
    assert config == Config()
    assert (tmp_path / "config.json.bak").read_text() == "{oops"


def test_invalid_values_are_backed_up(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"proxy": {"port": "not-a-port"}}))
    assert load_config(path) == Config()
    assert (tmp_path / "config.json.bak").exists()

import pytest
from pathlib import Path

from gemini_relay.config import Settings, load_settings


class TestLoadSettings:

    @pytest.fixture
    def config_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("""
model: "models/gemini-2.0-flash"
port: 8080
upload_dir: "/var/tmp/relay"
max_upload_bytes: 1048576
generation_params:
  temperature: 0.1
cors_origins:
  - "https://example.com"
""")
        return config_file

    def test_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "missing.yaml", env={"GEMINI_API_KEY": "k"})

        assert settings == Settings(api_key="k")
        assert settings.model == "models/gemini-1.5-flash"
        assert settings.port == 3000
        assert settings.upload_dir == Path("uploads")

    def test_yaml_values(self, config_file):
        settings = load_settings(config_file, env={"GEMINI_API_KEY": "k"})

        assert settings.model == "models/gemini-2.0-flash"
        assert settings.port == 8080
        assert settings.upload_dir == Path("/var/tmp/relay")
        assert settings.max_upload_bytes == 1048576
        assert settings.generation_params == {"temperature": 0.1}
        assert settings.cors_origins == ("https://example.com",)

    def test_environment_overrides_yaml(self, config_file):
        """
        Test: Source precedence
        How: Provide the same keys in YAML and in the environment
        Ensures: Environment wins over YAML, YAML wins over defaults
        """
        env = {
            "GEMINI_API_KEY": "k",
            "GEMINI_MODEL": "models/gemini-1.5-pro",
            "PORT": "9000",
            "UPLOAD_DIR": "/data/uploads",
        }

        settings = load_settings(config_file, env=env)

        assert settings.model == "models/gemini-1.5-pro"
        assert settings.port == 9000
        assert settings.upload_dir == Path("/data/uploads")
        assert settings.max_upload_bytes == 1048576

    def test_config_path_from_environment(self, config_file):
        settings = load_settings(env={"GEMINI_API_KEY": "k", "GEMINI_RELAY_CONFIG": str(config_file)})

        assert settings.port == 8080

    def test_missing_api_key_fails_fast(self, tmp_path):
        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            load_settings(tmp_path / "missing.yaml", env={})

    def test_missing_api_key_allowed_without_validation(self, tmp_path):
        settings = load_settings(tmp_path / "missing.yaml", env={}, validate=False)

        assert settings.api_key == ""

    def test_unknown_yaml_key_rejected(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("modle: typo\n")

        with pytest.raises(ValueError, match="Unknown config keys"):
            load_settings(config_file, env={"GEMINI_API_KEY": "k"})

    def test_api_key_not_accepted_from_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("api_key: leaked\n")

        with pytest.raises(ValueError, match="api_key"):
            load_settings(config_file, env={"GEMINI_API_KEY": "k"})

    def test_invalid_env_value(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid value for PORT"):
            load_settings(tmp_path / "missing.yaml", env={"GEMINI_API_KEY": "k", "PORT": "eighty"})

    @pytest.mark.parametrize("value,limit", [(0, None), (None, None), (512, 512)])
    def test_upload_limit(self, value, limit):
        assert Settings(api_key="k", max_upload_bytes=value).upload_limit == limit

    def test_negative_upload_limit_rejected(self):
        with pytest.raises(ValueError):
            Settings(api_key="k", max_upload_bytes=-1).validate()

    def test_shipped_config_is_valid(self):
        shipped = Path(__file__).parents[1] / "config" / "config.yaml"

        settings = load_settings(shipped, env={"GEMINI_API_KEY": "k"})

        assert settings.model == "models/gemini-1.5-flash"
        assert settings.port == 3000

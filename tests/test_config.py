"""Tests for configuration file support."""

import sys
import warnings

import pytest

from polygeom.config import (
    Config,
    ConfigError,
    DefaultsConfig,
    SeparateConfig,
    SwellConfig,
    _find_project_config,
    _load_toml_file,
    generate_template,
    get_config_paths,
)

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


class TestConfigDataclasses:
    """Test configuration dataclass defaults."""

    def test_defaults_config_defaults(self):
        """DefaultsConfig has correct defaults."""
        config = DefaultsConfig()
        assert config.format == "table"
        assert config.verbose is False
        assert config.quiet is False

    def test_swell_config_defaults(self):
        assert SwellConfig().amount == 1.0

    def test_separate_config_defaults(self):
        assert SeparateConfig().direction == (1.0, 0.0)

    def test_config_defaults(self):
        """Config has all sections with defaults."""
        config = Config()
        assert isinstance(config.defaults, DefaultsConfig)
        assert isinstance(config.swell, SwellConfig)
        assert isinstance(config.separate, SeparateConfig)
        assert config.get_source("swell.amount") == "default"


class TestFindProjectConfig:
    """Test project config discovery."""

    def test_find_in_current_dir(self, tmp_path):
        config_file = tmp_path / ".polygeom.toml"
        config_file.write_text("[defaults]\n")
        assert _find_project_config(tmp_path) == config_file

    def test_find_alternate_name(self, tmp_path):
        config_file = tmp_path / "polygeom.toml"
        config_file.write_text("[defaults]\n")
        assert _find_project_config(tmp_path) == config_file

    def test_prefers_hidden(self, tmp_path):
        hidden = tmp_path / ".polygeom.toml"
        hidden.write_text("[defaults]\n")
        (tmp_path / "polygeom.toml").write_text("[defaults]\n")
        assert _find_project_config(tmp_path) == hidden

    def test_walks_up(self, tmp_path):
        config_file = tmp_path / ".polygeom.toml"
        config_file.write_text("[defaults]\n")
        subdir = tmp_path / "shapes" / "parts"
        subdir.mkdir(parents=True)
        assert _find_project_config(subdir) == config_file

    def test_stops_at_git(self, tmp_path):
        (tmp_path / ".polygeom.toml").write_text("[defaults]\n")
        project = tmp_path / "project"
        project.mkdir()
        (project / ".git").mkdir()
        assert _find_project_config(project) is None

    def test_not_found(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert _find_project_config(tmp_path) is None


class TestLoadTomlFile:
    """Test TOML loading."""

    def test_load_valid_toml(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text('[defaults]\nformat = "json"\n\n[swell]\namount = 2.5\n')
        data = _load_toml_file(config_file)
        assert data["defaults"]["format"] == "json"
        assert data["swell"]["amount"] == 2.5

    def test_load_invalid_toml(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("[defaults\nformat = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            _load_toml_file(config_file)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            _load_toml_file(tmp_path / "missing.toml")


class TestConfigLoad:
    """Test hierarchical loading and precedence."""

    def test_load_defaults_only(self, isolated_config):
        config = Config.load()
        assert config.defaults.format == "table"
        assert config.swell.amount == 1.0
        assert config.separate.direction == (1.0, 0.0)

    def test_load_project_config(self, isolated_config):
        (isolated_config / ".polygeom.toml").write_text(
            "[swell]\namount = 0.25\n\n[separate]\ndirection = [0, 1]\n"
        )
        config = Config.load()
        assert config.swell.amount == 0.25
        assert config.separate.direction == (0.0, 1.0)

    def test_load_user_config(self, isolated_config, monkeypatch):
        user_config = isolated_config / "user.toml"
        user_config.write_text('[defaults]\nformat = "json"\nverbose = true\n')
        monkeypatch.setattr("polygeom.config.USER_CONFIG_PATH", user_config)

        config = Config.load()
        assert config.defaults.format == "json"
        assert config.defaults.verbose is True

    def test_project_overrides_user(self, isolated_config, monkeypatch):
        user_config = isolated_config / "user.toml"
        user_config.write_text("[swell]\namount = 3.0\n")
        monkeypatch.setattr("polygeom.config.USER_CONFIG_PATH", user_config)
        (isolated_config / "polygeom.toml").write_text("[swell]\namount = 4.0\n")

        config = Config.load()
        assert config.swell.amount == 4.0

    def test_get_source_tracking(self, isolated_config, monkeypatch):
        user_config = isolated_config / "user.toml"
        user_config.write_text("[defaults]\nquiet = true\n")
        monkeypatch.setattr("polygeom.config.USER_CONFIG_PATH", user_config)
        project_config = isolated_config / ".polygeom.toml"
        project_config.write_text("[swell]\namount = 2.0\n")

        config = Config.load()
        assert config.get_source("defaults.quiet") == str(user_config)
        assert config.get_source("swell.amount") == str(project_config)
        assert config.get_source("defaults.format") == "default"

    def test_load_from_start_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr("polygeom.config.USER_CONFIG_PATH", tmp_path / "none.toml")
        (tmp_path / ".git").mkdir()
        (tmp_path / ".polygeom.toml").write_text("[swell]\namount = 7\n")
        config = Config.load(start_dir=tmp_path)
        assert config.swell.amount == 7.0


class TestConfigValidation:
    """Test value validation and unknown-key warnings."""

    def test_warn_unknown_section(self, isolated_config):
        (isolated_config / ".polygeom.toml").write_text("[unknown]\nkey = 1\n")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            Config.load()
        assert any("Unknown config key 'unknown'" in str(w.message) for w in caught)

    def test_warn_unknown_key_in_section(self, isolated_config):
        (isolated_config / ".polygeom.toml").write_text("[swell]\nradius = 1\n")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            Config.load()
        assert any("swell.radius" in str(w.message) for w in caught)

    def test_invalid_format(self, isolated_config):
        (isolated_config / ".polygeom.toml").write_text('[defaults]\nformat = "csv"\n')
        with pytest.raises(ConfigError, match="defaults.format"):
            Config.load()

    def test_negative_swell(self, isolated_config):
        (isolated_config / ".polygeom.toml").write_text("[swell]\namount = -1\n")
        with pytest.raises(ConfigError, match="swell.amount"):
            Config.load()

    @pytest.mark.parametrize("value", ["[1]", "[0, 0]", '"x"'])
    def test_invalid_direction(self, isolated_config, value):
        (isolated_config / ".polygeom.toml").write_text(f"[separate]\ndirection = {value}\n")
        with pytest.raises(ConfigError, match="separate.direction"):
            Config.load()


class TestGenerateTemplate:
    """Test template generation."""

    def test_template_is_valid_toml(self):
        data = tomllib.loads(generate_template())
        assert set(data) == {"defaults", "swell", "separate"}

    def test_template_documents_options(self):
        template = generate_template()
        assert "# format = " in template
        assert "# amount = 1.0" in template
        assert "# direction = [1.0, 0.0]" in template


class TestGetConfigPaths:
    """Test config path reporting."""

    def test_returns_none_for_missing_files(self, isolated_config):
        paths = get_config_paths()
        assert paths == {"user": None, "project": None}

    def test_returns_paths_for_existing_files(self, isolated_config, monkeypatch):
        user_config = isolated_config / "user.toml"
        user_config.write_text("")
        monkeypatch.setattr("polygeom.config.USER_CONFIG_PATH", user_config)
        project_config = isolated_config / "polygeom.toml"
        project_config.write_text("")

        paths = get_config_paths()
        assert paths["user"] == user_config
        assert paths["project"] == project_config

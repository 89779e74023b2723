"""Test configuration management."""

import pytest
from pathlib import Path

from uiuadoc.core.config import (
    DocgenConfig,
    ExtractionConfig,
    HighlightConfig,
    OutputFormat,
    SummaryConfig,
)
from uiuadoc.core.exceptions import DocgenError


class TestConfig:
    """Test configuration management."""

    def test_default_config_creation(self, clean_title_env):
        """Test creating default configuration."""
        config = DocgenConfig()

        assert isinstance(config.extraction, ExtractionConfig)
        assert isinstance(config.summary, SummaryConfig)
        assert isinstance(config.highlight, HighlightConfig)
        assert config.extraction.main_file == "lib.ua"
        assert config.extraction.excluded_path_prefixes == ["uiua-modules"]
        assert config.summary.doc_marker == "# !doc"
        assert config.summary.markdown_extensions == ["tables", "fenced_code"]
        assert config.summary.title is None
        assert config.highlight.include_context is False
        assert config.output.format == OutputFormat.JSON

    def test_config_from_dict(self):
        """Test creating config from dictionary."""
        config_dict = {
            'extraction': {
                'main_file': 'main.ua',
                'excluded_path_prefixes': ['vendor', 'build'],
            },
            'summary': {
                'title': 'My Library',
                'group_overflow_arities': False,
            },
        }

        config = DocgenConfig.load_from_dict(config_dict)

        assert config.extraction.main_file == 'main.ua'
        assert config.extraction.excluded_path_prefixes == ['vendor', 'build']
        assert config.summary.title == 'My Library'
        assert config.summary.group_overflow_arities is False

    def test_title_from_environment(self, clean_title_env, monkeypatch):
        """Test the page title falls back to the environment."""
        monkeypatch.setenv('UIUADOC_TITLE', 'From Env')

        assert DocgenConfig().summary.title == 'From Env'
        assert SummaryConfig(title='Explicit').title == 'Explicit'

    def test_config_save_and_load(self, temp_dir, clean_title_env):
        """Test saving and loading configuration."""
        config = DocgenConfig.get_default_config()
        config.extraction.main_file = 'main.ua'
        config.output.format = OutputFormat.YAML

        config_file = temp_dir / 'test_config.yaml'
        config.save_to_file(config_file)

        assert config_file.exists()

        # Load and verify
        loaded_config = DocgenConfig.load_from_file(config_file)
        assert loaded_config.extraction.main_file == 'main.ua'
        assert loaded_config.output.format == OutputFormat.YAML

    def test_load_empty_file(self, temp_dir):
        config_file = temp_dir / '.uiuadoc.yaml'
        config_file.write_text('')

        assert DocgenConfig.load_from_file(config_file).extraction.main_file == 'lib.ua'

    def test_load_missing_file(self, temp_dir):
        with pytest.raises(DocgenError):
            DocgenConfig.load_from_file(temp_dir / 'missing.yaml')

    def test_config_validation(self):
        """Test configuration validation."""
        config = DocgenConfig()
        assert config.validate_config() == []

        config.summary.doc_marker = ''
        config.output.indent = -1
        config.output.verbose = True
        config.output.quiet = True
        issues = config.validate_config()

        assert "Documentation marker must not be empty" in issues
        assert "Output indent must not be negative" in issues
        assert "Verbose and quiet output are mutually exclusive" in issues

    def test_validation_reports_missing_output_directory(self, temp_dir):
        config = DocgenConfig()
        config.output.output_file = temp_dir / 'missing' / 'out.json'

        assert any("Output directory does not exist" in issue for issue in config.validate_config())

    def test_merge_with_cli_args(self):
        """Test merging configuration with CLI arguments."""
        config = DocgenConfig()
        merged = config.merge_with_cli_args(
            format='yaml',
            output=Path('out.yaml'),
            title='CLI Title',
            include_context=True,
            unknown='ignored',
        )

        assert merged.output.format == OutputFormat.YAML
        assert merged.output.output_file == Path('out.yaml')
        assert merged.summary.title == 'CLI Title'
        assert merged.highlight.include_context is True
        # The original is untouched
        assert config.output.format == OutputFormat.JSON


class TestConfigDiscovery:
    """Test finding configuration files."""

    def test_find_yaml_config(self, temp_dir):
        config_file = temp_dir / '.uiuadoc.yaml'
        config_file.write_text('log_level: DEBUG\n')
        nested = temp_dir / 'a' / 'b'
        nested.mkdir(parents=True)

        assert DocgenConfig.find_config_file(nested) == config_file.resolve()

    def test_pyproject_with_section(self, temp_dir):
        pyproject = temp_dir / 'pyproject.toml'
        pyproject.write_text('[tool.uiuadoc]\nlog_level = "DEBUG"\n\n[tool.uiuadoc.extraction]\nmain_file = "main.ua"\n')

        assert DocgenConfig.find_config_file(temp_dir) == pyproject.resolve()

        config = DocgenConfig.load_from_file(pyproject)
        assert config.log_level == 'DEBUG'
        assert config.extraction.main_file == 'main.ua'

    def test_pyproject_without_section_is_ignored(self, temp_dir):
        pyproject = temp_dir / 'pyproject.toml'
        pyproject.write_text('[project]\nname = "other"\n')

        assert not DocgenConfig._has_uiuadoc_config(pyproject)
        with pytest.raises(DocgenError):
            DocgenConfig.load_from_pyproject(pyproject)

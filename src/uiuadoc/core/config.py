"""Configuration management for uiuadoc."""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .exceptions import DocgenError


CONFIG_NAMES = [
    ".uiuadoc.yaml",
    ".uiuadoc.yml",
    "uiuadoc.yaml",
    "uiuadoc.yml",
    "pyproject.toml",  # Look for [tool.uiuadoc] section
]

TITLE_ENV_VAR = "UIUADOC_TITLE"


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    YAML = "yaml"
    TEXT = "text"
    HTML = "html"


class ExtractionConfig(BaseModel):
    """Configuration for source extraction."""

    # Entry file of the library, matched against the end of each path
    main_file: str = "lib.ua"

    # Vendored dependencies are never documented
    excluded_path_prefixes: List[str] = Field(default_factory=lambda: ["uiua-modules"])


class SummaryConfig(BaseModel):
    """Configuration for the documentation summary."""

    title: Optional[str] = Field(default=None, validate_default=True)
    doc_marker: str = "# !doc"
    markdown_extensions: List[str] = Field(default_factory=lambda: ["tables", "fenced_code"])

    # Collect functions with more than six inputs instead of dropping them
    group_overflow_arities: bool = True

    @field_validator("title", mode="before")
    @classmethod
    def load_title(cls, v):
        """Load the page title from environment if not provided."""
        if v is None:
            return os.getenv(TITLE_ENV_VAR)
        return v


class HighlightConfig(BaseModel):
    """Configuration for source highlighting."""

    # Classify highlighted snippets together with the main file's text
    include_context: bool = False


class OutputConfig(BaseModel):
    """Configuration for output formatting."""

    format: OutputFormat = OutputFormat.JSON
    output_file: Optional[Path] = None
    indent: int = 2

    # Verbosity
    verbose: bool = False
    quiet: bool = False


class DocgenConfig(BaseModel):
    """Main configuration class for uiuadoc."""

    # Sub-configurations
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    # Global settings
    log_level: str = "INFO"

    @classmethod
    def load_from_file(cls, config_path: Path) -> "DocgenConfig":
        """Load configuration from a YAML file or a pyproject.toml."""
        if not config_path.exists():
            raise DocgenError(f"Configuration file not found: {config_path}")

        if config_path.name == "pyproject.toml":
            return cls.load_from_pyproject(config_path)

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        return cls(**(config_data or {}))

    @classmethod
    def load_from_dict(cls, config_dict: Dict[str, Any]) -> "DocgenConfig":
        """Load configuration from dictionary."""
        return cls(**config_dict)

    @classmethod
    def get_default_config(cls) -> "DocgenConfig":
        """Get default configuration."""
        # Load environment variables
        load_dotenv()
        return cls()

    @classmethod
    def find_config_file(cls, start_path: Optional[Path] = None) -> Optional[Path]:
        """Find configuration file in current directory or parent directories."""
        if start_path is None:
            start_path = Path.cwd()

        current_path = start_path.resolve()

        # Search up the directory tree
        while current_path != current_path.parent:
            for config_name in CONFIG_NAMES:
                config_file = current_path / config_name
                if config_file.exists():
                    if config_name == "pyproject.toml":
                        if cls._has_uiuadoc_config(config_file):
                            return config_file
                    else:
                        return config_file
            current_path = current_path.parent

        return None

    @classmethod
    def _has_uiuadoc_config(cls, pyproject_path: Path) -> bool:
        """Check if pyproject.toml has a [tool.uiuadoc] section."""
        import tomllib

        try:
            with open(pyproject_path, 'rb') as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return False
        return "tool" in data and "uiuadoc" in data["tool"]

    @classmethod
    def load_from_pyproject(cls, pyproject_path: Path) -> "DocgenConfig":
        """Load configuration from pyproject.toml file."""
        import tomllib

        with open(pyproject_path, 'rb') as f:
            data = tomllib.load(f)

        if "tool" not in data or "uiuadoc" not in data["tool"]:
            raise DocgenError("No [tool.uiuadoc] section found in pyproject.toml",
                              {"path": str(pyproject_path)})

        return cls(**data["tool"]["uiuadoc"])

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(mode="json")

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2, sort_keys=False)

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of issues."""
        issues = []

        if not self.extraction.main_file:
            issues.append("Main file name must not be empty")

        if not self.summary.doc_marker:
            issues.append("Documentation marker must not be empty")

        if self.output.indent < 0:
            issues.append("Output indent must not be negative")

        if self.output.verbose and self.output.quiet:
            issues.append("Verbose and quiet output are mutually exclusive")

        if self.output.output_file and self.output.output_file.parent:
            if not self.output.output_file.parent.exists():
                issues.append(f"Output directory does not exist: {self.output.output_file.parent}")

        return issues

    def merge_with_cli_args(self, **cli_args) -> "DocgenConfig":
        """Merge configuration with CLI arguments."""
        config_dict = self.model_dump()

        # Map CLI arguments to config structure
        cli_mapping = {
            'verbose': 'output.verbose',
            'quiet': 'output.quiet',
            'format': 'output.format',
            'output': 'output.output_file',
            'title': 'summary.title',
            'main_file': 'extraction.main_file',
            'include_context': 'highlight.include_context',
        }

        for cli_key, cli_value in cli_args.items():
            if cli_value is not None and cli_key in cli_mapping:
                config_path = cli_mapping[cli_key].split('.')
                current = config_dict

                for path_part in config_path[:-1]:
                    current = current[path_part]

                current[config_path[-1]] = cli_value

        return DocgenConfig(**config_dict)

"""Tests for documentation and configuration completeness."""

from pathlib import Path

import yaml

ROOT = Path(__file__).parent.parent


class TestReadme:
    """Tests for README.md content."""

    def test_readme_exists(self) -> None:
        """README.md exists in project root."""
        assert (ROOT / "README.md").exists()

    def test_readme_sections(self) -> None:
        """README covers features, usage, configuration and layout."""
        content = (ROOT / "README.md").read_text()
        for section in (
            "# Temple Crowd Density",
            "## Features",
            "## Architecture",
            "## Quick Start",
            "## CLI Usage",
            "## Configuration",
            "## Project Structure",
        ):
            assert section in content

    def test_readme_documents_commands(self) -> None:
        """Every CLI command appears in the README."""
        content = (ROOT / "README.md").read_text()
        for command in ("generate", "predict", "random", "analytics"):
            assert f"temple-crowd {command}" in content

    def test_readme_has_license(self) -> None:
        """README mentions license."""
        assert "MIT" in (ROOT / "README.md").read_text()


class TestConfigFiles:
    """Tests for shipped configuration files."""

    def test_default_config_sections(self) -> None:
        """The default config has every section."""
        data = yaml.safe_load((ROOT / "configs" / "config.yaml").read_text())
        assert set(data) == {"generator", "export", "logging", "dashboard"}

    def test_pyproject_declares_cli(self) -> None:
        """The console script points at the click entry point."""
        content = (ROOT / "pyproject.toml").read_text()
        assert 'temple-crowd = "temple_crowd.cli:main"' in content

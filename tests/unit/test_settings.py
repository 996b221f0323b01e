"""
Tests for ocidigest configuration loading.

Tests verify:
- Model defaults
- TOML discovery (.ocidigest/config.toml and pyproject.toml)
- Environment variables override TOML
- Parse errors are recorded rather than raised
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from ocidigest.core.exceptions import ConfigFileError
from ocidigest.core.models.config import HashConfig, LoggingConfig
from ocidigest.core.settings import find_config_file, load_settings


def _write_config(root: Path, body: str) -> Path:
    path = root / ".ocidigest" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text(body)
    return path


class TestModels:
    """Tests for the config models."""

    def test_hash_defaults(self):
        """sha256, 1024-byte chunks, blake3 enabled."""
        config = HashConfig()
        assert config.canonical == "sha256"
        assert config.chunk_size == 1024
        assert config.blake3 is True

    def test_chunk_size_positive(self):
        """Zero chunk size is invalid."""
        with pytest.raises(ValidationError):
            HashConfig(chunk_size=0)

    def test_unknown_canonical(self):
        """Canonical algorithm must be a default algorithm."""
        with pytest.raises(ValidationError):
            HashConfig(canonical="md5")

    def test_canonical_blake3_needs_blake3(self):
        """blake3 cannot be canonical when disabled."""
        with pytest.raises(ValidationError):
            HashConfig(canonical="blake3", blake3=False)

    def test_log_level_case_insensitive(self):
        """Log levels are normalized."""
        assert LoggingConfig(level="DEBUG").level == "debug"


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_defaults_without_file(self, tmp_path):
        """No config file gives model defaults."""
        settings = load_settings(start_dir=str(tmp_path))
        assert settings.hash.canonical == "sha256"
        assert settings.logging.level == "warning"
        assert settings.config_file is None

    def test_finds_config_dir(self, tmp_path):
        """.ocidigest/config.toml is found from a subdirectory."""
        path = _write_config(tmp_path, '[hash]\ncanonical = "sha512"\nchunk_size = 8192\n')
        sub = tmp_path / "a" / "b"
        sub.mkdir(parents=True)

        assert find_config_file(str(sub)) == path
        settings = load_settings(start_dir=str(sub))
        assert settings.hash.canonical == "sha512"
        assert settings.hash.chunk_size == 8192
        assert settings.config_file == str(path)

    def test_pyproject_section(self, tmp_path):
        """[tool.ocidigest] in pyproject.toml is used."""
        (tmp_path / "pyproject.toml").write_text('[tool.ocidigest.logging]\nlevel = "debug"\n')
        settings = load_settings(start_dir=str(tmp_path))
        assert settings.logging.level == "debug"

    def test_pyproject_without_section_ignored(self, tmp_path):
        """pyproject.toml without the section is not a config file."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert find_config_file(str(tmp_path)) is None

    def test_explicit_path(self, tmp_path):
        """An explicit config path is loaded directly."""
        path = tmp_path / "custom.toml"
        path.write_text("[hash]\nblake3 = false\n")
        assert load_settings(config_path=path).hash.blake3 is False

    def test_explicit_missing_path(self, tmp_path):
        """A missing explicit path raises ConfigFileError."""
        with pytest.raises(ConfigFileError):
            load_settings(config_path=tmp_path / "nope.toml")

    def test_env_overrides_toml(self, tmp_path, monkeypatch):
        """Environment variables win over the file."""
        _write_config(tmp_path, "[hash]\nchunk_size = 8192\n")
        monkeypatch.setenv("OCIDIGEST_HASH__CHUNK_SIZE", "2048")
        assert load_settings(start_dir=str(tmp_path)).hash.chunk_size == 2048

    def test_overrides_win(self, tmp_path, monkeypatch):
        """Explicit overrides win over everything."""
        monkeypatch.setenv("OCIDIGEST_HASH__CHUNK_SIZE", "2048")
        settings = load_settings(start_dir=str(tmp_path), hash={"chunk_size": 16})
        assert settings.hash.chunk_size == 16

    def test_parse_error_recorded(self, tmp_path):
        """Broken TOML is recorded, defaults are used."""
        _write_config(tmp_path, "[hash\n")
        settings = load_settings(start_dir=str(tmp_path))
        assert settings.config_error is not None
        assert settings.hash.chunk_size == 1024
        assert "_config_error" in settings.to_dict()

    def test_to_dict(self, tmp_path):
        """to_dict() has one entry per section."""
        data = load_settings(start_dir=str(tmp_path)).to_dict()
        assert data["hash"]["canonical"] == "sha256"
        assert data["logging"]["console"] is False

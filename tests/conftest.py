"""
Shared fixtures for legal-licenses tests.
"""

import json

import pytest

from legal_licenses.cli_config import reset_config


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep config lookups away from the real home directory and environment."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in [
        "LEGAL_LICENSES_MANIFEST",
        "LEGAL_LICENSES_VENDOR_DIR",
        "LEGAL_LICENSES_OUTPUT_DIR",
        "LEGAL_LICENSES_HIDE_VERSION",
        "LEGAL_LICENSES_CSV",
        "LEGAL_LICENSES_INCLUDE_LICENSE_TEXT",
        "LEGAL_LICENSES_INCLUDE_DEV",
        "LEGAL_LICENSES_LOG_LEVEL",
        "LEGAL_LICENSES_MAX_FILE_SIZE_MB",
    ]:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_dir(tmp_path):
    """Working directory for a test project."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def sample_lock_data():
    """A composer.lock document with varied package metadata."""
    return {
        "_readme": ["This file locks the dependencies of your project"],
        "content-hash": "0123456789abcdef",
        "packages": [
            {
                "name": "acme/widget",
                "version": "1.2.0",
                "source": {
                    "type": "git",
                    "url": "https://example.com/widget",
                    "reference": "abcdef1234567",
                },
                "license": ["MIT"],
                "description": "Widgets for everyone",
                "homepage": "https://widget.example.com",
            },
            {
                "name": "acme/bare",
                "version": "0.1.0",
            },
            {
                "name": "foo/bar",
                "version": "v3.0.1",
                "source": {
                    "type": "git",
                    "url": "https://example.com/foo/bar.git",
                    "reference": "1234567890abcdef",
                },
                "license": ["MIT", "Apache-2.0"],
                "description": 'Bars, "quoted" and plain',
            },
        ],
        "packages-dev": [
            {
                "name": "dev/tool",
                "version": "2.0.0",
                "license": "BSD-3-Clause",
            }
        ],
    }


@pytest.fixture
def sample_composer_lock(temp_dir, sample_lock_data):
    """Write the sample lock data to composer.lock."""
    lock_file = temp_dir / "composer.lock"
    lock_file.write_text(json.dumps(sample_lock_data, indent=4), encoding="utf-8")
    return lock_file


@pytest.fixture
def vendor_dir(temp_dir):
    """Installed dependency tree; acme/bare and dev/tool have no directory."""
    vendor = temp_dir / "vendor"
    widget = vendor / "acme" / "widget"
    widget.mkdir(parents=True)
    (widget / "LICENSE").write_text("MIT License\n\nCopyright (c) Acme\n", encoding="utf-8")

    bar = vendor / "foo" / "bar"
    bar.mkdir(parents=True)
    (bar / "license.md").write_text("Apache License 2.0\n", encoding="utf-8")
    return vendor


@pytest.fixture
def sample_project(temp_dir, sample_composer_lock, vendor_dir, monkeypatch):
    """A project directory with composer.lock and vendor/, used as cwd."""
    monkeypatch.chdir(temp_dir)
    return temp_dir

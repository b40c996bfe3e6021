"""Shared test fixtures for navstack."""

import os
import tempfile

import pytest

SAMPLE_YAML = """---
- taxonomy: Tools
  icon: fas fa-tools
  links:
    - title: Example
      logo: https://e.com/l.png
      url: https://e.com
      description: a demo link
  list:
    - term: CLI
      links:
        - title: ripgrep
          logo: https://rg.dev/logo.png
          url: https://github.com/BurntSushi/ripgrep
          description: fast grep
- taxonomy: Reading
  links:
    - title: Blog
      logo: https://blog.dev/logo.png
      url: https://blog.dev
      description: notes
      qrcode: https://blog.dev/qr.png
"""


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def sample_yaml():
    return SAMPLE_YAML


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file pointing all paths into tmp_dir."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "state_file": os.path.join(tmp_dir, "state", "notifications.json"),
            "feed_file": os.path.join(tmp_dir, "static", "rss.xml"),
        },
        "bookmarks": {
            "output_dir": os.path.join(tmp_dir, "static", "bookmarks"),
        },
        "github": {
            "token": "",
            "repo": "",
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep the developer's own deployment variables out of the tests."""
    from navstack.core.config import LEGACY_ENV_KEYS

    for key in list(os.environ):
        if key in LEGACY_ENV_KEYS or key.startswith("NAVSTACK_"):
            monkeypatch.delenv(key, raising=False)

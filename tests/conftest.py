import sys
import tempfile
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_yaml_config(temp_dir):
    """Create a sample YAML settings file."""
    config_path = temp_dir / "bindkit.yaml"
    config_path.write_text("""
name: inventory
duplicate_bindings: reject
start_concurrently: false
""")
    return config_path


@pytest.fixture
def sample_json_config(temp_dir):
    """Create a sample JSON settings file."""
    config_path = temp_dir / "bindkit.json"
    config_path.write_text("""{
    "name": "orders",
    "duplicate_bindings": "overwrite"
}""")
    return config_path


@pytest.fixture
def empty_config_file(temp_dir):
    """Create an empty config file."""
    config_path = temp_dir / "empty.yaml"
    config_path.write_text("")
    return config_path


@pytest.fixture(autouse=True)
def clean_class_metadata():
    """Clean class metadata before and after each test."""
    from bindkit.metadata import clear_class_metadata
    clear_class_metadata()
    yield
    clear_class_metadata()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep BINDKIT_* variables and stray .env files out of the tests."""
    import os
    for name in list(os.environ):
        if name.upper().startswith("BINDKIT_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)

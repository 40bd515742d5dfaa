"""Pytest fixtures for oxalis-config tests."""

import pytest

from oxalisconfig.config import OXALIS_GLOBAL_PROPERTIES_FILE_NAME

REQUIRED_VALUES = {
    "oxalis.jdbc.driver.class": "com.mysql.jdbc.Driver",
    "oxalis.jdbc.connection.uri": "jdbc:mysql://localhost/oxalis",
    "oxalis.jdbc.user": "oxalis",
    "oxalis.jdbc.password": "s3cret",
    "oxalis.keystore.password": "peppol",
}


def render_properties(values: dict) -> bytes:
    """Render a simple key=value properties document as UTF-8 bytes."""
    return "".join(f"{key}={value}\n" for key, value in values.items()).encode("utf-8")


@pytest.fixture
def render():
    """Provide the properties renderer."""
    return render_properties


@pytest.fixture
def required_values():
    """All required properties with valid values."""
    return dict(REQUIRED_VALUES)


@pytest.fixture
def no_env():
    """Environment lookup that never finds anything."""
    return lambda name: None


@pytest.fixture
def oxalis_home(tmp_path, required_values):
    """Home directory holding a minimal valid oxalis-global.properties."""
    home = tmp_path / "oxalis-home"
    home.mkdir()
    (home / OXALIS_GLOBAL_PROPERTIES_FILE_NAME).write_bytes(render_properties(required_values))
    return home

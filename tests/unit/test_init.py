r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import aresclient


def test_package_version_is_string() -> None:
    assert isinstance(aresclient.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    assert "." in aresclient.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in aresclient.__all__:
        assert hasattr(aresclient, name), f"{name} is in __all__ but not defined in module"


def test_all_exports_count() -> None:
    # 1 client + 1 config + 3 errors + 4 auth types + 1 version = 10
    assert len(aresclient.__all__) == 10

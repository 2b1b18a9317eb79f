"""Verify package imports work correctly."""


def test_import_podrender() -> None:
    """Test that podrender can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import podrender

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert podrender.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from podrender import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_cli_module_imports() -> None:
    from podrender.cli import app

    assert app.info.name == "podrender"

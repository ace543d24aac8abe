"""Test module for compact_markup package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import compact_markup

    # Assert
    assert compact_markup is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    import compact_markup

    assert isinstance(compact_markup.__version__, str)
    assert compact_markup.__version__ == "0.1.0"


def test_package_exports_are_importable() -> None:
    """Test that every name in __all__ resolves on the package."""
    import compact_markup

    for name in compact_markup.__all__:
        assert hasattr(compact_markup, name), name


def test_level_one_round_trip() -> None:
    """Test the simple functions compose into a lossless round trip."""
    from compact_markup import pack, render, unpack

    assert render(unpack(pack('<p class="x">Hi<br></p>'))) == '<p class="x">Hi<br></p>'

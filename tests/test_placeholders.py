import base64

import pytest

from src.assets.core.placeholders import (
    PLACEHOLDERS,
    PlaceholderOptions,
    PlaceholderVariant,
    generate_blurred_placeholder,
    generate_cyberpunk_placeholder,
    generate_svg_placeholder,
    get_placeholder,
    placeholder_markup,
)

PREFIX = "data:image/svg+xml;base64,"


def decode(data_url: str) -> str:
    assert data_url.startswith(PREFIX)
    return base64.b64decode(data_url[len(PREFIX):]).decode("utf-8")


@pytest.mark.parametrize(
    "generate",
    [generate_svg_placeholder, generate_blurred_placeholder, generate_cyberpunk_placeholder],
)
def test_identical_options_give_identical_output(generate):
    options = PlaceholderOptions(width=400, height=300, text="Card")
    assert generate(options) == generate(PlaceholderOptions(width=400, height=300, text="Card"))
    assert generate() == generate()


def test_default_placeholder_uses_default_options():
    svg = decode(generate_svg_placeholder())
    assert 'width="320" height="240"' in svg
    assert 'fill="#333333"' in svg
    assert 'fill="#999999"' in svg
    assert 'font-size="14"' in svg
    assert ">Loading...</text>" in svg


def test_custom_options_are_applied():
    svg = decode(
        generate_svg_placeholder(
            PlaceholderOptions(width=10, height=20, background_color="#000", text="Hi", font_size=9)
        )
    )
    assert 'width="10" height="20"' in svg
    assert 'fill="#000"' in svg
    assert ">Hi</text>" in svg


def test_text_is_escaped():
    svg = decode(generate_cyberpunk_placeholder(PlaceholderOptions(text="<script>")))
    assert "<script>" not in svg
    assert "&lt;script&gt;" in svg


def test_variants_differ():
    outputs = {get_placeholder(v) for v in PlaceholderVariant}
    assert len(outputs) == 3


def test_blurred_defaults_to_dark_background():
    svg = decode(generate_blurred_placeholder())
    assert "stop-color:#1a1a1a" in svg
    assert "feGaussianBlur" in svg


def test_get_placeholder_defaults_to_cyberpunk():
    assert get_placeholder() == generate_cyberpunk_placeholder()
    assert get_placeholder("default") == generate_svg_placeholder()


def test_unknown_variant_raises():
    with pytest.raises(ValueError):
        placeholder_markup("sparkly")


def test_predefined_placeholders():
    assert set(PLACEHOLDERS) == {"PROFILE", "ACHIEVEMENT", "PROJECT", "GENERIC"}
    profile = decode(PLACEHOLDERS["PROFILE"])
    assert 'width="320" height="320"' in profile
    assert ">Profile</text>" in profile


def test_each_variant_keeps_its_background_with_partial_options():
    options = PlaceholderOptions(width=100)

    blurred = decode(generate_blurred_placeholder(options))
    assert "stop-color:#1a1a1a" in blurred
    assert 'width="100"' in blurred
    assert 'fill="#333333"' in decode(generate_svg_placeholder(options))

    custom = decode(generate_blurred_placeholder(PlaceholderOptions(background_color="#123456")))
    assert "stop-color:#123456" in custom

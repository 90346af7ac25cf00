from flask import Blueprint, Response, jsonify, request

from src.assets import PlaceholderOptions, PlaceholderVariant, placeholder_markup

bp = Blueprint("images", __name__)

SVG_MIMETYPE = "image/svg+xml"


def _int_arg(name: str, default: int) -> int:
    value = request.args.get(name, type=int)
    if value is None or value <= 0:
        return default
    return min(value, 4096)


def _svg_response(svg: str) -> Response:
    response = Response(svg, mimetype=SVG_MIMETYPE)
    response.headers["Cache-Control"] = "public, max-age=86400"
    return response


@bp.route("/images/placeholder.svg", methods=["GET"])
def fallback_placeholder():
    """Serve the static fallback image used at the end of the image fallback chain."""
    return _svg_response(
        placeholder_markup(
            PlaceholderVariant.DEFAULT, PlaceholderOptions(text="Image not available")
        )
    )


@bp.route("/api/placeholders/<variant>", methods=["GET"])
def placeholder(variant: str):
    """Render a placeholder SVG.

    Args:
        variant: ``default``, ``blurred`` or ``cyberpunk``. Query parameters
            ``width``, ``height`` and ``text`` customize the image.

    Returns:
        flask.Response: ``image/svg+xml`` body, or 404 for an unknown variant.
    """
    try:
        kind = PlaceholderVariant(variant)
    except ValueError:
        return jsonify({"error": f"Unknown placeholder variant: {variant}"}), 404
    defaults = PlaceholderOptions()
    options = PlaceholderOptions(
        width=_int_arg("width", defaults.width),
        height=_int_arg("height", defaults.height),
        text=request.args.get("text", defaults.text)[:64],
    )
    return _svg_response(placeholder_markup(kind, options))

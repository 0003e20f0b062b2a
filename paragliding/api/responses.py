"""Response helpers shared by the API blueprints."""

from flask import Response, current_app


def plain_text(body, status: int = 200) -> Response:
    """text/plain response; used by the single-value endpoints."""
    return Response(str(body), status=status, mimetype='text/plain')


def component(name: str):
    """Fetch a component wired into app.config by create_app()."""
    return current_app.config[name]

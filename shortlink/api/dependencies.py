from fastapi import Request

from shortlink.core.context import AppContext


def get_context(request: Request) -> AppContext:
    return request.app.state.context


async def get_long_url(request: Request) -> str:
    """Read ``long_url`` from the form body, falling back to the query string."""
    form = await request.form()
    value = form.get("long_url")
    # File uploads under the same name count as missing
    if not isinstance(value, str):
        value = None
    return value or request.query_params.get("long_url") or ""

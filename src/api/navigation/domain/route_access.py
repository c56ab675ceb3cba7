"""Route access decision procedure.

A requested path is accessible when some resolved menu path equals it,
is a parent of it (``/acme/users`` covers ``/acme/users/42``), or lies below
it (``/acme/users/42`` covers ``/acme/users``). The last direction is more
permissive than strictly needed and is kept because deep links into pages
nested under a menu's declared path rely on it.
"""

from __future__ import annotations

from collections.abc import Iterable

from navigation.domain.menu_tree import MenuNode

DEFAULT_LANDING_SEGMENT = "dashboard"


def normalize_path(path: str) -> str:
    """Drop query string, fragment and trailing slash from a route path."""
    for separator in ("?", "#"):
        path = path.split(separator, 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def path_matches(requested: str, menu_path: str) -> bool:
    """Check a requested path against one menu path."""
    requested = normalize_path(requested)
    menu_path = normalize_path(menu_path)
    return (
        requested == menu_path
        or requested.startswith(menu_path + "/")
        or menu_path.startswith(requested + "/")
    )


def menu_paths(nodes: Iterable[MenuNode]) -> list[str]:
    """Collect the internal paths of a menu forest, children included.

    External URL entries do not authorize routes and are skipped.
    """
    paths: list[str] = []
    for root in nodes:
        for node in root.walk():
            if node.path is not None:
                paths.append(node.path)
    return paths


def is_path_accessible(requested: str, paths: Iterable[str]) -> bool:
    """Check whether any menu path grants access to the requested path."""
    return any(path_matches(requested, path) for path in paths)


def default_route(
    tenant_slug: str | None,
    durable_slug: str | None = None,
    landing_segment: str = DEFAULT_LANDING_SEGMENT,
) -> str:
    """Compute the fallback route for a redirect.

    Priority: the current tenant's landing page, then the landing page of
    the tenant found in the durable record, then the bare landing page.
    """
    if tenant_slug:
        return f"/{tenant_slug}/{landing_segment}"
    if durable_slug:
        return f"/{durable_slug}/{landing_segment}"
    return f"/{landing_segment}"

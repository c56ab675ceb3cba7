"""Navigation bounded context: tenant-scoped menus and the route guard."""

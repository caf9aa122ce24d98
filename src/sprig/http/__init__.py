"""HTTP adapter helpers — request input parsing and ASGI response sending."""

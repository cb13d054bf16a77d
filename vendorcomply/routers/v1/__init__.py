"""Version 1 API routers, mounted under ``/api/v1``."""

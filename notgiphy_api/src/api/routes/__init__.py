"""
API route modules.

This package contains subrouters for:
- Auth: login, register, logout and current user
- Favorites: saved GIFs
- Tags: labels on favorites
- Gifs: proxy to the GIF provider
- Frontend: static UI bundle and root-level search (catch-all, include last)

Routers are included from src.api.main (API routers under the /api prefix).
"""

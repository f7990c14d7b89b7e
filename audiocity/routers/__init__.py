"""
FastAPI routers grouped by entity (songs, playlists, users).

Each module exposes an APIRouter included by `audiocity.app.create_app`.
Routers read the MediaLibrary from `request.app.state` and never build
repositories themselves.
"""

"""API router subpackage for the feature server.

Each module exposes its own APIRouter for composition in the application's
main FastAPI instance.

Submodules:
    - layers: Endpoints deriving table and feature layer descriptors.
"""

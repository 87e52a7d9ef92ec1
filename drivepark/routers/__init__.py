"""
FastAPI routers grouped by domain.

`categories`, `users`, `listings_api` and `auth` make up the backend JSON
API. `listings` and `pages` are the server-rendered front-end. Each module
exposes an APIRouter that the matching application includes.
"""

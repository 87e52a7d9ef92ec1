"""
High-level use cases for DrivePark.

Backend services (categories, users, listings, login) orchestrate the SQL
repository. Front-end services (listing fetcher, vertical guard, page
renderer) orchestrate the backend HTTP API and the templates. Routers call
these services instead of touching the store or httpx directly.
"""

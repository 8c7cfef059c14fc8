"""
Minimal blogging backend: user accounts, JWT cookie sessions and posts
with cover image uploads, served by FastAPI on top of SQLAlchemy.
"""

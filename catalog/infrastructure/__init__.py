"""Infrastructure: Redis cache, SQLAlchemy persistence, and the cache coordinator."""

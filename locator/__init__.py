"""Location resolution and caching service."""

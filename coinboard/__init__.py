"""coinboard: searchable, auto-refreshing cryptocurrency price board."""

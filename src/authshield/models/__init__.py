"""Statistical models used by the agents."""

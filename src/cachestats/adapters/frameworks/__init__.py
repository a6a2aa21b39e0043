"""Framework integrations that trigger metrics recording."""

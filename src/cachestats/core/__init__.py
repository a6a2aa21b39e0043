"""Core domain: models, ports, codec and the metrics components."""

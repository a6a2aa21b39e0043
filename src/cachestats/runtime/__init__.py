"""Background runtime for periodic retention sweeps."""

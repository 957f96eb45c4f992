"""Framework adapters for the web layer."""

"""Decision engines."""

"""Git hook integration."""

"""Pure numeric helpers: units, clock/pace text, and zone classification."""

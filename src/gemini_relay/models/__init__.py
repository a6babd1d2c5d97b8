"""Model access: the inference dispatcher and its providers."""

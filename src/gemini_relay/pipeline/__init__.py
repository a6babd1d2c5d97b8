"""Request pipeline: turns validated input into model parts and dispatches them."""

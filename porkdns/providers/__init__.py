"""Remote API providers."""

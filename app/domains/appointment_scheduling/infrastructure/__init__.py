"""Infrastructure layer: store adapters, messaging and stream consumers."""

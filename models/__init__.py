"""Claude model configuration."""

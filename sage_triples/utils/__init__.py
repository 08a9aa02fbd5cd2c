"""Small helpers shared by the CLI and configuration."""

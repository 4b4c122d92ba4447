"""Bundle store, language resolution and configuration."""

"""Core models shared by the template engine and the CLI."""

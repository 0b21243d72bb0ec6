"""CLI module for wpxmlrpc."""

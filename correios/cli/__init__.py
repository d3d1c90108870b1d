"""Command-line interface for the Correios client."""

"""Command line interface for simple-aes-cbc."""

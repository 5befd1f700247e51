"""Command-line scripts for the checkout system."""

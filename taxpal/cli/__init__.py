"""TaxPal command-line interface."""

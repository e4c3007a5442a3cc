"""TaxPal - income/expense tracking and self-employment tax estimates for freelancers."""

__version__ = "0.1.0"

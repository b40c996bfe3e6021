"""navstack: manage a WebStack-style link directory stored in a GitHub repository."""

__version__ = "0.1.0"

"""Record -> dict transformers used by the views."""

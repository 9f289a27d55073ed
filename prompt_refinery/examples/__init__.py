"""Runnable usage examples (``python -m prompt_refinery.examples.basic_usage``)."""

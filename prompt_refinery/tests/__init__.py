"""Tests for prompt_refinery."""

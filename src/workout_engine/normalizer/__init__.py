"""Workout normalizer: record parsing, token decoding, targets, totals, and display text."""

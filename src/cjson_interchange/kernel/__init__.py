"""Canonicalization kernel: value model, converter, writer, hash helpers."""

"""Conector Douyin (Open Platform e mini-program)."""

"""Rotas Douyin."""

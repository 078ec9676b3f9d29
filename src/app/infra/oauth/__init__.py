"""OAuth (authorization code) do Douyin."""

from app.infra.oauth.douyin_oauth import DouyinOAuth

__all__ = ["DouyinOAuth"]

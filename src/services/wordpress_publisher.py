# src/services/wordpress_publisher.py

"""Publish rendered posts through the WordPress REST API."""

import logging
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings, WordPressConfig
from src.models.post import Post

logger = logging.getLogger("travel_deals.publisher")


class PublishError(RuntimeError):
    """Raised when the WordPress API rejects a create or update call."""

    def __init__(self, action: str, status_code: int, body: str) -> None:
        super().__init__(
            f"Failed to {action} post: HTTP {status_code}: {body[:200]}"
        )
        self.action = action
        self.status_code = status_code
        self.body = body


class WordPressPublisher:
    """Upsert posts by slug using application-password basic auth.

    A post whose slug already exists gets its content and excerpt
    updated; otherwise a new published post is created.
    """

    def __init__(
        self,
        config: WordPressConfig,
        session: curl_requests.Session | None = None,
    ) -> None:
        self.config = config
        self.session = session or curl_requests.Session()
        self._auth = (config.username, config.app_password)
        self._timeout = Settings.REQUEST_TIMEOUT

    @staticmethod
    def _ok(resp: curl_requests.Response) -> bool:
        return 200 <= resp.status_code < 300

    def find_by_slug(self, slug: str) -> dict[str, Any] | None:
        """Return the first post (any status) with *slug*, if one exists."""
        resp = self.session.get(
            self.config.posts_endpoint,
            params={"slug": slug, "status": "any"},
            auth=self._auth,
            timeout=self._timeout,
        )
        if not self._ok(resp):
            raise PublishError("look up", resp.status_code, resp.text)
        posts: list[dict[str, Any]] = resp.json()
        return posts[0] if posts else None

    def create(self, post: Post, category_id: int) -> dict[str, Any]:
        """Create and publish a new post in *category_id*."""
        payload = {
            "title": post.title,
            "slug": post.slug,
            "content": post.content,
            "excerpt": post.excerpt,
            "status": "publish",
            "categories": [category_id],
            "tags": [],
        }
        resp = self.session.post(
            self.config.posts_endpoint,
            json=payload,
            auth=self._auth,
            timeout=self._timeout,
        )
        if not self._ok(resp):
            raise PublishError("create", resp.status_code, resp.text)
        created: dict[str, Any] = resp.json()
        logger.info("Published new post: %s", created.get("link"))
        return created

    def update(self, post_id: int, post: Post) -> dict[str, Any]:
        """Replace the content and excerpt of post *post_id*."""
        resp = self.session.put(
            f"{self.config.posts_endpoint}/{post_id}",
            json={"content": post.content, "excerpt": post.excerpt},
            auth=self._auth,
            timeout=self._timeout,
        )
        if not self._ok(resp):
            raise PublishError("update", resp.status_code, resp.text)
        updated: dict[str, Any] = resp.json()
        logger.info("Updated existing post: %s", updated.get("link"))
        return updated

    def publish(
        self, post: Post, category_id: int,
    ) -> dict[str, Any] | None:
        """Create or update *post*; ``None`` when credentials are missing.

        Raises:
            PublishError: the API rejected a call.
        """
        if not self.config.has_credentials:
            logger.warning(
                "Skipping WordPress publish - credentials not configured"
            )
            return None

        existing = self.find_by_slug(post.slug)
        if existing:
            logger.info(
                "Post already exists: %s (ID: %s)",
                post.title,
                existing["id"],
            )
            return self.update(int(existing["id"]), post)
        return self.create(post, category_id)

# socialfeed/views/home/services.py
import logging
from typing import List

from socialfeed.models.post import Post
from socialfeed.services.firestore_service import FirestoreService

POSTS_COLLECTION = 'posts'
FEED_ORDER_FIELD = 'createdAt'


class FeedService:
    """홈 피드 조회를 담당합니다. 페이지네이션, 캐시 없이 매번 한 번만 조회합니다."""

    def __init__(self, firestore_service: FirestoreService, page_size: int = 10):
        self.firestore = firestore_service
        self.page_size = page_size

    def init_app(self, app):
        self.page_size = app.config.get('FEED_PAGE_SIZE', self.page_size)

    def get_recent_posts(self) -> List[Post]:
        """createdAt 내림차순으로 최신 게시글 page_size개를 가져옵니다."""
        docs = self.firestore.list_recent(POSTS_COLLECTION, order_by=FEED_ORDER_FIELD, limit=self.page_size)
        return [Post.from_document(doc_id, data) for doc_id, data in docs]

    def fetch_recent_posts_safely(self) -> List[Post]:
        """조회 실패 시 로그만 남기고 빈 목록을 반환합니다. (피드는 빈 상태로 표시)"""
        try:
            return self.get_recent_posts()
        except Exception as e:
            logging.error(f"게시글 조회 실패: {e}", exc_info=True)
            return []

# socialfeed/services/firestore_service.py
import logging
from typing import Any, Dict, List, Tuple

from firebase_admin import firestore

from socialfeed.utils.datetime_utils import DateTimeUtils


class FirestoreService:
    """
    Cloud Firestore 읽기/쓰기를 담당하는 서비스 클래스입니다.
    쿼리 의미론은 Firestore가 소유하며, 여기서는 호출 형태만 정의합니다.
    """

    def __init__(self, client=None):
        self.db = client

    def init_app(self, app):
        if self.db is None:
            self.db = firestore.client()
        logging.info("FirestoreService: Firestore 클라이언트가 성공적으로 초기화되었습니다.")

    def set_document(self, collection_name: str, document_id: str, data: Dict[str, Any]) -> str:
        """
        지정된 컬렉션에 문서 ID를 키로 하여 문서를 저장(덮어쓰기)합니다.

        :param collection_name: 문서를 저장할 컬렉션 이름 (예: 'users')
        :param document_id: 문서 ID (예: Firebase Auth uid)
        :param data: 저장할 데이터 딕셔너리
        :return: 저장된 문서 ID
        """
        try:
            data = DateTimeUtils.for_firestore(data)
            self.db.collection(collection_name).document(document_id).set(data)
            logging.info(f"Firestore 저장 성공 (Collection: {collection_name}, Doc ID: {document_id})")
            return document_id
        except Exception as e:
            logging.error(f"Firestore 저장 실패 (Collection: {collection_name}): {e}", exc_info=True)
            raise

    def list_recent(self, collection_name: str, order_by: str = "createdAt", limit: int = 10) -> List[Tuple[str, Dict[str, Any]]]:
        """
        order_by 필드 기준 내림차순으로 최신 문서 limit개를 (문서 ID, 데이터) 목록으로 반환합니다.
        """
        query = (
            self.db.collection(collection_name)
            .order_by(order_by, direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        return [(doc.id, DateTimeUtils.from_firestore(doc.to_dict())) for doc in query.stream()]

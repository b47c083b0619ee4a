# socialfeed/utils/datetime_utils.py
"""
프로젝트 전체에서 일관된 시간 처리를 위한 유틸리티 모듈

1. 모든 시간은 UTC timezone-aware datetime으로 통일
2. Firestore 저장/읽기 변환
3. 피드 화면 표시용 문자열 변환
"""

import logging
from datetime import datetime, date, timezone, time
from typing import Any, Optional

logger = logging.getLogger(__name__)

DISPLAY_FORMAT = '%Y-%m-%d %H:%M'


class DateTimeUtils:
    """시간/날짜 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Firestore 저장을 위해 객체의 날짜/시간 필드를 변환

        변환 규칙:
        - date -> datetime (00:00:00 UTC)
        - timezone-naive datetime -> timezone-aware datetime (UTC)
        - dict/list 내부 재귀적 변환
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        elif isinstance(obj, date):
            return datetime.combine(obj, time.min).replace(tzinfo=timezone.utc)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Firestore에서 읽은 데이터의 datetime 필드를 적절히 변환

        변환 규칙:
        - Firestore timestamp (DatetimeWithNanoseconds 등) -> UTC datetime
        - {'seconds': ..., 'nanoseconds': ...} 형태의 dict -> UTC datetime
        - dict/list 내부 재귀적 변환
        """
        try:
            if isinstance(obj, datetime):
                if obj.tzinfo is None:
                    return obj.replace(tzinfo=timezone.utc)
                return obj.astimezone(timezone.utc)
            elif isinstance(obj, dict):
                if set(obj.keys()) == {'seconds', 'nanoseconds'}:
                    return datetime.fromtimestamp(obj['seconds'] + obj['nanoseconds'] / 1e9, tz=timezone.utc)
                return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [DateTimeUtils.from_firestore(item) for item in obj]
            elif hasattr(obj, 'timestamp') and callable(obj.timestamp):
                return datetime.fromtimestamp(obj.timestamp(), tz=timezone.utc)
            return obj
        except Exception as e:
            logger.error(f"Firestore 읽기 변환 실패: {obj} ({type(obj)}) - {e}")
            # 변환 실패 시 원본 객체 반환 (로그만 남김)
            return obj

    @staticmethod
    def to_display(dt: Optional[datetime]) -> str:
        """피드 카드에 표시할 시간 문자열. 값이 없으면 빈 문자열을 반환합니다."""
        if dt is None:
            return ""
        dt = DateTimeUtils.from_firestore(dt)
        if not isinstance(dt, datetime):
            return ""
        return dt.strftime(DISPLAY_FORMAT)


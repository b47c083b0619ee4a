# socialfeed/models/user.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class UserCredential:
    """
    Firebase Authentication이 소유하는 사용자 인증 정보.
    로컬에는 세션 쿠키의 uid 외에는 저장하지 않습니다.
    """
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None

    @classmethod
    def from_user_record(cls, record) -> 'UserCredential':
        """firebase_admin.auth.UserRecord 객체로부터 생성합니다."""
        return cls(
            uid=record.uid,
            email=record.email,
            display_name=record.display_name,
            photo_url=record.photo_url,
        )

    @property
    def first_name(self) -> str:
        if not self.display_name:
            return 'User'
        return self.display_name.split(' ')[0]

    @property
    def handle(self) -> str:
        if not self.email:
            return 'username'
        return self.email.split('@')[0]


@dataclass
class UserProfile:
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    문서 ID는 Firebase Auth가 발급한 uid 입니다.
    """
    uid: str
    full_name: str
    username: str
    age: int
    gender: str
    email: str
    languages: List[str]
    country_city: str
    contact: str = ""
    bio: str = ""
    photo_url: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_document(self) -> Dict[str, Any]:
        """기존 데이터베이스와 공유하는 camelCase 필드명으로 변환합니다."""
        return {
            "uid": self.uid,
            "fullName": self.full_name,
            "username": self.username,
            "age": self.age,
            "gender": self.gender,
            "email": self.email,
            "contact": self.contact,
            "languages": list(self.languages),
            "countryCity": self.country_city,
            "bio": self.bio,
            "photoURL": self.photo_url,
            "createdAt": self.created_at,
        }

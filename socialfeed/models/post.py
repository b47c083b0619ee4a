# socialfeed/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Comment:
    """Post 문서 내부 'comments' 배열의 한 항목."""
    author_id: Optional[str] = None
    author_name: Optional[str] = None
    text: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> 'Comment':
        return cls(
            author_id=data.get('authorId'),
            author_name=data.get('authorName'),
            text=data.get('text', ""),
            created_at=data.get('createdAt'),
        )


@dataclass
class Post:
    """
    Firestore 'posts' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    게시글 생성 경로는 이 앱에 없으며 피드에서 읽기만 합니다.
    """
    post_id: str
    author_id: Optional[str] = None
    author_name: Optional[str] = None
    author_photo_url: Optional[str] = None
    content: str = ""
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    likes: int = 0
    comments: List[Comment] = field(default_factory=list)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    @classmethod
    def from_document(cls, post_id: str, data: Dict[str, Any]) -> 'Post':
        """Firestore 문서(dict)를 Post 객체로 변환합니다. 누락된 카운터는 0으로 취급합니다."""
        return cls(
            post_id=post_id,
            author_id=data.get('authorId'),
            author_name=data.get('authorName'),
            author_photo_url=data.get('authorPhotoURL'),
            content=data.get('content', ""),
            image_url=data.get('imageURL') or None,
            created_at=data.get('createdAt'),
            likes=data.get('likes') or 0,
            comments=[Comment.from_document(c) if isinstance(c, dict) else Comment(text=str(c))
                      for c in (data.get('comments') or [])],
        )

# socialfeed/views/signup/services.py
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from socialfeed.models.user import UserCredential, UserProfile
from socialfeed.services.firestore_service import FirestoreService
from socialfeed.services.identity_service import IdentityService
from socialfeed.services.storage_service import StorageService
from socialfeed.utils.datetime_utils import DateTimeUtils
from socialfeed.views.signup.wizard import PictureUpload

USERS_COLLECTION = 'users'


class SignupError(Exception):
    """
    회원가입 처리 중 한 단계가 실패했을 때 발생합니다.
    message는 오류 모달에 그대로 표시됩니다.
    """

    def __init__(self, message: str, step: str, compensated: bool = True):
        super().__init__(message)
        self.message = message
        self.step = step
        self.compensated = compensated


class SignupService:
    """
    회원가입 최종 제출을 처리합니다. 세 개의 외부 시스템(Auth, Storage, Firestore)에 걸친
    쓰기를 순서대로 수행하며, 중간 단계가 실패하면 이미 완료된 단계를 역순으로 되돌립니다.

        1. Firebase Auth 사용자 생성       (되돌리기: 사용자 삭제)
        2. 프로필 사진 업로드 (선택)        (되돌리기: 파일 삭제)
        3. Auth 표시 이름 / 사진 URL 갱신
        4. Firestore 'users/{uid}' 문서 저장
    """

    def __init__(self, identity_service: IdentityService, storage_service: StorageService,
                 firestore_service: FirestoreService):
        self.identity = identity_service
        self.storage = storage_service
        self.firestore = firestore_service

    def register(self, data: Dict[str, Any], picture: Optional[PictureUpload] = None) -> UserProfile:
        """
        검증된 회원가입 데이터로 계정과 프로필을 생성합니다.

        :param data: SignupSchema로 검증된 폼 데이터
        :param picture: 1단계에서 선택한 프로필 사진 (없으면 None)
        :return: 저장된 프로필
        :raises SignupError: 어느 단계에서든 실패한 경우
        """
        compensations: List[Tuple[str, Callable[[], Any]]] = []
        step = 'create_user'
        try:
            # 1. 사용자 생성 (email/password)
            user: UserCredential = self.identity.create_user(data['email'], data['password'])
            compensations.append(('delete_user', lambda: self.identity.delete_user(user.uid)))

            # 2. 프로필 사진 업로드
            step = 'upload_picture'
            photo_url = ""
            if picture is not None and picture.data:
                key = self.storage.new_profile_picture_key()
                blob = self.storage.upload(key, picture.data, picture.content_type)
                compensations.append(('delete_picture', lambda: self.storage.delete(key)))
                photo_url = self.storage.get_download_url(blob)

            # 3. Auth 프로필 갱신
            step = 'update_profile'
            self.identity.update_profile(user.uid, data['fullName'], photo_url)

            # 4. Firestore에 추가 사용자 정보 저장
            step = 'save_profile'
            profile = UserProfile(
                uid=user.uid,
                full_name=data['fullName'],
                username=data['username'],
                age=data['age'],
                gender=data['gender'],
                email=data['email'],
                contact=data.get('contact') or "",
                languages=data['languages'],
                country_city=data['countryCity'],
                bio=data.get('bio') or "",
                photo_url=photo_url,
                created_at=DateTimeUtils.now(),
            )
            self.firestore.set_document(USERS_COLLECTION, user.uid, profile.to_document())
        except Exception as e:
            logging.error(f"회원가입 실패 (단계: {step}): {e}", exc_info=True)
            compensated = self._compensate(compensations)
            raise SignupError(getattr(e, 'message', None) or str(e), step, compensated) from e

        logging.info(f"회원가입 완료 (uid: {profile.uid})")
        return profile

    def _compensate(self, compensations: List[Tuple[str, Callable[[], Any]]]) -> bool:
        """완료된 단계를 역순으로 되돌립니다. 되돌리기 실패는 로그만 남기고 원래 오류를 유지합니다."""
        ok = True
        for name, undo in reversed(compensations):
            try:
                undo()
                logging.info(f"회원가입 보상 작업 완료: {name}")
            except Exception as e:
                ok = False
                logging.error(f"회원가입 보상 작업 실패: {name} - {e}", exc_info=True)
        return ok

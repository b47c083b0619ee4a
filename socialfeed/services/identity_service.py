# socialfeed/services/identity_service.py

import logging
from typing import Optional

import requests
from flask import Flask
from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from socialfeed.models.user import UserCredential


class IdentityProviderError(Exception):
    """Firebase Authentication 호출이 실패했을 때 발생하는 예외입니다."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class IdentityService:
    """
    Firebase Authentication과의 통신을 담당하는 서비스 클래스입니다.
    - 사용자 생성/수정/조회/삭제: firebase_admin.auth (Admin SDK)
    - 비밀번호 로그인, 비밀번호 재설정 메일: Identity Toolkit REST API
      (Admin SDK는 비밀번호 검증과 메일 발송 기능을 제공하지 않습니다.)
    """
    _base_url = "https://identitytoolkit.googleapis.com/v1"

    def __init__(self, auth_client=None, http=None):
        self.auth = auth_client or firebase_auth
        self.http = http or requests.Session()
        self.api_key = None
        self.timeout = 10

    def init_app(self, app: Flask):
        """앱 초기화 과정에서 호출되어 웹 API 키와 타임아웃을 설정합니다."""
        api_key = app.config.get('FIREBASE_API_KEY')
        if not api_key:
            raise ValueError("FIREBASE_API_KEY 설정이 .env 또는 설정 파일에 필요합니다.")
        self.api_key = api_key
        self.timeout = app.config.get('IDENTITY_HTTP_TIMEOUT', 10)
        logging.info("IdentityService: Firebase Authentication 서비스가 성공적으로 초기화되었습니다.")

    # --- Admin SDK ---
    def create_user(self, email: str, password: str) -> UserCredential:
        """이메일/비밀번호로 새 사용자를 생성합니다. (중복 이메일 등은 IdentityProviderError)"""
        try:
            record = self.auth.create_user(email=email, password=password)
        except firebase_auth.EmailAlreadyExistsError as e:
            raise IdentityProviderError("The email address is already in use by another account.", "EMAIL_EXISTS") from e
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            raise IdentityProviderError(str(e), getattr(e, 'code', None)) from e
        logging.info(f"Firebase Auth 사용자 생성 성공 (uid: {record.uid})")
        return UserCredential.from_user_record(record)

    def update_profile(self, uid: str, display_name: Optional[str], photo_url: Optional[str]) -> UserCredential:
        """
        사용자의 표시 이름과 사진 URL을 갱신합니다.
        Admin SDK는 빈 문자열 photo_url을 허용하지 않으므로 빈 값은 '변경 없음'으로 전달합니다.
        """
        try:
            record = self.auth.update_user(
                uid,
                display_name=display_name or None,
                photo_url=photo_url or None,
            )
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            raise IdentityProviderError(str(e), getattr(e, 'code', None)) from e
        return UserCredential.from_user_record(record)

    def get_user(self, uid: str) -> Optional[UserCredential]:
        """uid로 사용자를 조회합니다. 존재하지 않으면 None을 반환합니다."""
        try:
            record = self.auth.get_user(uid)
        except firebase_auth.UserNotFoundError:
            return None
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            raise IdentityProviderError(str(e), getattr(e, 'code', None)) from e
        return UserCredential.from_user_record(record)

    def delete_user(self, uid: str):
        """사용자를 삭제합니다. 이미 없는 사용자는 성공으로 간주합니다."""
        try:
            self.auth.delete_user(uid)
            logging.info(f"Firebase Auth 사용자 삭제 성공 (uid: {uid})")
        except firebase_auth.UserNotFoundError:
            logging.warning(f"Firebase Auth에서 이미 삭제된 사용자입니다 (uid: {uid}).")
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            raise IdentityProviderError(str(e), getattr(e, 'code', None)) from e

    # --- Identity Toolkit REST ---
    def sign_in(self, email: str, password: str) -> UserCredential:
        """이메일/비밀번호를 검증하고 사용자 정보를 반환합니다."""
        payload = self._post("accounts:signInWithPassword", {
            "email": email,
            "password": password,
            "returnSecureToken": True,
        })
        return UserCredential(
            uid=payload['localId'],
            email=payload.get('email', email),
            display_name=payload.get('displayName') or None,
            photo_url=payload.get('profilePicture') or None,
        )

    def send_password_reset(self, email: str):
        """비밀번호 재설정 메일 발송을 요청합니다."""
        self._post("accounts:sendOobCode", {
            "requestType": "PASSWORD_RESET",
            "email": email,
        })
        logging.info("비밀번호 재설정 메일 발송 요청 완료")

    def _post(self, method: str, body: dict) -> dict:
        if not self.api_key:
            raise RuntimeError("IdentityService가 초기화되지 않았습니다. init_app을 먼저 호출해주세요.")
        url = f"{self._base_url}/{method}"
        try:
            response = self.http.post(url, params={"key": self.api_key}, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise IdentityProviderError(f"Identity Toolkit 요청 실패: {e}") from e

        if not response.ok:
            code = None
            try:
                code = response.json().get('error', {}).get('message')
            except ValueError:
                pass
            logging.warning(f"Identity Toolkit 오류 응답 ({method}): {response.status_code} {code}")
            raise IdentityProviderError(code or f"HTTP {response.status_code}", code)
        return response.json()

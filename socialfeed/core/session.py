# socialfeed/core/session.py
import logging
from typing import Callable, List, Optional

from flask import g, current_app
from flask_jwt_extended import (
    create_access_token,
    set_access_cookies,
    unset_jwt_cookies,
    verify_jwt_in_request,
    get_jwt_identity,
)

from socialfeed.models.user import UserCredential

AuthListener = Callable[[Optional[UserCredential]], None]


class AuthState:
    """
    요청 단위의 로그인 상태 채널.
    구독 즉시 현재 사용자로 콜백을 한 번 호출하고, 이후 로그인/로그아웃이 일어날 때마다 다시 호출합니다.
    전역 상태 대신 g.auth_state로 필요한 뷰에 명시적으로 전달됩니다.
    """

    def __init__(self, user: Optional[UserCredential] = None):
        self._user = user
        self._listeners: List[AuthListener] = []

    @property
    def user(self) -> Optional[UserCredential]:
        return self._user

    def subscribe(self, callback: AuthListener) -> Callable[[], None]:
        """콜백을 등록하고 구독 해제 함수를 반환합니다."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        callback(self._user)
        return unsubscribe

    def set_user(self, user: Optional[UserCredential]):
        """상태를 바꾸고 등록된 모든 구독자에게 알립니다."""
        self._user = user
        for listener in list(self._listeners):
            listener(user)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


def load_auth_state() -> AuthState:
    """
    세션 쿠키(JWT)에서 uid를 읽어 현재 사용자를 조회합니다.
    토큰이 없거나 만료/위조되었거나, 사용자 조회 중 오류가 나면 모두 '로그인 안 됨'으로 취급합니다.
    """
    user = None
    try:
        verify_jwt_in_request(optional=True)
        uid = get_jwt_identity()
        if uid:
            user = current_app.services['identity'].get_user(uid)
    except Exception as e:
        logging.warning(f"세션 확인 실패, 비로그인 상태로 처리합니다: {e}")
        user = None
    return AuthState(user)


def get_auth_state() -> AuthState:
    """현재 요청의 AuthState를 반환합니다. (요청당 한 번만 생성)"""
    if 'auth_state' not in g:
        g.auth_state = load_auth_state()
    return g.auth_state


def start_session(response, user: UserCredential):
    """로그인 성공 시 uid를 담은 세션 쿠키를 응답에 설정합니다."""
    access_token = create_access_token(identity=user.uid)
    set_access_cookies(response, access_token)
    return response


def end_session(response):
    """세션 쿠키를 제거합니다."""
    unset_jwt_cookies(response)
    return response

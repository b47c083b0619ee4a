# socialfeed/views/auth/services.py
import logging
from typing import Optional

from socialfeed.core.session import AuthState
from socialfeed.models.user import UserCredential
from socialfeed.services.identity_service import IdentityService, IdentityProviderError

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password!"
RESET_SENT_MESSAGE = "Password reset email sent! Check your inbox."
RESET_FAILED_MESSAGE = "Failed to send reset email. Please try again."


class AuthService:
    """
    로그인 / 로그아웃 / 비밀번호 재설정 흐름을 담당합니다.
    실패 원인은 구분하지 않고 고정된 안내 문구만 사용자에게 보여줍니다.
    """

    def __init__(self, identity_service: IdentityService):
        self.identity = identity_service

    def login(self, email: str, password: str, auth_state: Optional[AuthState] = None) -> Optional[UserCredential]:
        """인증에 성공하면 사용자 정보를, 실패하면 None을 반환합니다."""
        try:
            user = self.identity.sign_in(email, password)
        except IdentityProviderError as e:
            logging.warning(f"로그인 실패: {e.code or e.message}")
            return None
        except Exception as e:
            logging.error(f"로그인 처리 중 예외 발생: {e}", exc_info=True)
            return None

        if auth_state is not None:
            auth_state.set_user(user)
        logging.info(f"로그인 성공 (uid: {user.uid})")
        return user

    def sign_out(self, auth_state: AuthState):
        """현재 요청의 로그인 상태를 비우고 구독자에게 알립니다. 쿠키 제거는 라우트에서 처리합니다."""
        user = auth_state.user
        auth_state.set_user(None)
        if user:
            logging.info(f"로그아웃 처리 완료 (uid: {user.uid})")

    def request_password_reset(self, email: str) -> bool:
        """재설정 메일 발송 요청 성공 여부를 반환합니다."""
        try:
            self.identity.send_password_reset(email)
            return True
        except IdentityProviderError as e:
            logging.warning(f"비밀번호 재설정 메일 요청 실패: {e.code or e.message}")
            return False
        except Exception as e:
            logging.error(f"비밀번호 재설정 처리 중 예외 발생: {e}", exc_info=True)
            return False

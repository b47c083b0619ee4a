# socialfeed/views/home/guard.py
from typing import Callable, Optional

from socialfeed.core.session import AuthState
from socialfeed.models.user import UserCredential

LOGIN_PATH = '/login'


class SessionGuard:
    """
    페이지가 마운트되어 있는 동안 로그인 상태 변화를 구독합니다.

    - 사용자가 있으면: self.user에 저장하고 on_user 콜백(피드 조회)을 호출
    - 사용자가 없으면: 알림마다 정확히 한 번 navigate(LOGIN_PATH) 호출

    with 블록을 벗어나면(언마운트) 구독이 해제됩니다.
    세션 확인 중 발생한 오류는 '로그인 안 됨'과 구분하지 않으며 재시도하지 않습니다.
    """

    def __init__(self, auth_state: AuthState,
                 on_user: Callable[[UserCredential], None],
                 navigate: Callable[[str], None],
                 login_path: str = LOGIN_PATH):
        self.auth_state = auth_state
        self.on_user = on_user
        self.navigate = navigate
        self.login_path = login_path
        self.user: Optional[UserCredential] = None
        self.loading = True
        self._unsubscribe: Optional[Callable[[], None]] = None

    def mount(self):
        if self._unsubscribe is None:
            self._unsubscribe = self.auth_state.subscribe(self._on_auth_state_changed)
        return self

    def unmount(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self):
        return self.mount()

    def __exit__(self, exc_type, exc, tb):
        self.unmount()
        return False

    def _on_auth_state_changed(self, user: Optional[UserCredential]):
        if user:
            self.user = user
            self.on_user(user)
        else:
            self.user = None
            self.navigate(self.login_path)
        self.loading = False

# socialfeed/views/signup/wizard.py
import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# 서버 메모리에 보관하는 프로필 사진의 총량 한도 (기본 256MB)
DEFAULT_PICTURE_BUDGET = 256 * 1024 * 1024

FIRST_STEP = 1
TOTAL_STEPS = 3

# 단계별로 입력받는 필드 목록
STEP_FIELDS = {
    1: ('fullName', 'username', 'age', 'gender'),
    2: ('email', 'password', 'contact', 'countryCity'),
    3: ('languages', 'bio'),
}
LIST_FIELDS = ('languages',)


@dataclass
class PictureUpload:
    """1단계에서 선택한 프로필 사진. 최종 제출 전까지 메모리에만 보관합니다."""
    filename: str
    content_type: str
    data: bytes


@dataclass
class SignupWizard:
    """
    3단계 회원가입 폼의 상태.
    단계 이동(next/back)은 검증을 하지 않으며, 단계 번호는 항상 [1, 3] 범위에 머뭅니다.
    """
    step: int = FIRST_STEP
    form: Dict[str, Any] = field(default_factory=dict)
    picture: Optional[PictureUpload] = None

    def next(self) -> int:
        self.step = min(self.step + 1, TOTAL_STEPS)
        return self.step

    def back(self) -> int:
        self.step = max(self.step - 1, FIRST_STEP)
        return self.step

    @property
    def is_last_step(self) -> bool:
        return self.step == TOTAL_STEPS

    def merge(self, values: Dict[str, Any], step: Optional[int] = None):
        """
        현재 단계에 속한 필드 값만 폼 상태에 반영합니다.
        제출되지 않은 목록 필드(체크박스 전부 해제)는 빈 목록으로 저장합니다.
        """
        step = step or self.step
        for name in STEP_FIELDS[step]:
            if name in LIST_FIELDS:
                self.form[name] = list(values.get(name) or [])
            elif name in values:
                self.form[name] = values[name]

    def set_picture(self, picture: Optional[PictureUpload]):
        if picture is not None:
            self.picture = picture

    def clear_picture(self):
        self.picture = None

    @property
    def picture_size(self) -> int:
        return len(self.picture.data) if self.picture else 0

    def fields_with_errors(self, errors: Dict[str, List[str]]) -> List[str]:
        """현재 단계 밖에 있는 오류 필드 목록 (다른 단계로 돌아가야 고칠 수 있는 항목)."""
        current = STEP_FIELDS[self.step]
        return [name for name in errors if name not in current]


class WizardStore:
    """
    브라우저 세션별 SignupWizard를 서버 메모리에 보관합니다.
    프로필 사진 바이트를 쿠키에 담을 수 없으므로 세션에는 위저드 ID만 저장합니다.

    - 위저드 수가 capacity를 넘으면 가장 오래 사용하지 않은 것부터 제거합니다.
    - 보관 중인 사진 총량이 picture_budget을 넘어도 같은 순서로 제거합니다.
    - 조회(get)는 위저드를 만들지 않으므로, 폼을 열어보기만 하는 요청은 저장소를 채우지 않습니다.
    """

    def __init__(self, capacity: int = 1000, picture_budget: int = DEFAULT_PICTURE_BUDGET):
        self.capacity = capacity
        self.picture_budget = picture_budget
        self._wizards: "OrderedDict[str, SignupWizard]" = OrderedDict()
        self._lock = threading.Lock()

    def init_app(self, app):
        self.capacity = app.config.get('SIGNUP_WIZARD_CAPACITY', self.capacity)
        self.picture_budget = app.config.get('SIGNUP_PICTURE_BUDGET', self.picture_budget)

    def get(self, wizard_id: Optional[str]) -> Optional[SignupWizard]:
        """저장된 위저드를 반환합니다. 없으면 None (새로 만들지 않음)."""
        with self._lock:
            if not wizard_id or wizard_id not in self._wizards:
                return None
            self._wizards.move_to_end(wizard_id)
            return self._wizards[wizard_id]

    def get_or_create(self, wizard_id: Optional[str]):
        """(wizard_id, wizard) 튜플을 반환합니다. 없거나 만료된 ID면 새로 만듭니다."""
        with self._lock:
            if wizard_id and wizard_id in self._wizards:
                self._wizards.move_to_end(wizard_id)
                return wizard_id, self._wizards[wizard_id]

            wizard_id = uuid.uuid4().hex
            wizard = SignupWizard()
            self._wizards[wizard_id] = wizard
            while len(self._wizards) > self.capacity:
                self._wizards.popitem(last=False)
            return wizard_id, wizard

    def attach_picture(self, wizard_id: str, picture: PictureUpload) -> bool:
        """
        위저드에 프로필 사진을 연결합니다.
        사진 하나가 한도보다 크거나 위저드가 없으면 False를 반환하고 기존 사진을 유지합니다.
        """
        if len(picture.data) > self.picture_budget:
            logging.warning(f"프로필 사진이 보관 한도를 초과하여 무시합니다: {picture.filename} ({len(picture.data)} bytes)")
            return False

        with self._lock:
            wizard = self._wizards.get(wizard_id)
            if wizard is None:
                return False
            wizard.set_picture(picture)
            self._wizards.move_to_end(wizard_id)

            total = self._picture_bytes()
            for old_id in list(self._wizards):
                if total <= self.picture_budget:
                    break
                if old_id == wizard_id:
                    continue
                total -= self._wizards.pop(old_id).picture_size
                logging.info(f"사진 보관 한도 초과로 회원가입 위저드 제거: {old_id}")
            return True

    def discard(self, wizard_id: Optional[str]):
        with self._lock:
            self._wizards.pop(wizard_id, None)

    @property
    def picture_bytes(self) -> int:
        with self._lock:
            return self._picture_bytes()

    def _picture_bytes(self) -> int:
        return sum(wizard.picture_size for wizard in self._wizards.values())

    def __len__(self):
        return len(self._wizards)

    def __contains__(self, wizard_id):
        return wizard_id in self._wizards

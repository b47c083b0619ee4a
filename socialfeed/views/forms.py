# socialfeed/views/forms.py
from marshmallow import Schema, EXCLUDE, pre_load, validate

# 공백이 없는 '로컬@도메인.최상위' 형태만 허용합니다. (예: user@example.com)
EMAIL_PATTERN = r'^\S+@\S+\.\S+$'


def email_format(message: str = "Please enter a valid email") -> validate.Regexp:
    return validate.Regexp(EMAIL_PATTERN, error=message)


def required(message: str) -> dict:
    """필드가 비어 있거나 null일 때 모두 같은 메시지를 보여주기 위한 error_messages."""
    return {"required": message, "null": message}


class FormSchema(Schema):
    """
    HTML 폼 입력을 검증하는 스키마의 기반 클래스.
    - 버튼 값, csrf_token 등 정의되지 않은 필드는 무시합니다.
    - 빈 문자열/빈 목록은 (untrimmed_fields는 완전히 빈 문자열만) '입력 안 함'으로 보고 제거하여 required 메시지가 나오도록 합니다.
    """

    # 앞뒤 공백도 값의 일부로 취급하는 필드 (비밀번호 등)
    untrimmed_fields = ("password",)

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def drop_blank_values(self, data, **kwargs):
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, str):
                if key in self.untrimmed_fields:
                    # 공백만으로 된 값도 입력으로 인정
                    if value == "":
                        continue
                elif not value.strip():
                    continue
                else:
                    value = value.strip()
            elif value in (None, [], ()):
                continue
            cleaned[key] = value
        return cleaned

# socialfeed/views/auth/schemas.py
from marshmallow import fields

from socialfeed.views.forms import FormSchema, email_format, required


class LoginSchema(FormSchema):
    """로그인 폼의 유효성을 검사하는 스키마"""
    email = fields.Str(
        required=True,
        validate=email_format(),
        error_messages=required("Email is required"),
    )
    password = fields.Str(required=True, error_messages=required("Password is required"))


class PasswordResetSchema(FormSchema):
    """비밀번호 재설정 요청 폼. 이메일 입력 여부만 확인합니다."""
    email = fields.Str(required=True, error_messages=required("Email is required"))

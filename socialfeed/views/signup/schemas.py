# socialfeed/views/signup/schemas.py
from marshmallow import fields, validate

from socialfeed.views.forms import FormSchema, email_format, required

GENDER_CHOICES = ["Male", "Female", "Non-binary", "Prefer not to say"]
LANGUAGE_CHOICES = ["English", "Hindi", "Spanish", "French", "German", "Chinese", "Japanese", "Arabic"]
MINIMUM_AGE = 13
MINIMUM_PASSWORD_LENGTH = 6


class SignupSchema(FormSchema):
    """회원가입 최종 제출 시 세 단계의 입력을 한꺼번에 검증하는 스키마"""
    # Step 1: 기본 정보
    fullName = fields.Str(required=True, error_messages=required("Full name is required"))
    username = fields.Str(required=True, error_messages=required("Username is required"))
    age = fields.Int(
        required=True,
        strict=False,
        validate=validate.Range(min=MINIMUM_AGE, error=f"Must be at least {MINIMUM_AGE} years old"),
        error_messages={**required("Age is required"), "invalid": "Age must be a number"},
    )
    gender = fields.Str(
        required=True,
        validate=validate.OneOf(GENDER_CHOICES, error="Please select your gender"),
        error_messages=required("Please select your gender"),
    )

    # Step 2: 계정 및 연락처
    email = fields.Str(required=True, validate=email_format(), error_messages=required("Email is required"))
    password = fields.Str(
        required=True,
        validate=validate.Length(
            min=MINIMUM_PASSWORD_LENGTH,
            error=f"Password must be at least {MINIMUM_PASSWORD_LENGTH} characters",
        ),
        error_messages=required("Password is required"),
    )
    contact = fields.Str(load_default="")
    countryCity = fields.Str(required=True, error_messages=required("Location is required"))

    # Step 3: 추가 정보
    languages = fields.List(
        fields.Str(validate=validate.OneOf(LANGUAGE_CHOICES)),
        required=True,
        error_messages=required("Select at least one language"),
    )
    bio = fields.Str(load_default="")

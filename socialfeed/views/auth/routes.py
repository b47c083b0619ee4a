# socialfeed/views/auth/routes.py

import logging
from flask import Blueprint, request, render_template, redirect, url_for, current_app
from marshmallow import ValidationError

from socialfeed.core.session import get_auth_state, start_session, end_session
from socialfeed.views.auth.schemas import LoginSchema, PasswordResetSchema
from socialfeed.views.auth.services import (
    INVALID_CREDENTIALS_MESSAGE,
    RESET_SENT_MESSAGE,
    RESET_FAILED_MESSAGE,
)

auth_bp = Blueprint('auth_bp', __name__)


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """이메일/비밀번호 로그인. 성공 시 '/'로 이동하고, 실패 시 일반적인 안내 문구만 보여줍니다."""
    if request.method == 'GET':
        return render_template('login.html', form={}, errors={})

    auth_service = current_app.services['auth']
    form = request.form.to_dict()
    try:
        data = LoginSchema().load(form)
    except ValidationError as err:
        return render_template('login.html', form=form, errors=err.messages), 400

    user = auth_service.login(data['email'], data['password'], get_auth_state())
    if not user:
        return render_template('login.html', form=form, errors={}, alert=INVALID_CREDENTIALS_MESSAGE), 401

    return start_session(redirect(url_for('home_bp.index')), user)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """로그아웃. 세션 쿠키를 지우고 로그인 페이지로 이동합니다."""
    auth_service = current_app.services['auth']
    try:
        auth_service.sign_out(get_auth_state())
    except Exception as e:
        logging.error(f"로그아웃 처리 중 오류 발생: {e}", exc_info=True)
    return end_session(redirect(url_for('auth_bp.login')))


@auth_bp.route('/forgot-password', methods=['GET', 'POST'])
def forgot_password():
    """비밀번호 재설정 메일 요청. 결과는 모달이 아닌 페이지 내 메시지로 표시합니다."""
    if request.method == 'GET':
        return render_template('forgot_password.html', email="", message="", error="")

    auth_service = current_app.services['auth']
    email = request.form.get('email', "")
    try:
        data = PasswordResetSchema().load({'email': email})
    except ValidationError as err:
        return render_template('forgot_password.html', email=email, message="", error=err.messages['email'][0]), 400

    if auth_service.request_password_reset(data['email']):
        return render_template('forgot_password.html', email=data['email'], message=RESET_SENT_MESSAGE, error="")
    return render_template('forgot_password.html', email=data['email'], message="", error=RESET_FAILED_MESSAGE)

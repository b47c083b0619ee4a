# socialfeed/views/signup/routes.py

import logging
from flask import Blueprint, request, render_template, session, current_app
from marshmallow import ValidationError

from socialfeed.views.signup.schemas import SignupSchema, GENDER_CHOICES, LANGUAGE_CHOICES
from socialfeed.views.signup.services import SignupError
from socialfeed.views.signup.wizard import PictureUpload, SignupWizard, TOTAL_STEPS

signup_bp = Blueprint('signup_bp', __name__)

WIZARD_SESSION_KEY = 'signup_wizard_id'


def _current_wizard():
    store = current_app.services['signup_wizards']
    wizard_id, wizard = store.get_or_create(session.get(WIZARD_SESSION_KEY))
    session[WIZARD_SESSION_KEY] = wizard_id
    return wizard_id, wizard


def _picture_from_request():
    """업로드된 프로필 사진을 읽습니다. 이미지가 아니거나 선택되지 않았으면 None."""
    file = request.files.get('displayPicture')
    if not file or not file.filename:
        return None
    if not (file.mimetype or '').startswith('image/'):
        logging.warning(f"이미지가 아닌 프로필 사진 업로드 무시: {file.filename} ({file.mimetype})")
        return None
    return PictureUpload(filename=file.filename, content_type=file.mimetype, data=file.read())


def _render(wizard, status=200, **context):
    context.setdefault('errors', {})
    context.setdefault('other_step_errors', [])
    return render_template(
        'signup.html',
        step=wizard.step,
        total_steps=TOTAL_STEPS,
        form=wizard.form,
        picture=wizard.picture,
        gender_choices=GENDER_CHOICES,
        language_choices=LANGUAGE_CHOICES,
        **context
    ), status


@signup_bp.route('/signup', methods=['GET'])
def signup_form():
    """회원가입 위저드의 현재 단계를 보여줍니다. 진행 중인 위저드가 없으면 저장하지 않고 1단계를 보여줍니다."""
    store = current_app.services['signup_wizards']
    wizard = store.get(session.get(WIZARD_SESSION_KEY)) or SignupWizard()
    return _render(wizard)


@signup_bp.route('/signup', methods=['POST'])
def signup_step():
    """
    위저드 단계 이동 및 최종 제출.
    - action=next / back: 현재 단계 입력을 저장하고 이동 (검증 없음)
    - removePicture (1단계): 선택한 프로필 사진 제거
    - action=submit (3단계): 전체 입력을 검증한 뒤 계정 생성
    """
    wizard_id, wizard = _current_wizard()
    values = request.form.to_dict()
    values['languages'] = request.form.getlist('languages')
    wizard.merge(values)
    if wizard.step == 1:
        if request.form.get('removePicture'):
            wizard.clear_picture()
        picture = _picture_from_request()
        if picture is not None:
            current_app.services['signup_wizards'].attach_picture(wizard_id, picture)

    action = request.form.get('action', 'next')
    if action == 'back':
        wizard.back()
        return _render(wizard)
    if action != 'submit' or not wizard.is_last_step:
        wizard.next()
        return _render(wizard)

    try:
        data = SignupSchema().load(wizard.form)
    except ValidationError as err:
        return _render(wizard, 400, errors=err.messages, other_step_errors=wizard.fields_with_errors(err.messages))

    signup_service = current_app.services['signup']
    try:
        signup_service.register(data, wizard.picture)
    except SignupError as e:
        return _render(wizard, 400, error_message=e.message)

    current_app.services['signup_wizards'].discard(wizard_id)
    session.pop(WIZARD_SESSION_KEY, None)
    return _render(SignupWizard(step=TOTAL_STEPS), success=True)

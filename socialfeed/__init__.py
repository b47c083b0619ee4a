# socialfeed/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from typing import Optional
from flask import Flask, render_template
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials

# - 설정
from socialfeed.core.config import config_by_name

# - 블루프린트
from socialfeed.views.auth.routes import auth_bp
from socialfeed.views.signup.routes import signup_bp
from socialfeed.views.home.routes import home_bp

# - 서비스 모듈
from socialfeed.services.identity_service import IdentityService
from socialfeed.services.firestore_service import FirestoreService
from socialfeed.services.storage_service import StorageService
from socialfeed.views.auth.services import AuthService
from socialfeed.views.signup.services import SignupService
from socialfeed.views.signup.wizard import WizardStore
from socialfeed.views.home.services import FeedService


def create_app(config_name: Optional[str] = None, services: Optional[dict] = None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development' / 'production' / 'testing' (기본값: FLASK_ENV)
    :param services: 테스트 등에서 외부 서비스(identity, firestore, storage)를 직접 주입할 때 사용.
                     주입된 경우 firebase_admin 초기화를 건너뜁니다.
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    JWTManager(app)

    injected = dict(services or {})
    if not injected and not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
        cred = credentials.Certificate(cred_path)
        firebase_admin.initialize_app(cred, {
            'storageBucket': app.config['FIREBASE_STORAGE_BUCKET']
        })

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    # 5-1. 외부 시스템(Auth, Firestore, Storage)과 통신하는 공용 서비스
    for name, factory in (('identity', IdentityService), ('firestore', FirestoreService), ('storage', StorageService)):
        try:
            instance = injected.get(name) or factory()
            instance.init_app(app)
            app.services[name] = instance
            logging.info(f"{name} service initialized successfully")
        except Exception as e:
            logging.error(f"Failed to initialize {name} service: {e}")
            raise

    # 5-2. 공용 서비스를 주입받는 화면 단위 서비스
    app.services['auth'] = AuthService(identity_service=app.services['identity'])
    app.services['signup'] = SignupService(
        identity_service=app.services['identity'],
        storage_service=app.services['storage'],
        firestore_service=app.services['firestore']
    )
    app.services['feed'] = FeedService(firestore_service=app.services['firestore'])
    app.services['feed'].init_app(app)
    app.services['signup_wizards'] = WizardStore()
    app.services['signup_wizards'].init_app(app)

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(home_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(signup_bp)

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(404)
    def handle_not_found(err):
        return render_template('error.html', message="The page you are looking for does not exist."), 404

    @app.errorhandler(413)
    def handle_too_large(err):
        return render_template('error.html', message="The uploaded file is too large."), 413

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        if isinstance(err, HTTPException):
            return err
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return render_template('error.html', message="Something went wrong. Please try again."), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app

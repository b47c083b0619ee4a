# socialfeed/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.
from datetime import timedelta


class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # Flask 세션(회원가입 위저드 식별자 저장)을 서명하는 데 사용되는 키입니다.
    SECRET_KEY = os.getenv('SECRET_KEY')
    # 로그인 세션 쿠키(JWT)를 서명하는 키입니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    # 브라우저 페이지 기반 앱이므로 JWT는 헤더가 아닌 쿠키로 주고받습니다.
    JWT_TOKEN_LOCATION = ['cookies']
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv('SESSION_HOURS', 24)))
    JWT_COOKIE_SECURE = os.getenv('JWT_COOKIE_SECURE', 'false').lower() == 'true'
    JWT_COOKIE_CSRF_PROTECT = os.getenv('JWT_COOKIE_CSRF_PROTECT', 'false').lower() == 'true'
    JWT_SESSION_COOKIE = False
    # CSRF 보호가 켜진 경우 폼의 'csrf_token' 필드로 토큰을 전달합니다.
    JWT_CSRF_CHECK_FORM = True

    # Firebase 웹 API 키: Identity Toolkit REST(비밀번호 로그인, 재설정 메일)에 필요합니다.
    FIREBASE_API_KEY = os.getenv('FIREBASE_API_KEY')
    FIREBASE_STORAGE_BUCKET = os.getenv('FIREBASE_STORAGE_BUCKET')
    IDENTITY_HTTP_TIMEOUT = float(os.getenv('IDENTITY_HTTP_TIMEOUT', 10))

    # 홈 피드에 노출할 최신 게시글 수
    FEED_PAGE_SIZE = 10
    # 동시에 보관할 수 있는 회원가입 위저드 상태 수 (초과 시 가장 오래된 것부터 제거)
    SIGNUP_WIZARD_CAPACITY = int(os.getenv('SIGNUP_WIZARD_CAPACITY', 1000))
    # 위저드에 보관 중인 프로필 사진의 총량 한도 (초과 시 가장 오래된 위저드부터 제거, 기본 256MB)
    SIGNUP_PICTURE_BUDGET = int(os.getenv('SIGNUP_PICTURE_BUDGET', 256 * 1024 * 1024))
    # 프로필 사진 업로드 최대 크기 (5MB)
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024


class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')


class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다. 쿠키는 HTTPS에서만 전송됩니다."""
    DEBUG = False
    JWT_COOKIE_SECURE = True
    JWT_COOKIE_CSRF_PROTECT = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')


class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key'
    FIREBASE_API_KEY = 'test-api-key'
    FIREBASE_STORAGE_BUCKET = 'test-bucket.appspot.com'
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')
    SIGNUP_WIZARD_CAPACITY = 10
    SIGNUP_PICTURE_BUDGET = 64


# FLASK_ENV 값에 따라 create_app에서 적절한 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    production=ProductionConfig,
    testing=TestingConfig
)

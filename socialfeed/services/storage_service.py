# socialfeed/services/storage_service.py
import uuid
import logging
from flask import Flask
from firebase_admin import storage

PROFILE_PICTURE_FOLDER = "profilePictures"


class StorageService:
    """
    Firebase Storage 관련 로직을 담당하는 범용 서비스 클래스입니다.
    파일 업로드, 공개 URL 발급, 삭제 기능을 제공합니다.
    """

    def __init__(self, bucket=None):
        """
        테스트에서는 버킷 객체를 직접 주입할 수 있습니다.
        실제 버킷 객체는 init_app 메서드를 통해 설정됩니다.
        """
        self.bucket = bucket

    def init_app(self, app: Flask):
        """
        Flask 앱 초기화 과정에서 호출되어 Storage 버킷을 설정합니다.

        :param app: Flask 애플리케이션 객체
        """
        if self.bucket is not None:
            return
        bucket_name = app.config.get('FIREBASE_STORAGE_BUCKET')
        if not bucket_name:
            raise ValueError("FIREBASE_STORAGE_BUCKET 설정이 .env 또는 설정 파일에 필요합니다.")

        self.bucket = storage.bucket(bucket_name)
        logging.info("StorageService: Firebase Storage 서비스가 성공적으로 초기화되었습니다.")

    @staticmethod
    def new_profile_picture_key() -> str:
        """프로필 사진이 저장될 무작위 경로를 생성합니다. (profilePictures/{uuid4})"""
        return f"{PROFILE_PICTURE_FOLDER}/{uuid.uuid4()}"

    def upload(self, key: str, data: bytes, content_type: str = None):
        """
        바이트 데이터를 지정된 경로에 업로드하고 blob 객체를 반환합니다.

        :param key: 버킷 내 저장 경로
        :param data: 업로드할 파일 내용
        :param content_type: 파일의 MIME 타입 (예: "image/jpeg")
        """
        self._ensure_initialized()
        blob = self.bucket.blob(key)
        blob.upload_from_string(data, content_type=content_type or 'application/octet-stream')
        logging.info(f"Storage 업로드 성공 (path: {key}, size: {len(data)} bytes)")
        return blob

    def get_download_url(self, blob) -> str:
        """
        업로드된 파일을 공개(public)로 설정하고 해당 URL을 반환합니다.
        """
        self._ensure_initialized()
        if not blob.exists():
            raise FileNotFoundError(f"파일을 찾을 수 없습니다: {blob.name}")

        try:
            blob.make_public()
            return blob.public_url
        except Exception as e:
            logging.error(f"파일 공개 전환 실패: {e}", exc_info=True)
            raise

    def delete(self, key: str) -> bool:
        """지정된 경로의 파일을 삭제합니다. 파일이 없으면 False를 반환합니다."""
        self._ensure_initialized()
        blob = self.bucket.blob(key)
        if not blob.exists():
            return False
        blob.delete()
        logging.info(f"Storage 파일 삭제 (path: {key})")
        return True

    def _ensure_initialized(self):
        if not self.bucket:
            raise RuntimeError("StorageService가 초기화되지 않았습니다. init_app을 먼저 호출해주세요.")

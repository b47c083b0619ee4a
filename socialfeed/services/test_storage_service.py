# socialfeed/services/test_storage_service.py
from types import SimpleNamespace

import pytest

from socialfeed.services.storage_service import StorageService


def test_upload_and_public_url(bucket):
    service = StorageService(bucket=bucket)
    key = service.new_profile_picture_key()

    blob = service.upload(key, b'png-bytes', 'image/png')
    url = service.get_download_url(blob)

    assert key.startswith('profilePictures/')
    assert bucket.objects[key] == (b'png-bytes', 'image/png')
    assert blob.public is True
    assert url == f'https://storage.googleapis.com/{bucket.name}/{key}'


def test_keys_are_unique():
    assert StorageService.new_profile_picture_key() != StorageService.new_profile_picture_key()


def test_delete(bucket):
    service = StorageService(bucket=bucket)
    service.upload('profilePictures/a', b'x')

    assert service.delete('profilePictures/a') is True
    assert service.delete('profilePictures/a') is False
    assert bucket.objects == {}


def test_download_url_for_missing_file(bucket):
    service = StorageService(bucket=bucket)
    with pytest.raises(FileNotFoundError):
        service.get_download_url(bucket.blob('profilePictures/missing'))


def test_uninitialized_service():
    with pytest.raises(RuntimeError):
        StorageService().delete('profilePictures/a')


def test_init_app_requires_bucket_name():
    with pytest.raises(ValueError):
        StorageService().init_app(SimpleNamespace(config={}))

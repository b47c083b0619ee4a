# socialfeed/conftest.py
"""
테스트 공용 픽스처

실제 Firebase 대신 메모리 기반 가짜 객체를 서비스에 주입합니다.
서비스 클래스(IdentityService, FirestoreService, StorageService)는 실제 코드를 그대로 사용하고,
그 아래의 SDK 클라이언트/HTTP 세션/버킷만 교체합니다.

사용법: python -m pytest -v
"""

import uuid
from types import SimpleNamespace
from datetime import datetime, timedelta, timezone

import pytest
from firebase_admin import auth as firebase_auth

from socialfeed import create_app
from socialfeed.services.identity_service import IdentityService
from socialfeed.services.firestore_service import FirestoreService
from socialfeed.services.storage_service import StorageService


# =====================================================================================
# Firebase Authentication (Admin SDK + Identity Toolkit REST)
# =====================================================================================
class FakeAuthBackend:
    """firebase_admin.auth 모듈을 흉내 내는 메모리 사용자 저장소."""

    def __init__(self):
        self.users = {}       # uid -> SimpleNamespace(uid, email, display_name, photo_url)
        self.passwords = {}   # email -> (uid, password)
        self.calls = []
        self.fail_on = set()  # 강제로 실패시킬 메서드 이름

    def add_user(self, email, password, display_name=None, photo_url=None):
        uid = uuid.uuid4().hex[:28]
        self.users[uid] = SimpleNamespace(uid=uid, email=email, display_name=display_name, photo_url=photo_url)
        self.passwords[email] = (uid, password)
        return self.users[uid]

    def create_user(self, email=None, password=None):
        self.calls.append(('create_user', email))
        if 'create_user' in self.fail_on:
            raise ValueError('Invalid password string. Password must be a string at least 6 characters long.')
        if email in self.passwords:
            raise firebase_auth.EmailAlreadyExistsError('EMAIL_EXISTS', None, None)
        return self.add_user(email, password)

    def update_user(self, uid, display_name=None, photo_url=None):
        self.calls.append(('update_user', uid, display_name, photo_url))
        if 'update_user' in self.fail_on:
            raise ValueError('update failed')
        user = self._require(uid)
        if display_name is not None:
            user.display_name = display_name
        if photo_url is not None:
            user.photo_url = photo_url
        return user

    def get_user(self, uid):
        self.calls.append(('get_user', uid))
        if 'get_user' in self.fail_on:
            raise ValueError('backend unavailable')
        return self._require(uid)

    def delete_user(self, uid):
        self.calls.append(('delete_user', uid))
        user = self._require(uid)
        del self.users[uid]
        self.passwords.pop(user.email, None)

    def _require(self, uid):
        if uid not in self.users:
            raise firebase_auth.UserNotFoundError(f'No user record found for the provided user ID: {uid}.')
        return self.users[uid]


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


class FakeIdentityToolkit:
    """requests.Session을 대신해 Identity Toolkit REST 엔드포인트를 흉내 냅니다."""

    def __init__(self, backend: FakeAuthBackend):
        self.backend = backend
        self.requests = []
        self.reset_emails = []

    def post(self, url, params=None, json=None, timeout=None):
        self.requests.append({'url': url, 'params': params, 'json': json, 'timeout': timeout})
        if url.endswith('accounts:signInWithPassword'):
            entry = self.backend.passwords.get(json['email'])
            if not entry or entry[1] != json['password']:
                return FakeResponse(400, {'error': {'code': 400, 'message': 'INVALID_LOGIN_CREDENTIALS'}})
            user = self.backend.users[entry[0]]
            return FakeResponse(200, {
                'localId': user.uid,
                'email': user.email,
                'displayName': user.display_name or '',
                'idToken': 'id-token',
                'registered': True,
            })
        if url.endswith('accounts:sendOobCode'):
            if json['email'] not in self.backend.passwords:
                return FakeResponse(400, {'error': {'code': 400, 'message': 'EMAIL_NOT_FOUND'}})
            self.reset_emails.append(json['email'])
            return FakeResponse(200, {'email': json['email']})
        return FakeResponse(404, {'error': {'code': 404, 'message': 'NOT_FOUND'}})


# =====================================================================================
# Cloud Firestore
# =====================================================================================
class FakeDocumentSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return dict(self._data)


class FakeDocumentRef:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    def set(self, data):
        if self.collection.client.fail_writes:
            raise RuntimeError('Firestore unavailable')
        self.collection.docs[self.id] = dict(data)


class FakeQuery:
    def __init__(self, collection, order_field=None, direction=None, limit_count=None):
        self.collection = collection
        self.order_field = order_field
        self.direction = direction
        self.limit_count = limit_count

    def order_by(self, field, direction='ASCENDING'):
        return FakeQuery(self.collection, field, direction, self.limit_count)

    def limit(self, count):
        return FakeQuery(self.collection, self.order_field, self.direction, count)

    def stream(self):
        client = self.collection.client
        client.queries.append({
            'collection': self.collection.name,
            'order_by': self.order_field,
            'direction': self.direction,
            'limit': self.limit_count,
        })
        if client.fail_reads:
            raise RuntimeError('Firestore unavailable')
        items = list(self.collection.docs.items())
        if self.order_field:
            items.sort(key=lambda item: item[1].get(self.order_field), reverse=self.direction == 'DESCENDING')
        if self.limit_count is not None:
            items = items[:self.limit_count]
        return iter(FakeDocumentSnapshot(doc_id, data) for doc_id, data in items)


class FakeCollection(FakeQuery):
    def __init__(self, client, name):
        self.client = client
        self.name = name
        self.docs = {}
        super().__init__(self)

    def document(self, doc_id=None):
        return FakeDocumentRef(self, doc_id or uuid.uuid4().hex)


class FakeFirestoreClient:
    def __init__(self):
        self.collections = {}
        self.queries = []
        self.fail_reads = False
        self.fail_writes = False

    def collection(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(self, name)
        return self.collections[name]


# =====================================================================================
# Cloud Storage
# =====================================================================================
class FakeBlob:
    def __init__(self, bucket, name):
        self.bucket = bucket
        self.name = name
        self.public = False

    def upload_from_string(self, data, content_type=None):
        if self.bucket.fail_uploads:
            raise RuntimeError('Storage unavailable')
        self.bucket.objects[self.name] = (data, content_type)

    def exists(self):
        return self.name in self.bucket.objects

    def make_public(self):
        self.public = True

    @property
    def public_url(self):
        return f"https://storage.googleapis.com/{self.bucket.name}/{self.name}"

    def delete(self):
        del self.bucket.objects[self.name]


class FakeBucket:
    def __init__(self, name='test-bucket.appspot.com'):
        self.name = name
        self.objects = {}
        self.fail_uploads = False

    def blob(self, name):
        return FakeBlob(self, name)


# =====================================================================================
# 픽스처
# =====================================================================================
@pytest.fixture
def auth_backend():
    return FakeAuthBackend()


@pytest.fixture
def identity_toolkit(auth_backend):
    return FakeIdentityToolkit(auth_backend)


@pytest.fixture
def firestore_client():
    return FakeFirestoreClient()


@pytest.fixture
def bucket():
    return FakeBucket()


@pytest.fixture
def app(auth_backend, identity_toolkit, firestore_client, bucket):
    app = create_app('testing', services={
        'identity': IdentityService(auth_client=auth_backend, http=identity_toolkit),
        'firestore': FirestoreService(client=firestore_client),
        'storage': StorageService(bucket=bucket),
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered_user(auth_backend):
    return auth_backend.add_user('good@x.com', 'secret1', display_name='Good Person')


@pytest.fixture
def logged_in_client(client, registered_user):
    response = client.post('/login', data={'email': 'good@x.com', 'password': 'secret1'})
    assert response.status_code == 302
    return client


@pytest.fixture
def add_post(firestore_client):
    """'posts' 컬렉션에 테스트용 게시글을 추가하는 함수를 반환합니다."""
    def _add(doc_id, minutes_ago=0, **fields):
        data = {
            'authorId': 'author-1',
            'authorName': 'Author One',
            'authorPhotoURL': '',
            'content': f'post {doc_id}',
            'createdAt': datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc) - timedelta(minutes=minutes_ago),
            'likes': 0,
            'comments': [],
        }
        data.update(fields)
        firestore_client.collection('posts').docs[doc_id] = data
        return data
    return _add

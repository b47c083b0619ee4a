# socialfeed/views/home/test_routes.py
"""
홈 피드 페이지 테스트

사용법: python -m pytest socialfeed/views/home/test_routes.py -v
"""

from socialfeed.views.home.schemas import PLACEHOLDER_AVATAR


def test_root_redirects_to_home(client):
    response = client.get('/')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/home')


def test_home_requires_login(client, firestore_client):
    response = client.get('/home')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/login')
    assert firestore_client.queries == []


def test_home_shows_latest_ten_posts_newest_first(logged_in_client, add_post, firestore_client):
    for i in range(12):
        add_post(f'p{i:02d}', minutes_ago=i)

    response = logged_in_client.get('/home')
    body = response.get_data(as_text=True)

    assert response.status_code == 200
    assert 'post p00' in body
    assert 'post p09' in body
    assert 'post p10' not in body
    assert 'post p11' not in body
    assert body.index('post p00') < body.index('post p01') < body.index('post p09')
    assert firestore_client.queries == [
        {'collection': 'posts', 'order_by': 'createdAt', 'direction': 'DESCENDING', 'limit': 10}
    ]


def test_home_shows_user_header(logged_in_client):
    body = logged_in_client.get('/home').get_data(as_text=True)

    assert 'Good' in body
    assert 'Good Person' in body
    assert '@good' in body


def test_home_empty_feed(logged_in_client):
    body = logged_in_client.get('/home').get_data(as_text=True)

    assert 'No Posts Yet' in body
    assert 'Connect with friends or create your first post!' in body


def test_feed_read_failure_shows_empty_state(logged_in_client, add_post, firestore_client):
    add_post('p00')
    firestore_client.fail_reads = True

    response = logged_in_client.get('/home')

    assert response.status_code == 200
    assert 'No Posts Yet' in response.get_data(as_text=True)


def test_session_lookup_failure_redirects_to_login(logged_in_client, auth_backend):
    auth_backend.fail_on.add('get_user')

    response = logged_in_client.get('/home')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/login')


def test_deleted_user_redirects_to_login(logged_in_client, auth_backend, registered_user):
    del auth_backend.users[registered_user.uid]

    response = logged_in_client.get('/home')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/login')


def test_post_card_counts_and_placeholder(logged_in_client, add_post):
    add_post('p00', likes=3, comments=[{'text': 'nice'}, {'text': 'wow'}], imageURL='https://img/p.png')

    body = logged_in_client.get('/home').get_data(as_text=True)

    assert '3 likes' in body
    assert '2 comments' in body
    assert 'https://img/p.png' in body
    assert PLACEHOLDER_AVATAR in body
    assert '2024-01-15 12:00' in body


def test_post_with_missing_author_and_content(logged_in_client, add_post):
    """작성자 이름/본문이 없는 문서도 'None' 없이 빈 값으로 표시"""
    add_post('p00', authorName=None, content=None)

    body = logged_in_client.get('/home').get_data(as_text=True)

    assert 'data-post-id="p00"' in body
    assert 'None' not in body
    assert '<h3 class="font-semibold"></h3>' in body

# socialfeed/core/test_session.py
from socialfeed.core.session import AuthState, get_auth_state
from socialfeed.models.user import UserCredential


def _user(uid='u1'):
    return UserCredential(uid=uid, email=f'{uid}@example.com', display_name=None, photo_url=None)


def test_subscribe_fires_immediately_with_current_user():
    user = _user()
    seen = []
    AuthState(user).subscribe(seen.append)
    assert seen == [user]


def test_set_user_notifies_subscribers():
    state = AuthState()
    first, second = [], []
    state.subscribe(first.append)
    state.subscribe(second.append)

    user = _user()
    state.set_user(user)
    state.set_user(None)

    assert first == [None, user, None]
    assert second == [None, user, None]
    assert state.user is None


def test_unsubscribe_stops_notifications():
    state = AuthState()
    seen = []
    unsubscribe = state.subscribe(seen.append)
    unsubscribe()
    unsubscribe()

    state.set_user(_user())
    assert seen == [None]
    assert state.listener_count == 0


def test_listener_may_unsubscribe_during_notification():
    state = AuthState()
    seen = []
    handle = {}

    def once(user):
        seen.append(user)
        if user is not None:
            handle['unsubscribe']()

    handle['unsubscribe'] = state.subscribe(once)
    state.set_user(_user())
    state.set_user(None)

    assert len(seen) == 2
    assert state.listener_count == 0


def test_auth_state_without_cookie_is_signed_out(app):
    with app.test_request_context('/home'):
        state = get_auth_state()
        assert state.user is None
        assert get_auth_state() is state

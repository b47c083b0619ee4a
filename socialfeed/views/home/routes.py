# socialfeed/views/home/routes.py

from flask import Blueprint, redirect, render_template, url_for, current_app

from socialfeed.core.session import get_auth_state
from socialfeed.views.home.guard import SessionGuard
from socialfeed.views.home.schemas import PostCardSchema

home_bp = Blueprint('home_bp', __name__)


@home_bp.route('/')
def index():
    """루트 경로는 항상 홈 피드로 보냅니다."""
    return redirect(url_for('home_bp.home'))


class FeedPage:
    """홈 피드 페이지의 로컬 뷰 상태 (사용자, 게시글, 이동할 경로)."""

    def __init__(self, feed_service):
        self.feed_service = feed_service
        self.posts = []
        self.redirect_to = None

    def load_posts(self, user):
        self.posts = self.feed_service.fetch_recent_posts_safely()

    def navigate(self, path: str):
        self.redirect_to = path


@home_bp.route('/home')
def home():
    """
    로그인 상태를 구독해 사용자가 있으면 최신 게시글 10개를 보여주고,
    없으면 로그인 페이지로 이동합니다.
    """
    page = FeedPage(current_app.services['feed'])
    with SessionGuard(get_auth_state(), on_user=page.load_posts, navigate=page.navigate) as guard:
        user = guard.user

    if page.redirect_to:
        return redirect(page.redirect_to)

    return render_template(
        'home.html',
        user=user,
        posts=PostCardSchema(many=True).dump(page.posts),
    )

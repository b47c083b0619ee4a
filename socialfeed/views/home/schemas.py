# socialfeed/views/home/schemas.py
from marshmallow import Schema, fields

from socialfeed.utils.datetime_utils import DateTimeUtils

PLACEHOLDER_AVATAR = "/static/placeholder-avatar.svg"


class PostCardSchema(Schema):
    """피드 카드 렌더링에 필요한 값만 뽑아내는 스키마."""
    post_id = fields.Str(dump_only=True)
    author_name = fields.Function(lambda post: post.author_name or "")
    author_photo_url = fields.Function(lambda post: post.author_photo_url or PLACEHOLDER_AVATAR)
    content = fields.Function(lambda post: post.content or "")
    image_url = fields.Str(allow_none=True)
    created_at = fields.Function(lambda post: DateTimeUtils.to_display(post.created_at))
    likes = fields.Int()
    comment_count = fields.Int()

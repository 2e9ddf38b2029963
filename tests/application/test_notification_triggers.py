from app.application.use_cases.notifications import (
    PREVIEW_LENGTH,
    build_preview,
    extract_mentions,
    list_notifications,
    notify_post_created,
    notify_post_liked,
    update_notification_settings,
)


def test_build_preview_trims_long_content():
    content = "x" * (PREVIEW_LENGTH + 10)

    assert build_preview("  short  ") == "short"
    assert build_preview(content) == "x" * PREVIEW_LENGTH + "..."


def test_extract_mentions_returns_distinct_handles_in_order():
    content = "Thanks @bob and @carol-dev, also @bob again. Not @x or email@"

    assert extract_mentions(content) == ["bob", "carol-dev"]


def test_post_created_notifies_each_recipient_once(db_session, bus, make_user):
    owner = make_user("owner")
    parent = make_user("parent")
    author = make_user("author")
    mentioned = make_user("mentioned")

    created = notify_post_created(
        db_session,
        bus,
        thread_id=9,
        thread_owner_id=owner.id,
        post_author_id=author.id,
        parent_post_author_id=parent.id,
        content="@owner @parent @mentioned @author @ghost see this",
    )

    assert created == 3
    owner_items = list_notifications(db_session, owner.id).items
    parent_items = list_notifications(db_session, parent.id).items
    mentioned_items = list_notifications(db_session, mentioned.id).items
    assert [(item.type, item.title) for item in owner_items] == [
        ("thread_reply", "author replied to your thread")
    ]
    assert [item.type for item in parent_items] == ["post_reply"]
    assert [item.type for item in mentioned_items] == ["mention"]
    assert mentioned_items[0].related_type == "thread"
    assert mentioned_items[0].related_id == 9
    assert list_notifications(db_session, author.id).total == 0


def test_post_created_falls_back_to_mention_when_reply_type_is_disabled(
    db_session, bus, make_user
):
    owner = make_user("owner")
    author = make_user("author")
    update_notification_settings(db_session, owner.id, {"thread_reply_enabled": False})

    created = notify_post_created(
        db_session,
        bus,
        thread_id=1,
        thread_owner_id=owner.id,
        post_author_id=author.id,
        content="ping @owner",
    )

    assert created == 1
    assert [item.type for item in list_notifications(db_session, owner.id).items] == ["mention"]


def test_author_replying_in_own_thread_creates_nothing(db_session, bus, make_user):
    owner = make_user("owner")

    created = notify_post_created(
        db_session,
        bus,
        thread_id=1,
        thread_owner_id=owner.id,
        post_author_id=owner.id,
        content="bump",
    )

    assert created == 0


def test_post_liked_uses_post_preview(db_session, bus, make_user):
    author = make_user("author")
    fan = make_user("fan")

    notification = notify_post_liked(
        db_session,
        bus,
        thread_id=3,
        post_author_id=author.id,
        post_content="  A thoughtful answer  ",
        actor_user_id=fan.id,
    )

    assert notification.title == "fan liked your post"
    assert notification.content == "A thoughtful answer"
    assert notification.actor_user_id == fan.id

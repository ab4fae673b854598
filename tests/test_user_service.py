import pytest

from sheetapi.core.exceptions import AccountNotFoundError
from sheetapi.models import UserRole
from sheetapi.services.user_service import UserService


@pytest.fixture
def user_service(db):
    return UserService(db)


def test_list_users_marks_follow_relations(user_service, make_user, follow):
    me = make_user("me")
    carol = make_user("carol")
    bob = make_user("bob")
    make_user("admin", role=UserRole.ADMIN)
    follow(me, bob)
    follow(carol, me)

    listed = user_service.list_users(me.id)
    classmates = user_service.list_users(me.id, exclude_admins=True)

    assert [u.username for u in listed] == ["admin", "bob", "carol"]
    assert [u.username for u in classmates] == ["bob", "carol"]
    by_name = {u.username: u for u in listed}
    assert (by_name["bob"].is_following, by_name["bob"].is_follower) == (True, False)
    assert (by_name["carol"].is_following, by_name["carol"].is_follower) == (False, True)


def test_public_profile(db, user_service, make_user, make_worksheet, follow):
    owner = make_user("bob")
    viewer = make_user("alice")
    stranger = make_user("dave")
    follow(viewer, owner)
    for views, title in ((5, "five"), (20, "twenty"), (1, "one"), (9, "nine")):
        worksheet = make_worksheet(owner, title=title)
        worksheet.views = views
    db.commit()

    profile = user_service.get_public_profile(owner.id, viewer.id)

    assert profile.is_following is True
    assert profile.follower_count == 1
    assert profile.following_count == 0
    assert [w.title for w in profile.top_worksheets] == ["twenty", "nine", "five"]
    assert user_service.get_public_profile(owner.id, stranger.id).is_following is False

    with pytest.raises(AccountNotFoundError):
        user_service.get_public_profile(31337, viewer.id)

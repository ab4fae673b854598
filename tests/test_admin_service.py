import pytest

from conftest import points_of
from sheetapi.core.exceptions import (
    AccountNotFoundError,
    DuplicateResourceError,
    NotFoundError,
)
from sheetapi.models import (
    Follow,
    PointTransaction,
    Quiz,
    Subject,
    TransactionType,
    User,
    Worksheet,
    WorksheetView,
)
from sheetapi.schemas.weekly_reward import WeeklyRewardStatus
from sheetapi.services.admin_service import AdminService


@pytest.fixture
def admin_service(db):
    return AdminService(db)


def test_create_account_inactive_until_password_set(admin_service):
    response = admin_service.create_account("newbie")

    assert response.user.username == "newbie"
    assert response.user.is_active is False
    assert response.user.points == 0

    with pytest.raises(DuplicateResourceError):
        admin_service.create_account("newbie")


def test_delete_account(db, admin_service, make_user):
    user = make_user("gone")

    admin_service.delete_account(user.id)

    assert db.query(User).filter(User.id == user.id).count() == 0
    with pytest.raises(AccountNotFoundError):
        admin_service.delete_account(user.id)


def test_delete_account_cascades_owned_rows(db, admin_service, make_user, make_worksheet, follow):
    """업로더 삭제 시 학습지, 조회 기록, 팔로우, 받은 보상 기록이 함께 사라진다"""
    uploader = make_user("uploader")
    viewer = make_user("viewer", points=1000)
    follow(viewer, uploader)
    follow(uploader, viewer)
    worksheet_id = make_worksheet(uploader).id
    uploader_id = uploader.id
    admin_service.point_service.apply_view_reward(worksheet_id, viewer.id)
    admin_service.point_service.transfer(viewer.id, uploader_id, 10)

    admin_service.delete_account(uploader_id)

    assert db.query(Worksheet).count() == 0
    assert db.query(WorksheetView).count() == 0
    assert db.query(Follow).count() == 0
    assert (
        db.query(PointTransaction)
        .filter(PointTransaction.type == TransactionType.VIEW_REWARD)
        .count()
        == 0
    )
    # 보낸 쪽의 수수료 기록은 남는다
    assert [t.type for t in db.query(PointTransaction).all()] == [TransactionType.FEE]

    with pytest.raises(NotFoundError):
        admin_service.point_service.apply_view_reward(worksheet_id, viewer.id)
    assert points_of(db, viewer.id) == (1000 - 10 - 1, 0)


def test_deleting_viewer_keeps_uploader_reward(db, admin_service, make_user, make_worksheet):
    uploader = make_user("uploader")
    viewer_id = make_user("viewer").id
    admin_service.point_service.apply_view_reward(make_worksheet(uploader).id, viewer_id)

    admin_service.delete_account(viewer_id)

    reward = db.query(PointTransaction).one()
    assert reward.type == TransactionType.VIEW_REWARD
    assert reward.from_user_id is None
    assert db.query(WorksheetView).count() == 0
    assert points_of(db, uploader.id) == (100, 100)


def test_adjust_points_delegates_to_ledger(db, admin_service, make_user):
    admin = make_user("admin")
    user = make_user("carol", points=10)

    assert admin_service.adjust_points(user.id, -50, admin_id=admin.id) == -40
    assert points_of(db, user.id) == (-40, 0)


def test_set_views_does_not_touch_points(db, admin_service, make_user, make_worksheet):
    owner = make_user("bob")
    worksheet = make_worksheet(owner)

    assert admin_service.set_worksheet_views(worksheet.id, 42) == 42
    assert points_of(db, owner.id) == (0, 0)

    with pytest.raises(NotFoundError):
        admin_service.set_worksheet_views(999, 1)


def test_delete_worksheet_removes_view_records(db, admin_service, make_user, make_worksheet):
    owner = make_user("bob")
    viewer = make_user("alice")
    worksheet = make_worksheet(owner)
    admin_service.point_service.apply_view_reward(worksheet.id, viewer.id)

    admin_service.delete_worksheet(worksheet.id)

    assert db.query(Worksheet).count() == 0
    assert db.query(WorksheetView).count() == 0
    # 이미 지급된 보상은 유지
    assert points_of(db, owner.id) == (100, 100)


def test_quiz_admin(db, admin_service, make_user, make_quiz):
    quiz = make_quiz(make_user("creator"))

    assert [q.id for q in admin_service.list_quizzes()] == [quiz.id]
    assert admin_service.list_quizzes()[0].question_count == 2

    admin_service.delete_quiz(quiz.id)
    assert db.query(Quiz).count() == 0
    with pytest.raises(NotFoundError):
        admin_service.delete_quiz(quiz.id)


def test_run_weekly_reward_without_scores(admin_service):
    assert admin_service.run_weekly_reward().status == WeeklyRewardStatus.NO_SCORES


def test_delete_subject_removes_worksheets_and_views(
    db, admin_service, make_user, make_worksheet, subject
):
    owner = make_user("bob")
    viewer = make_user("alice")
    subject_id = subject.id
    other = Subject(name="Science")
    db.add(other)
    db.commit()
    kept = Worksheet(title="Cells", subject_id=other.id, uploader_id=owner.id, views=0)
    db.add(kept)
    db.commit()
    kept_id = kept.id

    for title in ("A", "B"):
        worksheet = make_worksheet(owner, title=title)
        admin_service.point_service.apply_view_reward(worksheet.id, viewer.id)
    admin_service.point_service.apply_view_reward(kept_id, viewer.id)

    message = admin_service.delete_subject(subject_id)

    assert message == 'Subject "Math" and its worksheets deleted'
    assert db.query(Subject).filter(Subject.id == subject_id).count() == 0
    assert [w.id for w in db.query(Worksheet).all()] == [kept_id]
    assert [v.worksheet_id for v in db.query(WorksheetView).all()] == [kept_id]
    # 지급된 보상은 유지
    assert points_of(db, owner.id) == (300, 300)

    with pytest.raises(NotFoundError):
        admin_service.delete_subject(subject_id)

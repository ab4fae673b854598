import pytest

from conftest import points_of
from sheetapi.core.exceptions import (
    AuthorizationError,
    DuplicateResourceError,
    NotFoundError,
)
from sheetapi.schemas.worksheet import SubjectCreateRequest, WorksheetCreateRequest
from sheetapi.services.worksheet_service import WorksheetService


@pytest.fixture
def worksheet_service(db):
    return WorksheetService(db)


def test_create_subject_rejects_duplicates(worksheet_service, make_user):
    user = make_user("alice")
    worksheet_service.create_subject(SubjectCreateRequest(name="Science"), created_by=user.id)

    with pytest.raises(DuplicateResourceError):
        worksheet_service.create_subject(SubjectCreateRequest(name=" Science "))

    assert [s.name for s in worksheet_service.list_subjects()] == ["Science"]


def test_create_worksheet_requires_existing_subject(worksheet_service, make_user):
    user = make_user("alice")

    with pytest.raises(NotFoundError):
        worksheet_service.create_worksheet(
            user.id,
            WorksheetCreateRequest(title="T", subject_id=77, external_url="https://x"),
        )


def test_list_sorted_by_views(db, worksheet_service, make_user, make_worksheet):
    owner = make_user("bob")
    quiet = make_worksheet(owner, title="quiet")
    popular = make_worksheet(owner, title="popular")
    popular.views = 10
    db.commit()

    by_views = worksheet_service.list_worksheets(sort="views")
    recent = worksheet_service.list_worksheets()

    assert [w.title for w in by_views] == ["popular", "quiet"]
    assert recent[0].id == popular.id
    assert by_views[1].id == quiet.id
    assert by_views[0].uploader_username == "bob"


def test_view_worksheet_counts_first_view_only(db, worksheet_service, make_user, make_worksheet):
    owner = make_user("bob")
    viewer = make_user("alice")
    worksheet = make_worksheet(owner)

    first = worksheet_service.view_worksheet(worksheet.id, viewer.id)
    second = worksheet_service.view_worksheet(worksheet.id, viewer.id)

    assert first.view_counted is True
    assert first.worksheet.views == 1
    assert second.view_counted is False
    assert second.worksheet.views == 1
    assert points_of(db, owner.id) == (100, 100)


def test_view_missing_worksheet(worksheet_service, make_user):
    viewer = make_user("alice")

    with pytest.raises(NotFoundError):
        worksheet_service.view_worksheet(31337, viewer.id)


def test_download_url_requires_uploaded_file(worksheet_service, make_user, make_worksheet, subject):
    owner = make_user("bob")
    uploaded = make_worksheet(owner)
    linked = worksheet_service.create_worksheet(
        owner.id,
        WorksheetCreateRequest(
            title="Linked", subject_id=subject.id, external_url="https://drive.example.com/x"
        ),
    )

    assert worksheet_service.get_download_url(uploaded.id).url == "https://files.example.com/ws.pdf"
    with pytest.raises(NotFoundError) as exc_info:
        worksheet_service.get_download_url(linked.id)
    assert exc_info.value.error_code == "FILE_404"
    with pytest.raises(NotFoundError):
        worksheet_service.get_download_url(31337)


def test_only_uploader_changes_thumbnail(worksheet_service, make_user, make_worksheet):
    owner = make_user("bob")
    other = make_user("alice")
    worksheet = make_worksheet(owner)

    with pytest.raises(AuthorizationError):
        worksheet_service.update_thumbnail(worksheet.id, other.id, "https://img.example.com/x.png")

    updated = worksheet_service.update_thumbnail(
        worksheet.id, owner.id, "https://img.example.com/cover.png"
    )
    assert updated.thumbnail_url == "https://img.example.com/cover.png"
    assert worksheet_service.get_worksheet(worksheet.id).thumbnail_url == (
        "https://img.example.com/cover.png"
    )

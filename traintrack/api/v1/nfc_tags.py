"""NFC tags: scoped to a studio; studio owners manage the tags of their own studios."""

import logging

from fastapi import APIRouter, Depends, status

from traintrack.api.deps import AdminOrStudioOwner, AnyRole, DbSession, StudioOwnerOnly
from traintrack.api.responses import PageParams, data_response, message_response
from traintrack.models import NFCTag, Studio
from traintrack.schemas.common import DataResponse, MessageResponse
from traintrack.schemas.machine import NFCTagCreate, NFCTagRead, NFCTagUpdate
from traintrack.services import crud
from traintrack.services.permissions import check_permission

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DataResponse[list[NFCTagRead]])
def list_nfc_tags(_user: AnyRole, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    rows, pagination = crud.paginate(db.query(NFCTag).order_by(NFCTag.id), page.page, page.limit)
    logger.info("Retrieved %s NFC tags", len(rows))
    return data_response([NFCTagRead.model_validate(t) for t in rows], "NFC tags retrieved", pagination=pagination)


@router.get("/studios", response_model=DataResponse[list[NFCTagRead]])
def list_nfc_tags_of_own_studios(
    current_user: StudioOwnerOnly, db: DbSession, page: PageParams = Depends()
) -> DataResponse:
    """Tags of every studio the calling studio owner is scoped to."""
    query = db.query(NFCTag).filter(NFCTag.studio_id.in_(current_user.studio_ids)).order_by(NFCTag.id)
    rows, pagination = crud.paginate(query, page.page, page.limit)
    return data_response([NFCTagRead.model_validate(t) for t in rows], "NFC tags retrieved", pagination=pagination)


@router.get("/{tag_id}", response_model=DataResponse[NFCTagRead])
def get_nfc_tag(tag_id: int, _user: AnyRole, db: DbSession) -> DataResponse:
    tag = crud.get_or_404(db, NFCTag, tag_id, "NFC tag")
    return data_response(NFCTagRead.model_validate(tag), "NFC tag retrieved")


@router.post("", response_model=DataResponse[NFCTagRead], status_code=status.HTTP_201_CREATED)
def create_nfc_tag(body: NFCTagCreate, current_user: AdminOrStudioOwner, db: DbSession) -> DataResponse:
    crud.get_or_404(db, Studio, body.studio_id, "Studio")
    check_permission(current_user, studio_id=body.studio_id)
    tag = crud.save(db, NFCTag(nfc_id=body.nfc_id, studio_id=body.studio_id))
    logger.info("NFC tag created: %s", tag.nfc_id)
    return data_response(NFCTagRead.model_validate(tag), "NFC tag created", status.HTTP_201_CREATED)


@router.put("/{tag_id}", response_model=DataResponse[NFCTagRead])
def update_nfc_tag(tag_id: int, body: NFCTagUpdate, current_user: AdminOrStudioOwner, db: DbSession) -> DataResponse:
    tag = crud.get_or_404(db, NFCTag, tag_id, "NFC tag")
    check_permission(current_user, studio_id=tag.studio_id)
    tag = crud.save(db, crud.apply_changes(tag, body))
    logger.info("NFC tag updated: %s", tag.nfc_id)
    return data_response(NFCTagRead.model_validate(tag), "NFC tag updated")


@router.delete("/{tag_id}", response_model=MessageResponse)
def delete_nfc_tag(tag_id: int, current_user: AdminOrStudioOwner, db: DbSession) -> MessageResponse:
    tag = crud.get_or_404(db, NFCTag, tag_id, "NFC tag")
    check_permission(current_user, studio_id=tag.studio_id)
    crud.delete(db, tag)
    logger.info("NFC tag deleted: %s", tag_id)
    return message_response("NFC tag deleted")

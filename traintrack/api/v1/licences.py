"""Licences: read-only reference data seeded at startup."""

from fastapi import APIRouter, Depends

from traintrack.api.deps import AnyRole, DbSession
from traintrack.api.responses import PageParams, data_response
from traintrack.models import Licence
from traintrack.schemas.common import DataResponse
from traintrack.schemas.studio import LicenceRead
from traintrack.services import crud

router = APIRouter()


@router.get("", response_model=DataResponse[list[LicenceRead]])
def list_licences(_user: AnyRole, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    rows, pagination = crud.paginate(db.query(Licence).order_by(Licence.id), page.page, page.limit)
    return data_response([LicenceRead.model_validate(lic) for lic in rows], "Licences retrieved", pagination=pagination)


@router.get("/{licence_id}", response_model=DataResponse[LicenceRead])
def get_licence(licence_id: int, _user: AnyRole, db: DbSession) -> DataResponse:
    licence = crud.get_or_404(db, Licence, licence_id, "Licence")
    return data_response(LicenceRead.model_validate(licence), "Licence retrieved")

# match_routes.py
# Match results: the admin result entry form, saving results, and reading them back.

from fastapi import APIRouter, Depends
from sqlmodel import Session

from scrimhub_backend.core.auth import require_admin
from scrimhub_backend.core.database import get_session
from scrimhub_backend.core.logger import setup_logger
from scrimhub_backend.models.admin_model import Admin
from scrimhub_backend.models.match_model import MatchResultSubmission
from scrimhub_backend.services.match_results import save_match_results, get_match_results, get_result_sheet

router = APIRouter()
logger = setup_logger(__name__)


@router.get("/{match_id}/results")
def read_match_results(match_id: int, session: Session = Depends(get_session)):
    return get_match_results(session, match_id)


@router.get("/{match_id}/result-sheet")
def read_result_sheet(match_id: int, session: Session = Depends(get_session)):
    """Every team of the scrim with its roster, pre-filled with saved values (0 when missing)."""
    return get_result_sheet(session, match_id)


@router.post("/{match_id}/results")
def submit_match_results(
    match_id: int,
    data: MatchResultSubmission,
    session: Session = Depends(get_session),
    admin: Admin = Depends(require_admin),
):
    """
    ADMIN ONLY: save or correct the results of a match.
    Submitting again overwrites the previous numbers.
    """
    logger.info(f"Admin {admin.email} submitting results for match {match_id}")
    return save_match_results(session, match_id, data.teams, map_name=data.map_name)

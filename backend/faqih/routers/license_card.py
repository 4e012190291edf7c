from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from faqih.models.schemas import PatientLicenseData
from faqih.services.license_card import render_license_card

router = APIRouter(tags=["license"])


@router.post("/license-card", response_class=HTMLResponse)
async def license_card(body: PatientLicenseData):
    """Render a printable license card for a patient."""
    return HTMLResponse(content=render_license_card(body))

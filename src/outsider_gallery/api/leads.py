"""Lead capture endpoints: contact, artwork enquiry and newsletter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from outsider_gallery.domain.leads import (
    ContactForm,
    EnquiryForm,
    LeadValidationError,
    SubmissionReport,
    SubscribeForm,
)
from outsider_gallery.services.leads import (
    CONTACT_SUCCESS,
    ENQUIRY_SUCCESS,
    SUBSCRIBE_SUCCESS,
    report_message,
)

if TYPE_CHECKING:
    from outsider_gallery.containers import AppContainer

router = APIRouter(prefix="/api", tags=["leads"])


class _InvalidBody(Exception):
    pass


async def _json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as exc:
        raise _InvalidBody from exc
    return body if isinstance(body, dict) else {}


def _message(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


def _report_response(report: SubmissionReport, success: str) -> JSONResponse:
    if report.fatal:
        return _message(report.fatal, status.HTTP_502_BAD_GATEWAY)
    return JSONResponse(
        {"message": report_message(report, success), "partial": report.partial}
    )


@router.post("/contact")
async def submit_contact(request: Request) -> JSONResponse:
    """Record an about-page contact message."""
    container: AppContainer = request.app.state.container
    try:
        form = ContactForm.from_payload(await _json_object(request))
    except _InvalidBody:
        return _message("Invalid JSON body", status.HTTP_400_BAD_REQUEST)
    except LeadValidationError as exc:
        return _message(str(exc), status.HTTP_400_BAD_REQUEST)
    report = await container.lead_service.submit_contact(form)
    return _report_response(report, CONTACT_SUCCESS)


@router.post("/enquiry")
async def submit_enquiry(request: Request) -> JSONResponse:
    """Record an enquiry about an artwork."""
    container: AppContainer = request.app.state.container
    try:
        form = EnquiryForm.from_payload(await _json_object(request))
    except _InvalidBody:
        return _message("Invalid JSON body", status.HTTP_400_BAD_REQUEST)
    except LeadValidationError as exc:
        return _message(str(exc), status.HTTP_400_BAD_REQUEST)
    report = await container.lead_service.submit_enquiry(form)
    return _report_response(report, ENQUIRY_SUCCESS)


@router.post("/subscribe")
async def submit_subscribe(request: Request) -> JSONResponse:
    """Sign up to the newsletter."""
    container: AppContainer = request.app.state.container
    try:
        form = SubscribeForm.from_payload(await _json_object(request))
    except _InvalidBody:
        return _message("Invalid JSON body", status.HTTP_400_BAD_REQUEST)
    except LeadValidationError as exc:
        return _message(str(exc), status.HTTP_400_BAD_REQUEST)
    report = await container.lead_service.submit_subscribe(form)
    return _report_response(report, SUBSCRIBE_SUCCESS)

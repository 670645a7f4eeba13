"""Reports router — monthly report document and report e-mail."""

from datetime import date
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query

from apps.api.core.auth import CurrentUser, get_current_user
from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import ValidationError
from apps.api.core.mailer import Attachment, ResendMailer, get_mailer
from apps.api.core.repository import FinanceRepository, get_repository
from apps.api.domains.reports.schemas import (
    EmailReportRequest,
    EmailReportResponse,
    ReportResponse,
)
from apps.api.domains.reports.service import build_monthly_report, recipient_name
from packages.finance_core.reports import email_subject, render_email_html

router = APIRouter(prefix="/reports", tags=["reports"])
logger = structlog.get_logger()


@router.get("/monthly", response_model=ReportResponse)
async def get_monthly_report(
    month: Optional[date] = Query(default=None, description="Any day of the month"),
    repository: FinanceRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Document model for a month; file names for the PDF and spreadsheet."""
    document = build_monthly_report(repository, month, settings.LOCALE)
    return ReportResponse(
        document=document,
        pdf_filename=document.filename("pdf"),
        xlsx_filename=document.filename("xlsx"),
    )


@router.post("/monthly/email", response_model=EmailReportResponse)
async def email_monthly_report(
    body: EmailReportRequest,
    user: CurrentUser = Depends(get_current_user),
    repository: FinanceRepository = Depends(get_repository),
    mailer: ResendMailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
):
    """E-mail the month's report to the caller, optionally with a file attached."""
    if not user.email:
        raise ValidationError("Your account has no e-mail address")

    document = build_monthly_report(repository, body.month, settings.LOCALE)
    name = recipient_name(repository.get_profile(), user.email)
    subject = email_subject(document)
    html = render_email_html(document, name, settings.CURRENCY_SYMBOL)

    attachments = []
    if body.attachment:
        attachments.append(
            Attachment(filename=body.attachment.filename, content=body.attachment.content)
        )

    message_id = await mailer.send(user.email, subject, html, attachments)
    logger.info(
        "report_emailed",
        transactions=document.transaction_count,
        with_attachment=bool(attachments),
    )
    return EmailReportResponse(sent=True, to=user.email, subject=subject, message_id=message_id)

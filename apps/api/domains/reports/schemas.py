"""Pydantic schemas for the reports domain."""

from datetime import date
from typing import Optional

from pydantic import Base64Bytes, BaseModel, Field

from packages.finance_core.reports import ReportDocument


class ReportResponse(BaseModel):
    document: ReportDocument
    pdf_filename: str
    xlsx_filename: str


class ReportAttachment(BaseModel):
    """A rendered report file produced by the client, base64 encoded."""

    filename: str = Field(min_length=1)
    content: Base64Bytes


class EmailReportRequest(BaseModel):
    month: Optional[date] = None
    attachment: Optional[ReportAttachment] = None


class EmailReportResponse(BaseModel):
    sent: bool
    to: str
    subject: str
    message_id: str = ""

"""
Persisted failures, written by ErrorLogger once database logging is
configured at startup.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String, Text, Uuid

from cookbook_api.models.base import BaseModel


class ErrorLog(BaseModel):
    """One logged failure, with the request and user it happened under."""

    __tablename__ = "error_logs"

    timestamp = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True
    )

    # What failed
    error_type = Column(String(255), nullable=False, index=True)  # exception class name
    error_code = Column(String(50), nullable=True)  # HTTP status, when the error carries one
    severity = Column(String(20), default="error", nullable=False)
    message = Column(Text, nullable=False)
    context_data = Column(JSON, nullable=True)  # sanitized

    # Where it failed
    module = Column(String(255), nullable=True)
    function = Column(String(255), nullable=True)
    line_number = Column(String(20), nullable=True)
    stack_trace = Column(Text, nullable=True)

    # Who and which request; empty for anonymous calls and background failures
    user_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    user_email = Column(String(255), nullable=True)
    request_method = Column(String(10), nullable=True)
    request_path = Column(String(500), nullable=True)
    request_query = Column(Text, nullable=True)
    client_ip = Column(String(50), nullable=True)
    user_agent = Column(String(500), nullable=True)

    def __repr__(self):
        return f"<ErrorLog(id={self.id}, type={self.error_type})>"

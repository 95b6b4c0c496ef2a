"""Pydantic models for report API responses."""

from collections.abc import Sequence

from pydantic import BaseModel

from qa_cli.models.record import StatusBucket, TestRecord


class DataResponse(BaseModel):
    """Body of GET /data."""

    data: Sequence[TestRecord]


class SubmitResponse(BaseModel):
    """Body of POST /test-format."""

    id: str | int | None = None
    status: str | None = None


class RetrieveResponse(BaseModel):
    """Body of POST /retrieve; file is only present once the job is done."""

    file: dict[str, StatusBucket] | None = None
    status: str | None = None

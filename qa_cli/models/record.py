"""Models for test records and the formatted report returned by the API."""

from collections.abc import Mapping, Sequence
from typing import Any, Literal

from pydantic import ConfigDict, Field

from qa_cli.models.base import Model

type TestStatus = Literal["Pass", "Fail", "Pending", "Skipped"]

type StatusKey = Literal["pass", "fail", "pending", "skipped"]


class TestRecord(Model):
    """Outcome of a single test as served by the data endpoint.

    Fields the client does not know about (dates, descriptions) are kept so
    that a submitted batch carries exactly what the server sent.
    """

    __test__ = False

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., description="Identifier, unique within a batch")
    value: str = Field(default="", description="Display label")
    color: str = Field(..., description="Group tag, matched case-insensitively")
    status: TestStatus = Field(..., description="Test outcome")
    error_details: str | None = Field(
        default=None, description="Failure text, normally only set for Fail"
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the field names and fields the server provided."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class StatusBucket(Model):
    """Records of one color group partitioned by status."""

    pass_: Sequence[TestRecord] = Field(default_factory=list, alias="pass")
    fail: Sequence[TestRecord] = Field(default_factory=list)
    pending: Sequence[TestRecord] = Field(default_factory=list)
    skipped: Sequence[TestRecord] = Field(default_factory=list)

    def by_status(self) -> Sequence[tuple[StatusKey, Sequence[TestRecord]]]:
        """Return the four sequences in fixed pass, fail, pending, skipped order."""
        return [
            ("pass", self.pass_),
            ("fail", self.fail),
            ("pending", self.pending),
            ("skipped", self.skipped),
        ]


type FormattedResult = Mapping[str, StatusBucket]

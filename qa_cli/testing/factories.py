"""Test factories for generating test data."""

from polyfactory.factories.pydantic_factory import ModelFactory

from qa_cli.models.record import TestRecord


class RecordFactory(ModelFactory[TestRecord]):
    """Factory for TestRecord."""

    __model__ = TestRecord

    status = "Pass"
    error_details = None

"""CallableResult model for the sensory_profile callable protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, model_validator

if TYPE_CHECKING:
    from sensory_profile.pipeline import ProcessingResult


class CallableResult(BaseModel):
    """Result returned by the sensory_profile execute() interface.

    Exactly one of `items` or `items_ref` must be set.

    Attributes:
        schema_version: Version of the CallableResult schema.
        items: Assessment records, JSON-ready (inline payload).
        items_ref: Reference to an external store holding the records.
        stats: Counts of submissions in, records out and rejections.
        errors: One entry per rejected submission: its index, user id and messages.
    """

    schema_version: str = "1.0"
    items: list[dict] | None = None
    items_ref: str | None = None
    stats: dict = {}
    errors: list[dict] = []

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def validate_items_xor_items_ref(self) -> CallableResult:
        """Ensure exactly one of items or items_ref is set."""
        has_items = self.items is not None
        has_items_ref = self.items_ref is not None

        if has_items and has_items_ref:
            raise ValueError("Cannot set both 'items' and 'items_ref'; use exactly one")
        if not has_items and not has_items_ref:
            raise ValueError("Must set exactly one of 'items' or 'items_ref'")

        return self

    @classmethod
    def from_processing_results(cls, results: list[ProcessingResult]) -> CallableResult:
        """Collect records and rejections from pipeline results."""
        records: list[dict] = []
        errors: list[dict] = []
        for index, result in enumerate(results):
            if result.success and result.record is not None:
                records.append(result.record.model_dump(mode="json"))
            else:
                errors.append(
                    {"index": index, "user_id": result.user_id, "messages": result.errors}
                )

        return cls(
            items=records,
            stats={"input": len(results), "output": len(records), "errors": len(errors)},
            errors=errors,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary, leaving out unset and empty parts."""
        result: dict = {"schema_version": self.schema_version}
        if self.items is not None:
            result["items"] = self.items
        if self.items_ref is not None:
            result["items_ref"] = self.items_ref
        if self.stats:
            result["stats"] = self.stats
        if self.errors:
            result["errors"] = self.errors
        return result

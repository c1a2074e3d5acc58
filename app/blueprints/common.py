# app/blueprints/common.py
from __future__ import annotations

from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable

from flask import current_app, request
from marshmallow import INCLUDE, Schema, fields, validate

from app.errors import ApiError, NotFound, StoreUnavailable
from app.extensions import ma
from app.store.base import DocumentRepository


class DocumentSchema(ma.Schema):
    """Validates the required fields and passes any other field through untouched."""

    class Meta:
        unknown = INCLUDE

    def load(self, data, *args, **kwargs):
        loaded = super().load(data, *args, **kwargs)
        # the id is the document key, never a writable field
        loaded.pop("id", None)
        return loaded


def required_str(**kwargs) -> fields.Str:
    return fields.Str(required=True, validate=validate.Length(min=1), **kwargs)


def get_repository() -> DocumentRepository:
    return current_app.extensions["repository"]


def get_slot_manager(name: str):
    return current_app.extensions["slot_managers"][name]


def now() -> datetime:
    return datetime.now(timezone.utc)


def load_body(schema: Schema, partial: bool = False) -> dict:
    """Validate the JSON body; marshmallow's ValidationError becomes a 400 upstream."""
    data = request.get_json(silent=True) or {}
    return schema.load(data, partial=partial)


def load_update(schema: Schema) -> dict:
    data = load_body(schema, partial=True)
    if not data:
        raise ApiError("No fields to update", 400)
    return data


def get_or_404(collection: str, doc_id: str, label: str) -> dict:
    doc = get_repository().get(collection, doc_id)
    if doc is None:
        raise NotFound(f"{label} not found")
    return doc


def update_or_404(collection: str, doc_id: str, fields: dict, label: str) -> dict:
    fields = {**fields, "updated_at": now()}
    doc = get_repository().update(collection, doc_id, fields)
    if doc is None:
        raise NotFound(f"{label} not found")
    return doc


def delete_or_404(collection: str, doc_id: str, label: str) -> None:
    repo = get_repository()
    if repo.get(collection, doc_id) is None:
        raise NotFound(f"{label} not found")
    repo.delete(collection, doc_id)


def create_sequential(collection: str, prefix: str, data: dict) -> dict:
    repo = get_repository()
    doc_id = repo.next_sequential_id(collection, prefix)
    return repo.set(collection, doc_id, {**data, "created_at": now()})


def requires_document_store(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Reject the request with 400 when only the JSON fallback is active."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not get_repository().is_document_store:
            raise StoreUnavailable()
        return fn(*args, **kwargs)
    return wrapper

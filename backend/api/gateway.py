"""Persistence gateway: single-record reads and writes over one Django model.

Records cross this boundary as plain dicts keyed by model field names, so the
CRUD engine never touches querysets or model instances. Predicates are Django
lookup mappings, e.g. ``{"musician__iexact": "amy"}``.

Each write is atomic for its one row; nothing here spans several records.
Unique indexes back every uniqueness key, so an `IntegrityError` raised by a
concurrent duplicate surfaces as `Conflict`.
"""

import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from api.errors import Conflict, NotFound

logger = logging.getLogger(__name__)


class ModelGateway:
    def __init__(self, model, label=None):
        self.model = model
        self.label = label or model.__name__
        self.manager = model._default_manager

    def _get(self, pk):
        try:
            return self.manager.get(pk=pk)
        except (self.model.DoesNotExist, ValueError, TypeError, ValidationError):
            raise NotFound(f"{self.label} not found")

    def _query(self, predicate=None, exclude=None):
        qs = self.manager.all()
        if predicate:
            qs = qs.filter(**predicate)
        if exclude:
            qs = qs.exclude(**exclude)
        return qs

    def find_one(self, predicate) -> dict:
        """First record matching `predicate` in default order, or NotFound."""
        if set(predicate) == {"pk"} or set(predicate) == {"id"}:
            return self._get(next(iter(predicate.values()))).to_dict()
        obj = self._query(predicate).first()
        if obj is None:
            raise NotFound(f"{self.label} not found")
        return obj.to_dict()

    def exists(self, predicate, exclude_pk=None) -> bool:
        qs = self._query(predicate)
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        return qs.exists()

    def find_many(self, predicate=None, order_by=None, exclude=None, limit=None) -> list:
        qs = self._query(predicate, exclude)
        if order_by:
            qs = qs.order_by(*order_by)
        if limit is not None:
            qs = qs[:limit]
        return [obj.to_dict() for obj in qs]

    def count(self, predicate=None) -> int:
        return self._query(predicate).count()

    def insert(self, record: dict) -> dict:
        try:
            with transaction.atomic():
                obj = self.manager.create(**record)
        except IntegrityError as e:
            raise Conflict(f"{self.label} violates a uniqueness constraint") from e
        logger.debug("[gateway] inserted %s id=%s", self.label, obj.pk)
        return obj.to_dict()

    def update(self, pk, changes: dict) -> dict:
        obj = self._get(pk)
        for field, value in changes.items():
            setattr(obj, field, value)
        try:
            with transaction.atomic():
                # updated_at is auto_now, so it is stamped on every save
                obj.save()
        except IntegrityError as e:
            raise Conflict(f"{self.label} violates a uniqueness constraint") from e
        return obj.to_dict()

    def delete(self, pk) -> None:
        obj = self._get(pk)
        obj.delete()

"""Generic create/read/update/delete/list over one registry entry.

Payloads come in with wire (camelCase) keys and records go out the same way;
everything in between uses storage field names. Fields a payload carries that
the registry does not declare are dropped.

Uniqueness is checked before writing so the caller gets a readable message,
and checked again by the unique index at write time, which catches the
concurrent-duplicate case the pre-check cannot.
"""

import logging

from api.errors import Conflict, ValidationFailed
from api.gateway import ModelGateway
from api.naming import to_external, to_internal
from api.registry import Mapping, StringList

logger = logging.getLogger(__name__)


class CrudEngine:
    def __init__(self, resource, gateway=None):
        self.resource = resource
        self.gateway = gateway or ModelGateway(resource.model, resource.label)

    # ── Payload handling ──────────────────────────────────────────────────────

    def clean(self, payload: dict, partial: bool, existing=None) -> dict:
        """`existing` is the stored record on update; computed defaults read from it."""
        resource = self.resource
        data = to_internal(payload)
        if resource.prepare:
            data = resource.prepare(data)

        cleaned = {}
        for name, value in data.items():
            rule = resource.fields.get(name)
            if rule is None:
                logger.debug("[crud] %s: ignoring undeclared field %r", resource.name, name)
                continue
            cleaned[name] = rule.clean(name, value)

        if not partial:
            for name, rule in resource.fields.items():
                if rule.required and name not in cleaned:
                    rule.fail(name, "is required")

        # Blank values fall back to the declared default, on create and update alike
        context = {**(existing or {}), **cleaned}
        for name in resource.defaults:
            if name in cleaned and cleaned[name] in (None, ""):
                cleaned[name] = resource.default_for(name, context)
        if not partial:
            for name in resource.defaults:
                if name not in cleaned:
                    cleaned[name] = resource.default_for(name, cleaned)
        return cleaned

    def check_unique(self, data: dict, exclude_pk=None):
        key = self.resource.unique
        if not key or data.get(key) in (None, ""):
            return
        if self.gateway.exists({key: data[key]}, exclude_pk=exclude_pk):
            raise Conflict(self.resource.conflict_message)

    def list_predicate(self, filters=None, include_inactive=False) -> dict:
        predicate = {}
        for name, raw in (to_internal(filters or {})).items():
            rule = self.resource.fields.get(name)
            if rule is None or isinstance(rule, (StringList, Mapping)) or name == "password":
                raise ValidationFailed(f"Cannot filter {self.resource.name} by {name!r}")
            predicate[name] = rule.clean(name, raw)
        if self.resource.soft_delete and not include_inactive:
            predicate.setdefault("is_active", True)
        return predicate

    # ── Operations ────────────────────────────────────────────────────────────

    def create(self, payload: dict) -> dict:
        data = self.clean(payload, partial=False)
        return self.insert_clean(data)

    def insert_clean(self, data: dict) -> dict:
        """Insert an already-cleaned record (used by the create-with-files flow)."""
        self.check_unique(data)
        try:
            record = self.gateway.insert(data)
        except Conflict:
            raise Conflict(self.resource.conflict_message)
        logger.info("[crud] created %s id=%s", self.resource.item_key, record["id"])
        return to_external(record)

    def read(self, pk) -> dict:
        return to_external(self.gateway.find_one({"pk": pk}))

    def list(self, filters=None, include_inactive=False) -> list:
        predicate = self.list_predicate(filters, include_inactive)
        records = self.gateway.find_many(predicate, order_by=self.resource.ordering)
        return to_external(records)

    def update(self, pk, payload: dict) -> dict:
        existing = self.gateway.find_one({"pk": pk})
        data = self.clean(payload, partial=True, existing=existing)
        self.check_unique(data, exclude_pk=pk)
        try:
            record = self.gateway.update(pk, data)
        except Conflict:
            raise Conflict(self.resource.conflict_message)
        logger.info("[crud] updated %s id=%s fields=%s", self.resource.item_key, pk,
                    ",".join(sorted(data)) or "-")
        return to_external(record)

    def delete(self, pk) -> None:
        if self.resource.soft_delete:
            self.gateway.update(pk, {"is_active": False})
            logger.info("[crud] deactivated %s id=%s", self.resource.item_key, pk)
        else:
            self.gateway.delete(pk)
            logger.info("[crud] deleted %s id=%s", self.resource.item_key, pk)

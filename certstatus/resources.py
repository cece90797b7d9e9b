"""
Already-fetched resources handed to the status builder.

Objects coming straight from the API server are plain dicts (camelCase keys,
base64-encoded Secret data); ``from_k8s_object`` turns them into these models.
"""
from __future__ import annotations

import base64
import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Condition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(..., examples=["Ready"])
    status: str = Field(..., examples=["True", "False", "Unknown"])
    reason: str = ""
    message: str = ""

    @classmethod
    def from_k8s_object(cls, obj: Dict[str, Any]) -> Condition:
        return cls(
            type=obj.get("type", ""),
            status=obj.get("status", ""),
            reason=obj.get("reason") or "",
            message=obj.get("message") or "",
        )


def _conditions(status: Dict[str, Any]) -> List[Condition]:
    return [Condition.from_k8s_object(c) for c in status.get("conditions") or []]


class ObjectMeta(BaseModel):
    name: str
    namespace: str = ""
    creation_timestamp: Optional[dt.datetime] = None

    @classmethod
    def from_k8s_object(cls, obj: Dict[str, Any]) -> ObjectMeta:
        return cls(
            name=obj.get("name", ""),
            namespace=obj.get("namespace") or "",
            creation_timestamp=obj.get("creationTimestamp"),
        )


class Certificate(BaseModel):
    metadata: ObjectMeta
    dns_names: List[str] = []
    issuer_name: str = ""
    issuer_kind: str = Field(default="Issuer", examples=["Issuer", "ClusterIssuer"])
    secret_name: str = ""
    conditions: List[Condition] = []
    not_before: Optional[dt.datetime] = None
    not_after: Optional[dt.datetime] = None
    renewal_time: Optional[dt.datetime] = None

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @classmethod
    def from_k8s_object(cls, obj: Dict[str, Any]) -> Certificate:
        spec: Dict[str, Any] = obj.get("spec") or {}
        status: Dict[str, Any] = obj.get("status") or {}
        issuer_ref: Dict[str, Any] = spec.get("issuerRef") or {}
        return cls(
            metadata=ObjectMeta.from_k8s_object(obj.get("metadata") or {}),
            dns_names=spec.get("dnsNames") or [],
            issuer_name=issuer_ref.get("name", ""),
            issuer_kind=issuer_ref.get("kind") or "Issuer",
            secret_name=spec.get("secretName", ""),
            conditions=_conditions(status),
            not_before=status.get("notBefore"),
            not_after=status.get("notAfter"),
            renewal_time=status.get("renewalTime"),
        )


class Issuer(BaseModel):
    """Issuer or ClusterIssuer; the kind is decided by the builder method used."""

    metadata: ObjectMeta
    conditions: List[Condition] = []

    @property
    def name(self) -> str:
        return self.metadata.name

    @classmethod
    def from_k8s_object(cls, obj: Dict[str, Any]) -> Issuer:
        return cls(
            metadata=ObjectMeta.from_k8s_object(obj.get("metadata") or {}),
            conditions=_conditions(obj.get("status") or {}),
        )


class Secret(BaseModel):
    metadata: ObjectMeta
    data: Dict[str, bytes] = {}

    @field_validator("data", mode="before")
    @classmethod
    def _decode_b64(cls, v: Any) -> Any:
        # API JSON carries base64 strings; bytes are taken as already decoded
        if not isinstance(v, dict):
            return v
        return {k: base64.b64decode(val, validate=True) if isinstance(val, str) else val for k, val in v.items()}

    @property
    def name(self) -> str:
        return self.metadata.name

    @classmethod
    def from_k8s_object(cls, obj: Dict[str, Any]) -> Secret:
        return cls(
            metadata=ObjectMeta.from_k8s_object(obj.get("metadata") or {}),
            data=obj.get("data") or {},
        )


class CertificateRequest(BaseModel):
    metadata: ObjectMeta
    conditions: List[Condition] = []

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @classmethod
    def from_k8s_object(cls, obj: Dict[str, Any]) -> CertificateRequest:
        return cls(
            metadata=ObjectMeta.from_k8s_object(obj.get("metadata") or {}),
            conditions=_conditions(obj.get("status") or {}),
        )


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = Field(default="Normal", examples=["Normal", "Warning"])
    reason: str = ""
    message: str = ""
    source_component: str = ""
    source_host: str = ""
    count: int = 1
    first_timestamp: Optional[dt.datetime] = None
    last_timestamp: Optional[dt.datetime] = None

    @classmethod
    def from_k8s_object(cls, obj: Dict[str, Any]) -> Event:
        source: Dict[str, Any] = obj.get("source") or {}
        return cls(
            type=obj.get("type") or "Normal",
            reason=obj.get("reason") or "",
            message=(obj.get("message") or "").strip(),
            source_component=source.get("component") or obj.get("reportingComponent") or "",
            source_host=source.get("host") or "",
            count=obj.get("count") or 1,
            first_timestamp=obj.get("firstTimestamp") or obj.get("eventTime"),
            last_timestamp=obj.get("lastTimestamp") or obj.get("eventTime"),
        )


def events_from_k8s_list(items: Optional[List[Dict[str, Any]]]) -> Optional[List[Event]]:
    if items is None:
        return None
    return [Event.from_k8s_object(e) for e in items]

"""
Status of a Certificate and of the resources around it.

``StatusBuilder`` collects the results of independent lookups (Issuer or
ClusterIssuer, Secret, latest CertificateRequest). Each lookup may fail on its
own; a failure is kept as a ``Failed`` value in the matching section and never
touches the other sections. ``build()`` returns a frozen ``Report``.

A builder is meant to be driven by a single caller; it is not thread-safe.
"""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm

from .errors import CertificateParseError, MissingCertificateDataError
from .resources import Certificate, CertificateRequest, Condition, Event, Issuer, Secret
from .x509meta import decode_certificate_bytes, secret_fields

log = logging.getLogger(__name__)

DEFAULT_CERT_DATA_KEY = "tls.crt"


@dataclass(frozen=True)
class Failed:
    """A section whose lookup failed; only ``error`` is meaningful."""

    error: BaseException

    def __str__(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class IssuerStatus:
    name: str
    kind: str
    conditions: Tuple[Condition, ...] = ()


@dataclass(frozen=True)
class SecretStatus:
    name: str
    issuer_country: Tuple[str, ...] = ()
    issuer_organisation: Tuple[str, ...] = ()
    issuer_common_name: str = ""
    key_usage: int = 0
    ext_key_usage: Tuple[int, ...] = ()
    public_key_algorithm: str = ""
    signature_algorithm: str = ""
    subject_key_id: bytes = b""
    authority_key_id: bytes = b""
    serial_number: int = 0


@dataclass(frozen=True)
class CRStatus:
    name: str
    namespace: str
    conditions: Tuple[Condition, ...] = ()
    events: Optional[Tuple[Event, ...]] = None


IssuerReport = Union[IssuerStatus, Failed]
SecretReport = Union[SecretStatus, Failed]
CRReport = Union[CRStatus, Failed]


@dataclass(frozen=True)
class Report:
    name: str = ""
    namespace: str = ""
    creation_time: Optional[dt.datetime] = None
    conditions: Tuple[Condition, ...] = ()
    dns_names: Tuple[str, ...] = ()
    events: Optional[Tuple[Event, ...]] = None
    not_before: Optional[dt.datetime] = None
    not_after: Optional[dt.datetime] = None
    renewal_time: Optional[dt.datetime] = None
    issuer_kind: str = ""
    issuer: Optional[IssuerReport] = None
    secret: Optional[SecretReport] = None
    cr: Optional[CRReport] = None


def _tuple_or_none(items: Optional[Sequence[Event]]) -> Optional[Tuple[Event, ...]]:
    return tuple(items) if items is not None else None


@dataclass
class StatusBuilder:
    name: str = ""
    namespace: str = ""
    creation_time: Optional[dt.datetime] = None
    conditions: Sequence[Condition] = field(default_factory=list)
    dns_names: Sequence[str] = field(default_factory=list)
    events: Optional[Sequence[Event]] = None
    not_before: Optional[dt.datetime] = None
    not_after: Optional[dt.datetime] = None
    renewal_time: Optional[dt.datetime] = None
    issuer_kind: str = ""
    issuer: Optional[IssuerReport] = None
    secret: Optional[SecretReport] = None
    cr: Optional[CRReport] = None
    cert_data_key: str = DEFAULT_CERT_DATA_KEY

    @classmethod
    def from_certificate(
        cls, crt: Certificate, cert_data_key: str = DEFAULT_CERT_DATA_KEY
    ) -> StatusBuilder:
        return cls(
            name=crt.name,
            namespace=crt.namespace,
            creation_time=crt.metadata.creation_timestamp,
            conditions=crt.conditions,
            dns_names=crt.dns_names,
            not_before=crt.not_before,
            not_after=crt.not_after,
            renewal_time=crt.renewal_time,
            cert_data_key=cert_data_key,
        )

    def with_events(self, events: Optional[Sequence[Event]]) -> StatusBuilder:
        self.events = events
        return self

    def with_issuer_kind(self, kind: str) -> StatusBuilder:
        self.issuer_kind = kind
        return self

    def _with_issuer_of_kind(
        self, kind: str, issuer: Optional[Issuer], err: Optional[BaseException]
    ) -> StatusBuilder:
        if err is not None:
            log.debug("%s lookup failed: %s", kind, err)
            self.issuer = Failed(err)
            return self
        if issuer is None:
            return self
        self.issuer = IssuerStatus(name=issuer.name, kind=kind, conditions=tuple(issuer.conditions))
        return self

    def with_issuer(self, issuer: Optional[Issuer], err: Optional[BaseException] = None) -> StatusBuilder:
        return self._with_issuer_of_kind("Issuer", issuer, err)

    def with_cluster_issuer(
        self, issuer: Optional[Issuer], err: Optional[BaseException] = None
    ) -> StatusBuilder:
        return self._with_issuer_of_kind("ClusterIssuer", issuer, err)

    def with_secret(self, secret: Optional[Secret], err: Optional[BaseException] = None) -> StatusBuilder:
        if err is not None:
            log.debug("Secret lookup failed: %s", err)
            self.secret = Failed(err)
            return self
        if secret is None:
            return self

        cert_data = secret.data.get(self.cert_data_key)
        if not cert_data:
            self.secret = Failed(MissingCertificateDataError(self.cert_data_key, secret.name))
            return self

        try:
            fields = secret_fields(decode_certificate_bytes(cert_data))
        except (CertificateParseError, ValueError, x509.DuplicateExtension, UnsupportedAlgorithm) as e:
            log.debug("cannot parse %s of Secret %s: %s", self.cert_data_key, secret.name, e)
            self.secret = Failed(
                CertificateParseError(
                    f"error when parsing '{self.cert_data_key}' of Secret \"{secret.name}\": {e}\n"
                )
            )
            return self

        self.secret = SecretStatus(name=secret.name, **fields)
        return self

    def with_cr(
        self,
        req: Optional[CertificateRequest],
        events: Optional[Sequence[Event]] = None,
        err: Optional[BaseException] = None,
    ) -> StatusBuilder:
        if err is not None:
            log.debug("CertificateRequest lookup failed: %s", err)
            self.cr = Failed(err)
            return self
        if req is None:
            return self
        # the request's events become the events of the whole report
        self.events = events
        self.cr = CRStatus(
            name=req.name,
            namespace=req.namespace,
            conditions=tuple(req.conditions),
            events=_tuple_or_none(events),
        )
        return self

    def build(self) -> Report:
        return Report(
            name=self.name,
            namespace=self.namespace,
            creation_time=self.creation_time,
            conditions=tuple(self.conditions),
            dns_names=tuple(self.dns_names),
            events=_tuple_or_none(self.events),
            not_before=self.not_before,
            not_after=self.not_after,
            renewal_time=self.renewal_time,
            issuer_kind=self.issuer_kind,
            issuer=self.issuer,
            secret=self.secret,
            cr=self.cr,
        )

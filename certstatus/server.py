import logging
from typing import Annotated, Any, Callable, Dict, List, Optional, Tuple, TypeVar

from fastmcp import FastMCP
from pydantic import Field, ValidationError

from .errors import UnknownExtKeyUsageError
from .logging_conf import setup_logging
from .resources import (
    Certificate,
    CertificateRequest,
    Issuer,
    Secret,
    events_from_k8s_list,
)
from .settings import Settings
from .summary import describe_certificate, render_report
from .usages import ext_key_usage_to_labels, key_usage_to_labels

log = logging.getLogger(__name__)

T = TypeVar("T")

mcp = FastMCP(
    name="CertStatus",
    instructions=(
        "Purpose: explain the status of a cert-manager Certificate from resources the client already fetched. "
        "No cluster access, no network access, no file writes.\n\n"
        "Use me when: you have the Certificate object and, optionally, its Issuer/ClusterIssuer, its Secret, "
        "its latest CertificateRequest and their events, and need a readable status report.\n"
        "Do NOT use me for: fetching resources, renewing certificates, or validating chains.\n\n"
        "How to call:\n"
        "- `certificate_status(certificate=..., issuer=?, secret=?, certificate_request=?, ...)` with the raw "
        "API objects as JSON (camelCase keys, base64 Secret data). A failed lookup is passed as its error "
        "message in the matching `*_error` argument.\n"
        "- `decode_key_usage(key_usage=?, ext_key_usage=?)` turns X.509 usage codes into labels.\n\n"
        "Safety: read-only and idempotent; Secret data is never returned or logged."
    ),
)


class ClientLookupError(Exception):
    """Lookup failure reported by the client as a plain message."""


def _load(
    kind: str, convert: Callable[[Any], T], obj: Any, error: Optional[str]
) -> Tuple[Optional[T], Optional[Exception]]:
    """
    Convert a raw API object for one report section. A failed lookup or an
    object that does not convert becomes the section error, so the other
    sections still render.
    """
    if error:
        return None, ClientLookupError(error)
    if not obj:
        return None, None
    try:
        return convert(obj), None
    except ValidationError as e:
        details = "; ".join(err["msg"] for err in e.errors())
        log.debug("cannot read %s: %s", kind, details)
        return None, ClientLookupError(f"error when reading {kind}: {details}\n")


@mcp.tool(
    description=(
        "Render the status report of a Certificate together with its issuer, Secret and latest "
        "CertificateRequest. Read-only and idempotent."
    ),
    tags={"certstatus", "x509", "kubernetes", "status"},
    annotations={
        "title": "Certificate status",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def certificate_status(
    certificate: Annotated[
        Dict[str, Any],
        Field(description="The Certificate object as returned by the API server."),
    ],
    issuer: Annotated[
        Optional[Dict[str, Any]],
        Field(description="The Issuer or ClusterIssuer referenced by the Certificate, if found."),
    ] = None,
    issuer_error: Annotated[
        Optional[str], Field(description="Error message of a failed issuer lookup.")
    ] = None,
    secret: Annotated[
        Optional[Dict[str, Any]],
        Field(description="The Secret named by spec.secretName, if found."),
    ] = None,
    secret_error: Annotated[
        Optional[str], Field(description="Error message of a failed Secret lookup.")
    ] = None,
    certificate_request: Annotated[
        Optional[Dict[str, Any]],
        Field(description="The latest CertificateRequest of the Certificate, if any."),
    ] = None,
    certificate_request_events: Annotated[
        Optional[List[Dict[str, Any]]],
        Field(description="Events of the CertificateRequest (items of an EventList)."),
    ] = None,
    certificate_request_error: Annotated[
        Optional[str], Field(description="Error message of a failed CertificateRequest lookup.")
    ] = None,
    events: Annotated[
        Optional[List[Dict[str, Any]]],
        Field(description="Events of the Certificate (items of an EventList)."),
    ] = None,
) -> str:
    """
    Example:
      { "certificate": {"metadata": {"name": "web", "namespace": "default"},
                        "spec": {"dnsNames": ["example.com"], "issuerRef": {"name": "ca", "kind": "Issuer"}}} }
    """
    settings = Settings.from_env()
    issuer_obj, issuer_err = _load("Issuer", Issuer.from_k8s_object, issuer, issuer_error)
    secret_obj, secret_err = _load("Secret", Secret.from_k8s_object, secret, secret_error)
    request, request_err = _load(
        "CertificateRequest", CertificateRequest.from_k8s_object, certificate_request, certificate_request_error
    )
    request_events, request_events_err = _load(
        "CertificateRequest events", events_from_k8s_list, certificate_request_events, None
    )

    report = describe_certificate(
        Certificate.from_k8s_object(certificate),
        issuer=issuer_obj,
        issuer_err=issuer_err,
        secret=secret_obj,
        secret_err=secret_err,
        request=request,
        request_events=request_events,
        request_err=request_err or request_events_err,
        events=events_from_k8s_list(events),
        cert_data_key=settings.CERT_DATA_KEY,
    )
    if report is None:
        return ""
    return render_report(report)


@mcp.tool(
    description="Decode an X.509 key usage bit set and extended key usage codes into labels.",
    tags={"certstatus", "x509"},
    annotations={
        "title": "Decode key usage",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def decode_key_usage(
    key_usage: Annotated[int, Field(ge=0, description="Key usage bit set (1 = Digital Signature).")] = 0,
    ext_key_usage: Annotated[
        Optional[List[int]], Field(description="Extended key usage codes (0 = Any, 1 = Server Authentication).")
    ] = None,
) -> dict:
    out: Dict[str, Any] = {"key_usage": key_usage_to_labels(key_usage)}
    try:
        out["ext_key_usage"] = ext_key_usage_to_labels(ext_key_usage or [])
    except UnknownExtKeyUsageError as e:
        out["error"] = str(e)
    return out


def main() -> None:
    setup_logging(Settings.from_env())
    mcp.run()


if __name__ == "__main__":
    main()

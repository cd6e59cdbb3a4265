"""Contour ingress — Ingress with cluster host naming, DNS and TLS annotations."""

from kubetpl.core.constants import (
    CLUSTER_ISSUER_ANNOTATION, DEFAULT_CLUSTER_ISSUER, DEFAULT_CONTOUR_INSTANCE,
    DNS_TARGET_ANNOTATION, INGRESS_CLASS_ANNOTATION, TLS_ACME_ANNOTATION,
)
from kubetpl.core.ingress import (
    ingress, ingress_backend, ingress_path, ingress_rule, ingress_tls,
)
from kubetpl.io.config import cluster_from_env
from kubetpl.pacts.types import Cluster


def contour_host(name: str, cluster: Cluster, ingress_domain: str | None = None) -> str:
    """``<name>.<cluster>.<ingress_domain>``; the domain defaults to the DNS zone."""
    return f"{name}.{cluster.name}.{ingress_domain or cluster.dns_zone}"


def contour_target(cluster: Cluster, contour_instance: str = DEFAULT_CONTOUR_INSTANCE,
                   contour_domain: str | None = None) -> str:
    """DNS name of the contour load balancer external-dns should point at."""
    return f"{contour_instance}.{cluster.name}.{contour_domain or cluster.dns_zone}"


def contour_ingress(name: str, namespace: str | None = None,
                    service_name: str | None = None, service_port: int | str = 80,
                    tls_secret: str | None = None,
                    cluster: Cluster | None = None, host: str | None = None,
                    contour_instance: str = DEFAULT_CONTOUR_INSTANCE,
                    ingress_domain: str | None = None,
                    contour_domain: str | None = None,
                    cluster_issuer: str = DEFAULT_CLUSTER_ISSUER,
                    app: str | None = None) -> dict:
    """Ingress served by a contour instance, with DNS and optional TLS.

    The host is *host* when given, otherwise derived from the cluster:
    *cluster* when given, else the metadata named by ``KUBETPL_CLUSTER``.
    With *tls_secret* the ingress gets cert-manager annotations and a tls
    block for the host; without it neither is present. An explicit *host*
    with no cluster available gets no external-dns target.
    """
    if cluster is None:
        cluster = cluster_from_env(required=host is None)
    if host is None:
        host = contour_host(name, cluster, ingress_domain)
    annotations = {INGRESS_CLASS_ANNOTATION: contour_instance}
    if cluster is not None:
        annotations[DNS_TARGET_ANNOTATION] = contour_target(
            cluster, contour_instance, contour_domain)
    tls = None
    if tls_secret is not None:
        annotations[CLUSTER_ISSUER_ANNOTATION] = cluster_issuer
        annotations[TLS_ACME_ANNOTATION] = "true"
        tls = [ingress_tls([host], tls_secret)]
    backend = ingress_backend(service_name or name, service_port)
    return ingress(
        name, namespace,
        rules=[ingress_rule(host, [ingress_path(backend)])],
        tls=tls,
        annotations=annotations,
        app=app,
    )

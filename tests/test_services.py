"""Tests for Service derivation and Ingress construction."""

import pytest

from kubetpl import (
    MissingFieldError,
    ValidationError,
    container,
    deployment,
    ingress,
    ingress_backend,
    ingress_path,
    ingress_rule,
    ingress_tls,
    pod,
    pod_spec,
    service,
    service_host,
    service_host_colon_port,
    service_http_url,
    service_name_port,
)


def _deployment():
    spec = pod_spec(containers={
        "default": container("api", image="api:2",
                             ports={"http": {"containerPort": 8080},
                                    "metrics": {"containerPort": 9090}}),
        "sidecar": container("proxy", image="envoy", ports={"admin": {"containerPort": 9901}}),
    })
    return deployment("api", "shop", spec=spec, app="shop")


class TestService:
    """Tests for service."""

    def test_derives_selector_and_port(self):
        svc = service("api", "shop", target_pod=_deployment())
        assert svc["spec"]["selector"] == {"name": "api", "app": "shop"}
        assert svc["spec"]["ports"] == [{"port": 8080, "targetPort": 8080}]
        assert svc["spec"]["type"] == "ClusterIP"

    def test_accepts_pod(self):
        p = pod("one", "ns", spec=pod_spec(containers={
            "c": container("c", image="x", ports={"p": {"containerPort": 53}})}))
        svc = service("one", "ns", target_pod=p)
        assert svc["spec"]["selector"] == {"name": "one"}
        assert svc["spec"]["ports"][0]["port"] == 53

    def test_port_override(self):
        svc = service("api", "shop", target_pod=_deployment(), port=80, port_name="http")
        assert svc["spec"]["ports"] == [{"name": "http", "port": 80, "targetPort": 8080}]

    def test_target_pod_required(self):
        with pytest.raises(MissingFieldError, match="target_pod"):
            service("api", "shop")

    def test_target_without_ports(self):
        p = pod("bare", spec=pod_spec(containers={"c": container("c", image="x")}))
        with pytest.raises(MissingFieldError, match="ports"):
            service("bare", target_pod=p)

    def test_address_helpers(self):
        svc = service("api", "shop", target_pod=_deployment(), port=80)
        assert service_host(svc) == "api.shop.svc"
        assert service_host_colon_port(svc) == "api.shop.svc:80"
        assert service_http_url(svc) == "http://api.shop.svc:80/"
        assert service_name_port(svc) == {"service": {"name": "api", "port": {"number": 80}}}


class TestIngress:
    """Tests for ingress and its helpers."""

    def test_rules_without_tls(self):
        rule = ingress_rule("shop.example.com", [ingress_path(ingress_backend("api", 80))])
        ing = ingress("api", "shop", rules=[rule])
        assert ing["apiVersion"] == "networking.k8s.io/v1"
        assert "tls" not in ing["spec"]
        path = ing["spec"]["rules"][0]["http"]["paths"][0]
        assert path == {"path": "/", "pathType": "Prefix",
                        "backend": {"service": {"name": "api", "port": {"number": 80}}}}

    def test_named_port_backend(self):
        assert ingress_backend("api", "http") == {"service": {"name": "api", "port": {"name": "http"}}}

    def test_tls_block(self):
        ing = ingress("api", "shop", tls=[ingress_tls(["a.example.com"], "api-tls")])
        assert ing["spec"]["tls"] == [{"hosts": ["a.example.com"], "secretName": "api-tls"}]

    def test_relative_path_rejected(self):
        rule = ingress_rule(None, [ingress_path(ingress_backend("api"), path="api")])
        with pytest.raises(ValidationError, match="absolute"):
            ingress("api", rules=[rule])

    def test_null_path_treated_as_root(self):
        rule = {"http": {"paths": [{"path": None, "backend": ingress_backend("api")}]}}
        assert ingress("api", rules=[rule])["spec"]["rules"] == [rule]

    def test_annotations_and_class(self):
        ing = ingress("api", annotations={"kubernetes.io/ingress.class": "Contour"})
        assert ing["metadata"]["annotations"] == {"kubernetes.io/ingress.class": "Contour"}
        assert ingress("x", ingress_class="nginx")["spec"]["ingressClassName"] == "nginx"

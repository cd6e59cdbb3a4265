"""Tests for ConfigMap/Secret, value references and volume sources."""

import base64

import pytest

from kubetpl import (
    MissingFieldError,
    ValidationError,
    config_map,
    config_map_ref,
    config_map_volume,
    env_list,
    git_repo_volume,
    host_path_volume,
    persistent_volume,
    persistent_volume_claim,
    pvc_volume,
    resource_field_ref,
    secret,
    secret_key_ref,
    secret_volume,
    storage_class,
)
from kubetpl.core.volumes import has_pvc


class TestConfigMap:
    """Tests for config_map."""

    def test_string_data(self):
        cm = config_map("cfg", "ns", data={"a.conf": "x=1"})
        assert cm["data"] == {"a.conf": "x=1"}

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError, match="port"):
            config_map("cfg", data={"port": 80, "host": "a"})


class TestSecret:
    """Tests for secret."""

    def test_base64_round_trip(self):
        s = secret("creds", "ns", data={"K": "v"})
        assert s["data"]["K"] == base64.b64encode(b"v").decode()
        assert base64.b64decode(s["data"]["K"]).decode() == "v"
        assert s["type"] == "Opaque"

    def test_bytes_and_unicode(self):
        s = secret("creds", data={"raw": b"\x00\x01", "text": "héllo"})
        assert base64.b64decode(s["data"]["raw"]) == b"\x00\x01"
        assert base64.b64decode(s["data"]["text"]).decode("utf-8") == "héllo"

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError, match="port"):
            secret("db", "ns", data={"user": "app", "port": 5432})


class TestReferences:
    """Tests for secret_key_ref, config_map_ref and env_list."""

    def test_secret_key_ref(self):
        s = secret("creds", data={"password": "p"})
        assert secret_key_ref(s, "password") == {
            "secretKeyRef": {"name": "creds", "key": "password"}}

    def test_secret_key_ref_missing(self):
        s = secret("creds", data={"password": "p"})
        with pytest.raises(ValidationError, match="missing"):
            secret_key_ref(s, "missing")

    def test_config_map_ref(self):
        cm = config_map("cfg", data={"mode": "fast"})
        assert config_map_ref(cm, "mode") == {"configMapKeyRef": {"name": "cfg", "key": "mode"}}
        with pytest.raises(ValidationError):
            config_map_ref(cm, "other")

    def test_env_list(self):
        s = secret("creds", data={"password": "p"})
        result = env_list({"DEBUG": False, "PASSWORD": secret_key_ref(s, "password")})
        assert result == [
            {"name": "DEBUG", "value": "false"},
            {"name": "PASSWORD", "valueFrom": {"secretKeyRef": {"name": "creds",
                                                                "key": "password"}}},
        ]

    def test_resource_field_ref(self):
        assert resource_field_ref("limits.memory", divisor="1Mi") == {
            "resourceFieldRef": {"resource": "limits.memory", "divisor": "1Mi"}}


class TestVolumes:
    """Tests for volume sources and storage objects."""

    def test_sources(self):
        assert host_path_volume("/var/log") == {"hostPath": {"path": "/var/log"}}
        assert git_repo_volume("https://example.com/r.git", "main") == {
            "gitRepo": {"repository": "https://example.com/r.git", "revision": "main"}}
        assert secret_volume(secret("tls")) == {"secret": {"secretName": "tls"}}
        assert config_map_volume(config_map("cfg")) == {"configMap": {"name": "cfg"}}

    def test_pvc_volume_by_object_or_name(self):
        pvc = persistent_volume_claim("data", storage="1Gi")
        assert pvc_volume(pvc) == pvc_volume("data") == {
            "persistentVolumeClaim": {"claimName": "data"}}

    def test_pvc(self):
        pvc = persistent_volume_claim("data", "ns", storage="5Gi")
        assert pvc["spec"] == {"resources": {"requests": {"storage": "5Gi"}},
                               "accessModes": ["ReadWriteOnce"]}

    def test_pvc_storage_class(self):
        pvc = persistent_volume_claim("data", storage="5Gi", storage_class="fast")
        assert pvc["spec"]["storageClassName"] == "fast"

    def test_pvc_storage_required(self):
        with pytest.raises(MissingFieldError, match="storage"):
            persistent_volume_claim("data")

    def test_has_pvc(self):
        assert has_pvc([{"name": "d", "persistentVolumeClaim": {"claimName": "d"}}])
        assert not has_pvc([{"name": "c", "emptyDir": {}}])
        assert has_pvc([], [{"metadata": {"name": "data"}}])

    def test_storage_class(self):
        sc = storage_class("fast", provisioner="kubernetes.io/gce-pd", parameters={"type": "pd-ssd"})
        assert sc["provisioner"] == "kubernetes.io/gce-pd"
        assert sc["parameters"] == {"type": "pd-ssd"}
        with pytest.raises(MissingFieldError, match="provisioner"):
            storage_class("slow")

    def test_persistent_volume(self):
        pv = persistent_volume("pv1", spec={"capacity": {"storage": "1Gi"}})
        assert pv["kind"] == "PersistentVolume"
        assert pv["spec"]["capacity"] == {"storage": "1Gi"}

"""Public data types and errors for templates."""

from dataclasses import dataclass

# Fields a cluster metadata document must carry
CLUSTER_FIELDS = ("name", "region", "cloud_provider", "dns_zone")


class TemplateError(Exception):
    """Base class for every object generation failure."""


class MissingFieldError(TemplateError):
    """A required value was left unset."""

    def __init__(self, template: str, field: str):
        self.template = template
        self.field = field
        super().__init__(f"{template}: {field} required")


class ValidationError(TemplateError):
    """A cross-field assertion failed while building an object."""

    def __init__(self, template: str, message: str):
        self.template = template
        super().__init__(f"{template}: {message}")


class UnitParseError(TemplateError, ValueError):
    """A quantity string carries an unknown unit suffix."""


class ClusterConfigError(TemplateError):
    """Cluster metadata is missing or malformed."""


@dataclass(frozen=True)
class Cluster:
    """Cluster metadata supplied from outside (name, region, provider, zone)."""
    name: str
    region: str
    cloud_provider: str
    dns_zone: str

    @property
    def fqdn(self) -> str:
        return ".".join((self.name, self.region, self.cloud_provider, self.dns_zone))

    @classmethod
    def from_dict(cls, doc: dict) -> "Cluster":
        """Build a Cluster from a parsed metadata document."""
        if not isinstance(doc, dict):
            raise ClusterConfigError(
                f"cluster metadata must be a mapping, got {type(doc).__name__}")
        missing = [f for f in CLUSTER_FIELDS if not doc.get(f)]
        if missing:
            raise ClusterConfigError(
                f"cluster metadata missing field(s): {', '.join(missing)}")
        return cls(**{f: str(doc[f]) for f in CLUSTER_FIELDS})

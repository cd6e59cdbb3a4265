"""API versions, label keys and annotation names used by the templates."""

# Namespace whose workloads also get the legacy ``k8s-app`` label
SYSTEM_NAMESPACE = "kube-system"

API_CORE = "v1"
API_APPS = "apps/v1"
API_BATCH = "batch/v1"
API_NETWORKING = "networking.k8s.io/v1"
API_RBAC = "rbac.authorization.k8s.io/v1"
API_STORAGE = "storage.k8s.io/v1"
API_AUTOSCALING = "autoscaling/v1"
API_POLICY = "policy/v1"
API_APIREGISTRATION = "apiregistration.k8s.io/v1"
API_APIEXTENSIONS = "apiextensions.k8s.io/v1"

RBAC_GROUP = "rbac.authorization.k8s.io"

# Annotations written by the contour ingress template
INGRESS_CLASS_ANNOTATION = "kubernetes.io/ingress.class"
DNS_TARGET_ANNOTATION = "external-dns.alpha.kubernetes.io/target"
CLUSTER_ISSUER_ANNOTATION = "cert-manager.io/cluster-issuer"
TLS_ACME_ANNOTATION = "kubernetes.io/tls-acme"

DEFAULT_CLUSTER_ISSUER = "letsencrypt-prod"
DEFAULT_CONTOUR_INSTANCE = "contour"

# Environment variable pointing at the cluster metadata document
CLUSTER_ENV_VAR = "KUBETPL_CLUSTER"

"""
Per-environment identifiers for the AHS-EHR monitoring stacks.

Each environment points at resources that already exist in the account
(ALB, EKS cluster, alerts topic). Nothing here is created by the stacks
except the alarms that watch them.
"""

from .constants import NAME_PREFIX


ENVIRONMENTS = {
    "Dev": {
        # Pre-existing SNS topic receiving alarm and OK notifications
        "sns_topic_arn": "arn:aws:sns:ap-south-1:829876691474:AHS-EHR-Dev-CloudWatch-Alerts",
        # ARN suffixes as used by the LoadBalancer dimension (app/<name>/<id>)
        "alb_arns": [
            "app/k8s-arcaaideveksing-0f33c6f686/d5bbcea83bc5f771",
        ],
        "cluster_name": "AHS-EHR-Dev-arcaquest-eks",
        "namespaces": [
            "docsearch-dev",
            "emrsearchenginehttp-dev",
            "ocr-dev",
            "arcaquest-dev",
        ],
        # Grouping namespace -> services deployed in it
        "service_namespaces": {
            "arcaai-dev-frontend": [
                "arca-emr-frontend-service",
                "arca-admin-frontend-service",
            ],
        },
    },
    "Staging": {
        "sns_topic_arn": "arn:aws:sns:ap-south-1:829876691474:AHS-EHR-Staging-CloudWatch-Alerts",
        "alb_arns": [
            "app/k8s-arcaaistagingeksi-f3c1c220f6/35fc3972e9fdee44",
        ],
        "cluster_name": "AHS-EHR-Staging-arcaquest-eks",
        "namespaces": [
            "docsearch-staging",
            "emrsearchenginehttp-staging",
            "ocr-staging",
            "arcaquest-staging",
        ],
        "service_namespaces": {
            "arcaai-staging-frontend": [
                "arca-emr-frontend-service",
                "arca-admin-frontend-service",
            ],
        },
    },
}


def get_environment(env_name):
    """Return the identifier table for an environment."""
    if env_name not in ENVIRONMENTS:
        raise ValueError(
            f"Unknown environment '{env_name}'. Expected one of: {', '.join(ENVIRONMENTS)}"
        )
    return ENVIRONMENTS[env_name]


def name_prefix(env_name):
    return f"{NAME_PREFIX}-{env_name}"


def load_balancer_name(arn_suffix):
    """
    Short name of a load balancer from its ARN suffix.

    'app/k8s-web-0f33/d5bb' -> 'k8s-web-0f33'. Anything not in that
    shape is returned with '/' replaced so it stays usable in alarm names.
    """
    parts = arn_suffix.split("/")
    if len(parts) == 3 and parts[1]:
        return parts[1]
    return arn_suffix.replace("/", "-")


def selected_environments(value=None):
    """
    Parse the 'environments' context value (e.g. "Dev,Staging").

    An empty value selects every environment.
    """
    if not value:
        return list(ENVIRONMENTS)

    names = [name.strip() for name in value.split(",") if name.strip()]
    # Repeats would become duplicate stack ids
    names = list(dict.fromkeys(names))
    for env_name in names:
        get_environment(env_name)
    return names

"""
Alarm plan for one environment.

Expands the environment table and the metric rule tables into a flat list of
alarm descriptors. The stack turns each descriptor into a CloudWatch alarm;
keeping this step free of CDK lets the counts and names be checked directly.

Descriptor fields:
- category: alb | namespace | service | node
- alarm_name: also used as the construct id
- description
- namespace, metric_name, dimensions, statistic: the metric under test
- threshold, period_minutes, evaluation_periods
- comparison_operator, treat_missing_data: aws_cloudwatch enum member names
"""

from collections import Counter

from .constants import (
    ALB_NAMESPACE,
    CONTAINER_INSIGHTS_NAMESPACE,
    DIM_LOAD_BALANCER,
    DIM_CLUSTER,
    DIM_NAMESPACE,
    DIM_SERVICE,
    ALARM_PERIOD_MINUTES,
    EVALUATION_PERIODS,
    GREATER_THAN,
    LESS_THAN,
    NOT_BREACHING,
    RUNNING_PODS_METRIC,
    CATEGORY_ALB,
    CATEGORY_NAMESPACE,
    CATEGORY_SERVICE,
    CATEGORY_NODE,
    CATEGORIES,
    ALB_METRICS,
    POD_METRICS,
    NODE_METRICS,
)
from .environments import get_environment, name_prefix, load_balancer_name


def comparison_operator_for(metric_name):
    """Running pod count alarms when it drops below the threshold; everything else when it rises above."""
    return LESS_THAN if metric_name == RUNNING_PODS_METRIC else GREATER_THAN


def _alarm(env_name, category, alarm_name, scope, metric_namespace, metric, dimensions):
    comparison = comparison_operator_for(metric["name"])
    symbol = "<" if comparison == LESS_THAN else ">"
    return {
        "category": category,
        "alarm_name": alarm_name,
        "description": (
            f"[{env_name.upper()}] {metric['name']} {symbol} {metric['threshold']} "
            f"({metric['stat']}, {ALARM_PERIOD_MINUTES} min) on {scope}"
        ),
        "namespace": metric_namespace,
        "metric_name": metric["name"],
        "dimensions": dimensions,
        "statistic": metric["stat"],
        "threshold": metric["threshold"],
        "period_minutes": ALARM_PERIOD_MINUTES,
        "evaluation_periods": EVALUATION_PERIODS,
        "comparison_operator": comparison,
        "treat_missing_data": NOT_BREACHING,
    }


def build_alarm_plan(env_name):
    """
    Build every alarm descriptor for an environment.

    Order: load balancer metrics per ALB, pod metrics per namespace,
    pod metrics per (grouping, service), then node/cluster metrics.
    """
    config = get_environment(env_name)
    prefix = name_prefix(env_name)
    cluster = config["cluster_name"]
    plan = []

    # ALB ALARMS
    for alb in config["alb_arns"]:
        alb_name = load_balancer_name(alb)
        for metric in ALB_METRICS:
            plan.append(_alarm(
                env_name, CATEGORY_ALB,
                f"{prefix}-ALB-{alb_name}-{metric['name']}",
                f"load balancer {alb_name}",
                ALB_NAMESPACE, metric,
                {DIM_LOAD_BALANCER: alb},
            ))

    # NAMESPACE-LEVEL POD ALARMS
    for ns in config["namespaces"]:
        for metric in POD_METRICS:
            plan.append(_alarm(
                env_name, CATEGORY_NAMESPACE,
                f"{prefix}-{ns}-{metric['name']}",
                f"namespace {ns}",
                CONTAINER_INSIGHTS_NAMESPACE, metric,
                {DIM_CLUSTER: cluster, DIM_NAMESPACE: ns},
            ))

    # SERVICE-LEVEL POD ALARMS
    for ns, services in config["service_namespaces"].items():
        for service in services:
            for metric in POD_METRICS:
                plan.append(_alarm(
                    env_name, CATEGORY_SERVICE,
                    f"{prefix}-{ns}-{service}-{metric['name']}",
                    f"service {ns}/{service}",
                    CONTAINER_INSIGHTS_NAMESPACE, metric,
                    {DIM_CLUSTER: cluster, DIM_NAMESPACE: ns, DIM_SERVICE: service},
                ))

    # NODE / CLUSTER ALARMS
    for metric in NODE_METRICS:
        plan.append(_alarm(
            env_name, CATEGORY_NODE,
            f"{prefix}-WorkerNode-{metric['name']}",
            f"cluster {cluster}",
            CONTAINER_INSIGHTS_NAMESPACE, metric,
            {DIM_CLUSTER: cluster},
        ))

    return plan


def summarize_plan(plan):
    """Alarm count per category, plus the total."""
    counts = Counter(alarm["category"] for alarm in plan)
    summary = {category: counts.get(category, 0) for category in CATEGORIES}
    summary["total"] = len(plan)
    return summary


def duplicate_alarm_names(plan):
    counts = Counter(alarm["alarm_name"] for alarm in plan)
    return sorted(name for name, count in counts.items() if count > 1)

"""Shared constants for the AHS-EHR CloudWatch alarm stacks."""

# Naming & Region
NAME_PREFIX = "AHS-EHR"
AWS_REGION = "ap-south-1"

# CloudWatch Namespaces
ALB_NAMESPACE = "AWS/ApplicationELB"
CONTAINER_INSIGHTS_NAMESPACE = "ContainerInsights"

# Dimension Names
DIM_LOAD_BALANCER = "LoadBalancer"
DIM_CLUSTER = "ClusterName"
DIM_NAMESPACE = "Namespace"
DIM_SERVICE = "Service"

# Alarm window
ALARM_PERIOD_MINUTES = 5
EVALUATION_PERIODS = 1

# Comparison operators (names of aws_cloudwatch.ComparisonOperator members)
GREATER_THAN = "GREATER_THAN_THRESHOLD"
LESS_THAN = "LESS_THAN_THRESHOLD"

# Missing data treatment for every alarm (name of an aws_cloudwatch.TreatMissingData member)
NOT_BREACHING = "NOT_BREACHING"

# The one rule that alarms on too few, not too many
RUNNING_PODS_METRIC = "service_number_of_running_pods"

# Alarm categories
CATEGORY_ALB = "alb"
CATEGORY_NAMESPACE = "namespace"
CATEGORY_SERVICE = "service"
CATEGORY_NODE = "node"
CATEGORIES = [CATEGORY_ALB, CATEGORY_NAMESPACE, CATEGORY_SERVICE, CATEGORY_NODE]

# Load balancer metrics, one alarm each per load balancer
# TargetResponseTime is averaged on purpose; summing latencies over the window is meaningless
ALB_METRICS = [
    {"name": "HTTPCode_ELB_5XX_Count", "threshold": 20, "stat": "Sum"},
    {"name": "HTTPCode_ELB_4XX_Count", "threshold": 50, "stat": "Sum"},
    {"name": "RequestCount", "threshold": 10000, "stat": "Sum"},
    {"name": "TargetResponseTime", "threshold": 2, "stat": "Average"},
]

# Pod metrics, applied per namespace and per service
POD_METRICS = [
    {"name": "pod_cpu_utilization", "threshold": 90, "stat": "Average"},
    {"name": "pod_memory_utilization", "threshold": 90, "stat": "Average"},
    {"name": "pod_number_of_container_restarts", "threshold": 3, "stat": "Sum"},
    {"name": RUNNING_PODS_METRIC, "threshold": 1, "stat": "Minimum"},
]

# Worker node / cluster metrics, scoped by cluster only
NODE_METRICS = [
    {"name": "node_memory_utilization", "threshold": 80, "stat": "Average"},
    {"name": "node_cpu_utilization", "threshold": 80, "stat": "Average"},
    {"name": "cluster_node_count", "threshold": 2, "stat": "Average"},
    {"name": "node_filesystem_utilization", "threshold": 85, "stat": "Average"},
    {"name": "cluster_failed_node_count", "threshold": 1, "stat": "Average"},
]

# CDK context keys (cdk synth -c key=value)
CONTEXT_ALERT_EMAIL = "alertEmail"
CONTEXT_ENVIRONMENTS = "environments"

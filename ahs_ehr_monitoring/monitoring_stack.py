"""
AHS-EHR Monitoring Stack
Declares CloudWatch alarms on the ALB and EKS workloads of one environment

AWS Services Used:
- Amazon CloudWatch: Metric alarms and an alarm status dashboard
  Documentation: https://docs.aws.amazon.com/AmazonCloudWatch/latest/monitoring/AlarmThatSendsEmail.html
- Amazon SNS: Alarm and recovery notification distribution
  Documentation: https://docs.aws.amazon.com/sns/latest/dg/welcome.html
- Container Insights: Pod, service and node metrics for EKS
  Documentation: https://docs.aws.amazon.com/AmazonCloudWatch/latest/monitoring/Container-Insights-metrics-EKS.html

Alarm Groups:
1. ALB: error counts, request volume and latency per load balancer
2. Namespace: pod CPU, memory, restarts and running pods per namespace
3. Service: the same pod metrics per frontend service
4. Worker nodes: node utilization and node counts for the cluster
"""

from typing import Optional

from aws_cdk import (
    Stack,
    Duration,
    Tags,
    Annotations,
    CfnOutput,
    aws_cloudwatch as cloudwatch,
    aws_cloudwatch_actions as cloudwatch_actions,
    aws_sns as sns,
    aws_sns_subscriptions as subscriptions,
)
from constructs import Construct

from .alarm_plan import build_alarm_plan, summarize_plan
from .constants import (
    CATEGORIES,
    CATEGORY_ALB,
    CATEGORY_NAMESPACE,
    CATEGORY_SERVICE,
    CATEGORY_NODE,
)
from .environments import get_environment, name_prefix


DASHBOARD_TITLES = {
    CATEGORY_ALB: "Load Balancer Alarms",
    CATEGORY_NAMESPACE: "Namespace Pod Alarms",
    CATEGORY_SERVICE: "Service Pod Alarms",
    CATEGORY_NODE: "Worker Node / Cluster Alarms",
}


class MonitoringStack(Stack):
    """
    CloudWatch alarms for one AHS-EHR environment (Dev or Staging).

    By default every alarm notifies the environment's existing alerts topic.
    Passing alert_email creates a new topic with an email subscription instead.
    """

    def __init__(self, scope: Construct, construct_id: str, env_name: str, alert_email: Optional[str] = None, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        config = get_environment(env_name)
        prefix = name_prefix(env_name)

        # TAGS: Label every resource with its environment
        # Tags documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk/Tags.html
        Tags.of(self).add("Environment", env_name)

        # ========================================================================
        # SNS TOPIC: Alarm Notifications
        # ========================================================================
        # With alert_email: new topic + email subscription
        # Otherwise: the existing topic is referenced by ARN, nothing is created
        # from_topic_arn documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk.aws_sns/Topic.html#aws_cdk.aws_sns.Topic.from_topic_arn
        if alert_email:
            self.alerts_topic = sns.Topic(
                self, f"{prefix}-AlertsTopic",
                topic_name=f"{prefix}-CloudWatch-Alerts",
                display_name=f"[{env_name.upper()}] AHS-EHR CloudWatch Alerts"
            )
            # User must confirm subscription via email
            # EmailSubscription documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk.aws_sns_subscriptions/EmailSubscription.html
            self.alerts_topic.add_subscription(
                subscriptions.EmailSubscription(alert_email)
            )
            topic_note = f"new topic {prefix}-CloudWatch-Alerts subscribed by {alert_email}"
        else:
            self.alerts_topic = sns.Topic.from_topic_arn(
                self, f"{prefix}-ExistingAlertsTopic",
                config["sns_topic_arn"]
            )
            topic_note = f"existing topic {config['sns_topic_arn']}"

        # ========================================================================
        # CLOUDWATCH ALARMS
        # ========================================================================
        # One alarm per descriptor in the plan, each notifying on ALARM and OK
        # Alarm documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk.aws_cloudwatch/Alarm.html
        plan = build_alarm_plan(env_name)
        self.alarms = []
        alarms_by_category = {category: [] for category in CATEGORIES}

        for spec in plan:
            alarm = self._create_alarm(spec)
            self.alarms.append(alarm)
            alarms_by_category[spec["category"]].append(alarm)

        # ========================================================================
        # CLOUDWATCH DASHBOARD: Alarm Status Overview
        # ========================================================================
        # AlarmStatusWidget documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk.aws_cloudwatch/AlarmStatusWidget.html
        dashboard = cloudwatch.Dashboard(
            self, f"{prefix}-AlarmDashboard",
            dashboard_name=f"{prefix}-Alarms"
        )
        for category in CATEGORIES:
            if not alarms_by_category[category]:
                continue
            dashboard.add_widgets(
                cloudwatch.AlarmStatusWidget(
                    title=f"[{env_name.upper()}] {DASHBOARD_TITLES[category]}",
                    alarms=alarms_by_category[category],
                    width=24,
                    height=6
                )
            )

        # ========================================================================
        # CLOUDFORMATION OUTPUTS
        # ========================================================================
        # CfnOutput documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk/CfnOutput.html
        CfnOutput(
            self, "AlertsTopicArn",
            value=self.alerts_topic.topic_arn,
            description=f"[{env_name.upper()}] SNS topic receiving alarm and OK notifications",
            export_name=f"{prefix}-AlertsTopicArn"
        )
        CfnOutput(
            self, "AlarmCount",
            value=str(len(self.alarms)),
            description=f"[{env_name.upper()}] Number of CloudWatch alarms in this stack"
        )

        # Synth-time summary, printed by `cdk synth`
        # Annotations documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk/Annotations.html
        summary = summarize_plan(plan)
        Annotations.of(self).add_info(
            f"{summary['total']} alarms for {env_name} "
            f"(alb={summary['alb']}, namespace={summary['namespace']}, "
            f"service={summary['service']}, node={summary['node']}) -> {topic_note}"
        )

    def _create_alarm(self, spec):
        metric = cloudwatch.Metric(
            namespace=spec["namespace"],
            metric_name=spec["metric_name"],
            dimensions_map=spec["dimensions"],
            statistic=spec["statistic"],
            period=Duration.minutes(spec["period_minutes"])
        )

        alarm = cloudwatch.Alarm(
            self, spec["alarm_name"],
            alarm_name=spec["alarm_name"],
            alarm_description=spec["description"],
            metric=metric,
            threshold=spec["threshold"],
            evaluation_periods=spec["evaluation_periods"],
            # ComparisonOperator documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk.aws_cloudwatch/ComparisonOperator.html
            comparison_operator=getattr(cloudwatch.ComparisonOperator, spec["comparison_operator"]),
            treat_missing_data=getattr(cloudwatch.TreatMissingData, spec["treat_missing_data"])
        )

        # Same topic for both transitions
        # SnsAction documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk.aws_cloudwatch_actions/SnsAction.html
        action = cloudwatch_actions.SnsAction(self.alerts_topic)
        alarm.add_alarm_action(action)
        alarm.add_ok_action(action)
        return alarm

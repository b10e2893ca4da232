#!/usr/bin/env python3
import os
import aws_cdk as cdk
from ahs_ehr_monitoring.constants import AWS_REGION, CONTEXT_ALERT_EMAIL, CONTEXT_ENVIRONMENTS
from ahs_ehr_monitoring.environments import name_prefix, selected_environments
from ahs_ehr_monitoring.monitoring_stack import MonitoringStack

# Initialize CDK application
# Documentation: https://docs.aws.amazon.com/cdk/api/v2/python/aws_cdk/App.html
app = cdk.App()

# Optional overrides: cdk synth -c alertEmail=ops@example.com -c environments=Dev
# Context documentation: https://docs.aws.amazon.com/cdk/v2/guide/context.html
alert_email = app.node.try_get_context(CONTEXT_ALERT_EMAIL)
env_names = selected_environments(app.node.try_get_context(CONTEXT_ENVIRONMENTS))

# One monitoring stack per environment (Dev, Staging)
for env_name in env_names:
    MonitoringStack(
        app,
        f"{name_prefix(env_name)}-Monitoring-Stack",
        env_name=env_name,
        alert_email=alert_email,
        env=cdk.Environment(
            # Account is retrieved from environment variables or AWS CLI config
            # Documentation: https://docs.aws.amazon.com/cdk/v2/guide/environments.html
            account=os.getenv('CDK_DEFAULT_ACCOUNT'),
            region=AWS_REGION  # Mumbai region
        )
    )

# Synthesize CloudFormation templates into cdk.out
app.synth()

"""CloudWatch alarm stacks for the AHS-EHR Dev and Staging environments."""

#!/usr/bin/env python3

import aws_cdk as cdk

from pipeline_stack import PipelineStack
from tutoring_stack import TutoringStack

app = cdk.App()
TutoringStack(
    app,
    "TutoringStack",
    approval_mode=app.node.try_get_context("booking_approval_mode") or "instant",
)

PipelineStack(app, "PipelineStack")

app.synth()

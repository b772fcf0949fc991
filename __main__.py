"""Pulumi program: GCP Cloud Function behind API Gateway."""

from service_kit.logging_utils import setup_logging
from service_kit.program import run


setup_logging(pulumi_engine=True)
run()

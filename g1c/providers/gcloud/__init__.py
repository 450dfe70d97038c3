"""Google Cloud provider backed by the gcloud CLI."""

from g1c.providers.gcloud.compute import GcloudManager

__all__ = ["GcloudManager"]

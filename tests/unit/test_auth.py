"""Unit tests for gcloud startup checks."""

from unittest.mock import MagicMock

import pytest

from g1c.providers.exceptions import ProviderUnavailableError
from g1c.providers.gcloud import auth
from g1c.providers.gcloud.compute import GcloudManager


def runner_for(outputs: dict[str, str]) -> MagicMock:
    """Return a runner answering by the first gcloud argument."""

    def run(command, **kwargs):
        result = MagicMock()
        result.returncode = 0
        result.stderr = ""
        result.stdout = outputs[command[1]]
        return result

    return MagicMock(side_effect=run)


def test_default_project():
    runner = runner_for({"config": "my-project\n"})

    assert auth.get_default_project(runner=runner) == "my-project"


@pytest.mark.parametrize("output", ["", "(unset)\n"])
def test_default_project_unset(output):
    runner = runner_for({"config": output})

    with pytest.raises(ProviderUnavailableError, match="No default project"):
        auth.get_default_project(runner=runner)


def test_check_gcloud_with_active_account():
    runner = runner_for(
        {
            "--version": "Google Cloud SDK 470.0.0\n",
            "auth": "ACTIVE  ACCOUNT\n*       dev@example.com\n",
        }
    )

    auth.check_gcloud(runner=runner)

    assert runner.call_count == 2


def test_check_gcloud_without_active_account():
    runner = runner_for({"--version": "Google Cloud SDK 470.0.0\n", "auth": "No credentialed accounts.\n"})

    with pytest.raises(ProviderUnavailableError, match="gcloud auth login"):
        auth.check_gcloud(runner=runner)


def test_check_compute_api_enabled():
    runner = runner_for({"services": "ENABLED\n"})

    auth.check_compute_api("my-project", runner=runner)

    command = runner.call_args[0][0]
    assert "--project" in command
    assert "my-project" in command


def test_check_compute_api_disabled():
    runner = runner_for({"services": ""})

    with pytest.raises(ProviderUnavailableError, match="not enabled"):
        auth.check_compute_api("my-project", runner=runner)


def test_gcloud_version_first_line():
    runner = runner_for({"--version": "Google Cloud SDK 470.0.0\nalpha 2024.01.01\n"})

    assert auth.get_gcloud_version(runner=runner) == "Google Cloud SDK 470.0.0"


def test_manager_check_access_runs_all_checks():
    runner = runner_for(
        {
            "--version": "Google Cloud SDK 470.0.0\n",
            "auth": "*  dev@example.com\n",
            "services": "ENABLED\n",
        }
    )

    GcloudManager(runner=runner).check_access("my-project")

    assert [call[0][0][1] for call in runner.call_args_list] == ["--version", "auth", "services"]

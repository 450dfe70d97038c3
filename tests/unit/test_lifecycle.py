"""Unit tests for one-shot lifecycle commands."""

import pytest

from tests.unit.fakes import FakeInstanceProvider
from tests.unit.fakes.fake_provider import make_instance

from g1c.constants import Action, InstanceStatus
from g1c.lifecycle import LifecycleManager, fit_column
from g1c.providers.exceptions import InstanceNotFoundError


@pytest.fixture
def manager(provider):
    return LifecycleManager(provider, "fake-project")


def test_list_prints_table(manager, capsys):
    manager.list()

    out = capsys.readouterr().out
    assert "Instances in fake-project:" in out
    assert "web-a" in out
    assert "TERMINATED" in out
    assert "10.0.0.2" in out
    assert "3 instances, 2 running" in out


def test_list_empty_project(capsys):
    LifecycleManager(FakeInstanceProvider([]), "empty").list()

    assert "No instances found in project empty" in capsys.readouterr().out


def test_list_truncates_long_names(capsys):
    provider = FakeInstanceProvider([make_instance("x" * 40, instance_id="1")])

    LifecycleManager(provider, "p").list()

    out = capsys.readouterr().out
    assert "x" * 23 + "…" in out
    assert "x" * 24 not in out


def test_list_honours_name_width(capsys):
    provider = FakeInstanceProvider(
        [make_instance("analytics-worker-7", instance_id="1", zone="northamerica-northeast1-a")]
    )

    LifecycleManager(provider, "p", name_width=10).list()

    out = capsys.readouterr().out
    assert "analytics…" in out
    assert "analytics-" not in out
    assert "northamerica-no…" in out


@pytest.mark.parametrize(
    "value,width,expected",
    [("web", 5, "web"), ("abcde", 5, "abcde"), ("abcdef", 5, "abcd…")],
)
def test_fit_column(value, width, expected):
    assert fit_column(value, width) == expected


def test_start_stopped_instance(manager, provider, capsys):
    manager.start("db-c")

    assert provider.action_calls == [("fake-project", "103", Action.START)]
    assert "Starting instance db-c" in capsys.readouterr().out


def test_start_running_instance_is_noop(manager, provider, capsys):
    manager.start("101")

    assert provider.action_calls == []
    assert "already running" in capsys.readouterr().out


def test_stop_running_instance(manager, provider):
    manager.stop("web-b")

    assert provider.action_calls == [("fake-project", "102", Action.STOP)]


def test_stop_stopped_instance_is_noop(manager, provider, capsys):
    manager.stop("db-c")

    assert provider.action_calls == []
    assert "already stopped" in capsys.readouterr().out


def test_restart_always_runs(manager, provider):
    manager.restart("db-c")

    assert provider.action_calls == [("fake-project", "103", Action.RESTART)]


def test_unknown_instance_raises(manager):
    with pytest.raises(InstanceNotFoundError):
        manager.stop("missing")


def test_info_prints_details(capsys):
    instance = make_instance(
        "web-1",
        InstanceStatus.RUNNING,
        "555",
        description="frontend",
        metadata={"env": "prod"},
        tags=["http-server"],
    )

    LifecycleManager(FakeInstanceProvider([instance]), "p").info("web-1")

    out = capsys.readouterr().out
    assert "Name:          web-1" in out
    assert "Instance ID:   555" in out
    assert "Tags:          http-server" in out
    assert "  env: prod" in out

"""Unit tests for console command helpers."""

import pytest

from hypervel_support.commands import CONSOLE_KERNEL, CallsCommands
from hypervel_support.errors import BindingResolutionError


class RecordingKernel:
    def __init__(self):
        self.calls = []

    def call(self, command, arguments):
        self.calls.append((command, arguments))
        return 0 if command != "fail" else 1


class DeployCommand(CallsCommands):
    def handle(self):
        self.call_silent("cache:clear")
        return self.call_silent("migrate", {"--force": True})


@pytest.fixture
def kernel(container):
    return container.instance(CONSOLE_KERNEL, RecordingKernel())


def test_call_silent_delegates_to_kernel(kernel):
    assert DeployCommand().handle() == 0
    assert kernel.calls == [("cache:clear", {}), ("migrate", {"--force": True})]


def test_call_silent_returns_exit_code(kernel):
    assert DeployCommand().call_silent("fail") == 1


def test_app_is_the_application_container(container):
    assert DeployCommand().app is container


def test_without_container_raises():
    with pytest.raises(BindingResolutionError):
        DeployCommand().call_silent("cache:clear")

import logging
import pytest
from ai_env.utils import io


class FakeShell:
    """Records commands instead of running them.

    ``failing`` / ``fail_once`` hold command tails; a command fails when it ends
    with one of them. ``pip_installed`` answers ``pip show`` and grows with every
    successful ``pip install``; ``system_installed`` answers ``dpkg -s``.
    """

    def __init__(self, pip_installed=(), system_installed=(), failing=(), fail_once=(), paths=None):
        self.pip_installed = set(pip_installed)
        self.system_installed = set(system_installed)
        self.failing = [list(f) for f in failing]
        self.fail_once = [list(f) for f in fail_once]
        self.paths = {"pip3": "/usr/bin/pip3", "python3": "/usr/bin/python3"} if paths is None else paths
        self.commands = []

    def _fails(self, cmd):
        for tail in self.fail_once:
            if cmd[-len(tail):] == tail:
                self.fail_once.remove(tail)
                return True
        return any(cmd[-len(tail):] == tail for tail in self.failing)

    def quiet(self, cmd):
        self.commands.append(list(cmd))
        if cmd[0] == "dpkg":
            return cmd[-1] in self.system_installed
        if cmd[1:4] == ["-m", "pip", "show"]:
            return cmd[-1] in self.pip_installed
        return not self._fails(cmd)

    def logged(self, cmd):
        self.commands.append(list(cmd))
        ok = not self._fails(cmd)
        if ok and cmd[1:4] == ["-m", "pip", "install"] and "--upgrade" not in cmd:
            self.pip_installed.add(cmd[-1])
        return ok

    def which(self, name):
        return self.paths.get(name)

    def ran(self, *fragment):
        fragment = list(fragment)
        n = len(fragment)
        return [c for c in self.commands if any(c[i:i + n] == fragment for i in range(len(c) - n + 1))]


@pytest.fixture
def fake_shell():
    return FakeShell()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root = logging.getLogger()
    for h in io._handlers:
        root.removeHandler(h)
        h.close()
    io._handlers.clear()

import subprocess
import sys

import pytest

from handoff.app import main


def test_app_help_runs():
    proc = subprocess.run(
        [sys.executable, "-m", "handoff.app", "-h"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert proc.returncode == 0
    out = proc.stdout + proc.stderr
    assert "main entrypoint" in out
    assert "run" in out


def test_run_help_runs():
    proc = subprocess.run(
        [sys.executable, "-m", "handoff.app", "run", "-h"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert proc.returncode == 0
    out = proc.stdout + proc.stderr
    assert "--iterations" in out
    assert "--pause-seconds" in out
    assert "--on-interrupt" in out


def test_short_run_traces_to_stderr():
    proc = subprocess.run(
        [sys.executable, "-m", "handoff.app", "run", "--iterations", "2", "--pause-seconds", "0"],
        capture_output=True,
        text=True,
        check=False,
        timeout=60,
    )
    assert proc.returncode == 0
    assert proc.stdout == ""
    lines = proc.stderr.splitlines()
    assert sum(1 for l in lines if l.startswith("sb: ")) == 2
    assert lines.count("Producer: locked sb") == 2
    assert lines[-1] == "Finished"


def test_main_in_process(capsys):
    main(["run", "--iterations", "1", "--pause-seconds", "0", "--buffer-name", "box"])
    err = capsys.readouterr().err.splitlines()
    assert "Consumer: locked box" in err
    assert err[-1] == "Finished"


def test_negative_iterations_rejected():
    with pytest.raises(SystemExit):
        main(["run", "--iterations", "-1"])

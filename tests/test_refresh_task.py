"""Tests for the loading refresh task."""
import time

import pytest

from conftest import wait_for
from gitbrowse.views.redraw import RedrawChannel
from gitbrowse.views.refresh_task import LoadingCommitsRefreshTask


def test_ticks_while_running(redraw):
    task = LoadingCommitsRefreshTask(0.01, redraw)

    task.start()
    assert task.running
    assert wait_for(lambda: redraw.pending() >= 3)

    task.stop()
    assert not task.running
    assert task.join(2)


def test_stop_sends_exactly_one_final_redraw(redraw):
    task = LoadingCommitsRefreshTask(10, redraw)
    task.start()

    task.stop()

    assert task.join(2)
    assert redraw.pending() == 1


def test_double_stop_is_noop(redraw):
    task = LoadingCommitsRefreshTask(10, redraw)
    task.start()

    task.stop()
    task.stop()

    assert task.join(2)
    assert redraw.pending() == 1


def test_stop_before_start_is_noop(redraw):
    task = LoadingCommitsRefreshTask(10, redraw)

    task.stop()

    assert not task.running
    assert task.join(0)
    assert redraw.pending() == 0


def test_start_twice_runs_one_timer(redraw):
    task = LoadingCommitsRefreshTask(10, redraw)
    task.start()
    task.start()

    task.stop()

    assert task.join(2)
    assert redraw.pending() == 1


def test_stop_does_not_block_on_full_redraw_buffer():
    redraw = RedrawChannel(maxsize=1)
    redraw.request()
    task = LoadingCommitsRefreshTask(0.01, redraw)
    task.start()
    time.sleep(0.05)

    started = time.time()
    task.stop()

    assert time.time() - started < 0.5
    assert task.join(2)
    assert redraw.pending() == 1


def test_rejects_non_positive_rate(redraw):
    with pytest.raises(ValueError):
        LoadingCommitsRefreshTask(0, redraw)

"""Tests for the sweep scheduler."""

from unittest.mock import patch

import pytest

from taskdeck.config import Config
from taskdeck.scheduler import setup_scheduler, sweep_job


class TestSetupScheduler:
    def test_adds_interval_job(self):
        scheduler = setup_scheduler(Config(sweep_interval_minutes=15))
        job = scheduler.get_job("lifecycle_sweep")
        assert job is not None
        assert job.trigger.interval.total_seconds() == 15 * 60

    def test_rejects_bad_interval(self):
        with pytest.raises(ValueError, match="interval"):
            setup_scheduler(Config(sweep_interval_minutes=0))


class TestSweepJob:
    @patch("taskdeck.scheduler.run_sweep")
    @patch("taskdeck.scheduler.get_repository")
    def test_runs_sweep_for_configured_user(self, mock_repo, mock_sweep):
        sweep_job(Config(user_id="u1", snapshot_file="x.json"))
        mock_sweep.assert_called_once_with(mock_repo.return_value, "u1")

    @patch("taskdeck.scheduler.run_sweep")
    @patch("taskdeck.scheduler.get_repository")
    def test_logs_failures(self, mock_repo, mock_sweep, caplog):
        mock_sweep.side_effect = RuntimeError("API down")
        sweep_job(Config(user_id="u1"))
        assert "API down" in caplog.text

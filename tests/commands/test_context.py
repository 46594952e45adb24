"""Tests for AppContext error emission."""

from pathlib import Path

import pytest

from upsertctl.commands._context import AppContext
from upsertctl.config.settings import UpsertSettings
from upsertctl.domain.outcomes import ErrorCode


class TestFail:
    def test_fail_exits_1_with_json_error(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        app = AppContext(UpsertSettings.from_cli(start=tmp_path, json_output=True))
        with pytest.raises(SystemExit) as exc_info:
            app.fail("upsert", ErrorCode.UNKNOWN_KIND, "Unknown table 'wands'", known=[])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert '"code": "UNKNOWN_KIND"' in captured.err
